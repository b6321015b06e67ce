from pathlib import Path

import cbor2
import pytest

from headrecord.record import (
    HEAD_RECORD_FILENAME,
    OutputWriteError,
    build_head_record,
    encode_head_record,
    write_head_record,
)
from headrecord.schema import FatalConversionError, FieldDescriptor

HAPPY_PATH_CBOR = (
    b"\xa2"
    b"\x6a_timestamp"
    b"\xa2\x64type\x63u64\x66values\x40"
    b"\x6dnumeric_field"
    b"\xa2\x64type\x63f32\x66values\x40"
)


def _fields() -> list[FieldDescriptor]:
    return [
        FieldDescriptor(name="_timestamp", type="u64"),
        FieldDescriptor(name="numeric_field", type="f32", extra={"unit": "uSv/h"}),
    ]


def test_build_head_record_shape():
    record = build_head_record(_fields())
    assert record == {
        "_timestamp": {"type": "u64", "values": b""},
        "numeric_field": {"type": "f32", "values": b""},
    }
    assert list(record) == ["_timestamp", "numeric_field"]
    for entry in record.values():
        assert list(entry) == ["type", "values"]


def test_encode_uses_byte_string_for_values():
    encoded = encode_head_record(build_head_record(_fields()))
    assert encoded == HAPPY_PATH_CBOR
    decoded = cbor2.loads(encoded)
    assert isinstance(decoded["_timestamp"]["values"], bytes)
    assert decoded["_timestamp"]["values"] == b""


def test_encode_preserves_non_sorted_order():
    fields = [FieldDescriptor(name=n, type="u8") for n in ("zz", "a", "mmm")]
    decoded = cbor2.loads(encode_head_record(build_head_record(fields)))
    assert list(decoded) == ["zz", "a", "mmm"]


def test_encode_empty_record():
    assert encode_head_record({}) == b"\xa0"


def test_write_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / HEAD_RECORD_FILENAME
    target.write_bytes(b"stale content that is longer than the record")
    path = write_head_record(b"\xa0", output_dir=tmp_path)
    assert path == target
    assert target.read_bytes() == b"\xa0"


def test_write_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    write_head_record(b"\xa0")
    assert (tmp_path / HEAD_RECORD_FILENAME).read_bytes() == b"\xa0"


def test_write_failure_is_not_fatal_error(tmp_path: Path) -> None:
    (tmp_path / HEAD_RECORD_FILENAME).mkdir()
    with pytest.raises(OutputWriteError, match="Couldn't write file") as excinfo:
        write_head_record(b"\xa0", output_dir=tmp_path)
    assert not isinstance(excinfo.value, FatalConversionError)
