"""Build, encode, and write the CBOR head record.

A head record maps every schema field to ``{"type": <tag>, "values": b""}``.
``values`` is a CBOR byte string (major type 2), which is why the output is
CBOR rather than JSON. It is always empty here.
"""

from __future__ import annotations

from pathlib import Path

import cbor2

from headrecord.schema import TYPE_KEY, FieldDescriptor, HeadRecordError

HEAD_RECORD_FILENAME = "headRecord.cbor"
VALUES_KEY = "values"

HeadRecord = dict[str, dict[str, str | bytes]]


class OutputWriteError(HeadRecordError):
    """The head record could not be written. Reported, not fatal."""


def build_head_record(fields: list[FieldDescriptor]) -> HeadRecord:
    record: HeadRecord = {}
    for desc in fields:
        record[desc.name] = {TYPE_KEY: desc.type, VALUES_KEY: b""}
    return record


def encode_head_record(record: HeadRecord) -> bytes:
    # Definite-length, shortest-form encoding; map order follows the dict.
    return cbor2.dumps(record)


def write_head_record(payload: bytes, output_dir: Path | None = None) -> Path:
    """Write encoded bytes to ``headRecord.cbor``, replacing any existing file."""
    path = (output_dir or Path.cwd()) / HEAD_RECORD_FILENAME
    try:
        with path.open("wb") as f:
            f.write(payload)
    except OSError as exc:
        raise OutputWriteError(f"Couldn't write file {path}: {exc.strerror or exc}") from exc
    return path
