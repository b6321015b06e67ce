"""Single-pass schema-to-head-record conversion."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from headrecord.record import build_head_record, encode_head_record, write_head_record
from headrecord.schema import FieldDescriptor, load_schema


@dataclass
class ConversionResult:
    input_path: Path
    output_path: Path
    fields: list[FieldDescriptor]
    encoded_bytes: int


def convert(
    input_path: Path,
    output_dir: Path | None = None,
    on_field: Callable[[FieldDescriptor], None] | None = None,
) -> ConversionResult:
    """Read ``input_path`` and write ``headRecord.cbor`` into ``output_dir`` (default: cwd).

    Raises ``FatalConversionError`` subclasses for input problems, before anything
    is written, and ``OutputWriteError`` if only the final write fails.
    """
    fields = load_schema(input_path, on_field=on_field)
    payload = encode_head_record(build_head_record(fields))
    output_path = write_head_record(payload, output_dir=output_dir)
    return ConversionResult(
        input_path=input_path,
        output_path=output_path,
        fields=fields,
        encoded_bytes=len(payload),
    )
