"""Schema input: read a JSON field description and check its shape.

The input is a JSON object mapping field names to descriptor objects. Each
descriptor must carry a ``type`` string; any other keys are ignored. The type
tag itself is not checked against a fixed set.

Every failure raised here is fatal for a conversion run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import orjson

TYPE_KEY = "type"


class HeadRecordError(Exception):
    """Base class for conversion failures."""


class FatalConversionError(HeadRecordError):
    """Raised for any failure before the head record is written."""


class InputFileError(FatalConversionError):
    pass


class SchemaParseError(FatalConversionError):
    pass


class SchemaShapeError(FatalConversionError):
    pass


@dataclass
class FieldDescriptor:
    name: str
    type: str
    extra: dict[str, Any] = field(default_factory=dict)


def read_schema_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputFileError(f"couldn't open input file: {path}") from exc


def parse_schema(data: bytes) -> dict[str, Any]:
    """Parse JSON and require an object at the top level."""
    try:
        document = orjson.loads(data)
    except orjson.JSONDecodeError as exc:
        raise SchemaParseError(f"input is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise SchemaShapeError(
            f"top-level JSON value must be an object, got {type(document).__name__}"
        )
    return document


def field_descriptors(
    document: dict[str, Any], on_field: Callable[[FieldDescriptor], None] | None = None
) -> list[FieldDescriptor]:
    """Turn each member of the schema object into a descriptor, in document order.

    ``on_field`` sees each descriptor as soon as it passes its checks, so fields
    ahead of a bad one are reported before the error is raised.
    """
    fields: list[FieldDescriptor] = []
    for name, value in document.items():
        if not isinstance(value, dict):
            raise SchemaShapeError(f"field '{name}' must be an object")
        if TYPE_KEY not in value:
            raise SchemaShapeError(f"field '{name}': required key missing: '{TYPE_KEY}'")
        tag = value[TYPE_KEY]
        if not isinstance(tag, str):
            raise SchemaShapeError(f"field '{name}': '{TYPE_KEY}' must be a string")
        extra = {k: v for k, v in value.items() if k != TYPE_KEY}
        desc = FieldDescriptor(name=name, type=tag, extra=extra)
        if on_field is not None:
            on_field(desc)
        fields.append(desc)
    return fields


def load_schema(
    path: Path, on_field: Callable[[FieldDescriptor], None] | None = None
) -> list[FieldDescriptor]:
    return field_descriptors(parse_schema(read_schema_bytes(path)), on_field=on_field)
