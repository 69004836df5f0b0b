"""FLDX: compact binary encoding of a panel field.

Layout (little endian)::

    b"FLDX"  magic
    u8       version (1)
    u32      width
    u32      height
    u8 * w*h panel kind ordinals, row-major
"""
from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .field import Field
from .panels import EMPTY_PANEL, Panel, PanelKind

MAGIC = b"FLDX"
VERSION = 1
_HEADER = struct.Struct("<4sBII")


class FieldFormatError(ValueError):
    """Raised when FLDX data is truncated or malformed."""


def encode(field: Field, stream: BinaryIO) -> None:
    width, height = field.size
    stream.write(_HEADER.pack(MAGIC, VERSION, width, height))
    stream.write(bytes(panel.kind.ordinal for _, _, panel in field))


def decode(stream: BinaryIO) -> Field:
    header = stream.read(_HEADER.size)
    if len(header) != _HEADER.size:
        raise FieldFormatError("truncated FLDX header")
    magic, version, width, height = _HEADER.unpack(header)
    if magic != MAGIC:
        raise FieldFormatError(f"bad FLDX magic {magic!r}")
    if version != VERSION:
        raise FieldFormatError(f"unsupported FLDX version {version}")
    count = width * height
    body = stream.read(count)
    if len(body) != count:
        raise FieldFormatError(f"FLDX body holds {len(body)} panels, expected {count}")
    if stream.read(1):
        raise FieldFormatError("trailing bytes after FLDX body")
    # Intern one Panel per kind; the body is usually dominated by empties.
    panels = {PanelKind.EMPTY.ordinal: EMPTY_PANEL}
    cells = []
    for ordinal in body:
        panel = panels.get(ordinal)
        if panel is None:
            try:
                panel = Panel(PanelKind.from_ordinal(ordinal))
            except ValueError as exc:
                raise FieldFormatError(str(exc)) from exc
            panels[ordinal] = panel
        cells.append(panel)
    return Field(width, height, cells)


def encode_bytes(field: Field) -> bytes:
    buf = io.BytesIO()
    encode(field, buf)
    return buf.getvalue()


def decode_bytes(data: bytes) -> Field:
    return decode(io.BytesIO(data))


__all__ = ["FieldFormatError", "encode", "decode", "encode_bytes", "decode_bytes", "MAGIC", "VERSION"]
