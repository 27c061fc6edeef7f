"""Reading spud documents back into a readable listing."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterator
from decimal import Decimal
from pathlib import Path

from .types import EOF_MARKER, VERSION_BYTES, SpudError, SpudType

_NUMBER_FORMATS: dict[SpudType, str] = {
    SpudType.I8: "<b",
    SpudType.I16: "<h",
    SpudType.I32: "<i",
    SpudType.I64: "<q",
    SpudType.U8: "<B",
    SpudType.U16: "<H",
    SpudType.U32: "<I",
    SpudType.U64: "<Q",
    SpudType.F32: "<f",
    SpudType.F64: "<d",
}

_LENGTH_TAGS = (SpudType.U8, SpudType.U16, SpudType.U32, SpudType.U64)


def _plain_decimal(text: str) -> str:
    """Render a numeric string in positional notation without trailing zeros."""
    rendered = format(Decimal(text), "f")
    if "." in rendered:
        rendered = rendered.rstrip("0").rstrip(".")
    return rendered


def _format_float(value: float, single: bool) -> str:
    """Shortest round-tripping decimal form, never in exponent notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if not single:
        return _plain_decimal(repr(value))
    for precision in range(1, 10):
        candidate = f"{value:.{precision}g}"
        if struct.unpack("<f", struct.pack("<f", float(candidate)))[0] == value:
            return _plain_decimal(candidate)
    return _plain_decimal(repr(value))


def _parse_field_table(rest: bytes) -> tuple[dict[str, int], bytes]:
    """Split the field name table off ``rest``; return the names and the remaining data."""
    names: dict[str, int] = {}
    cursor = 0
    try:
        while True:
            length = rest[cursor]
            start = cursor + 1
            end = start + length
            if end >= len(rest):
                raise IndexError(end)
            names[rest[start:end].decode("utf-8")] = rest[end]
            cursor = end + 1
            if rest[cursor] == SpudType.FIELD_NAME_LIST_END:
                break
    except IndexError:
        raise SpudError("invalid spud file, truncated field name table") from None
    except UnicodeDecodeError as exc:
        raise SpudError(f"invalid field name in spud file: {exc}") from exc
    return names, rest[cursor + 1 :]


class _Reader:
    """Cursor over the data section of a document."""

    def __init__(self, content: bytes) -> None:
        self.content = content
        self.index = 0

    @property
    def current(self) -> int:
        try:
            return self.content[self.index]
        except IndexError:
            raise SpudError("index out of bounds, decoding failed") from None

    def advance(self, steps: int) -> None:
        if self.index + steps >= len(self.content):
            raise SpudError("index out of bounds, decoding failed")
        self.index += steps

    def read(self, count: int) -> bytes:
        chunk = self.content[self.index : self.index + count]
        self.advance(count)
        return chunk

    def peek_slice(self, count: int) -> bytes:
        if self.index + count > len(self.content):
            raise SpudError("index out of bounds, decoding failed")
        return self.content[self.index : self.index + count]

    def at_end_marker(self) -> bool:
        return self.content[self.index : self.index + len(EOF_MARKER)] == EOF_MARKER


class SpudDecoder:
    """Decodes a complete spud document held in memory."""

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if data[: len(VERSION_BYTES)] != VERSION_BYTES:
            raise SpudError("invalid spud file")
        rest = data[len(VERSION_BYTES) :]
        if SpudType.FIELD_NAME_LIST_END not in rest:
            raise SpudError("invalid spud file, missing FieldNameListEnd byte")
        self.field_names, self._content = _parse_field_table(rest)
        self._names_by_id = {fid: name for name, fid in self.field_names.items()}

    @classmethod
    def from_path(cls, path: str | Path) -> SpudDecoder:
        """Create a decoder from the contents of the file at ``path``."""
        return cls(Path(path).read_bytes())

    def _field_name(self, field_id: int) -> str:
        try:
            return self._names_by_id[field_id]
        except KeyError:
            raise SpudError(f"unknown field name id: {field_id}") from None

    def lines(self) -> Iterator[str]:
        """Yield the decoded listing one line at a time."""
        reader = _Reader(self._content)
        while True:
            tag_byte = reader.current
            tag = SpudType.from_byte(tag_byte)
            steps = 0

            if tag is SpudType.FIELD_NAME_ID:
                reader.advance(1)
                line = f'"{self._field_name(reader.current)}": '
                steps = 1
            elif tag is SpudType.NULL:
                line = "null"
                steps = 1
            elif tag is SpudType.BOOL:
                reader.advance(1)
                flag = reader.current
                if flag not in (0, 1):
                    raise SpudError(f"unknown bool value: {flag}")
                line = "true" if flag else "false"
                steps = 1
            elif tag in _NUMBER_FORMATS:
                fmt = _NUMBER_FORMATS[tag]
                reader.advance(1)
                (value,) = struct.unpack(fmt, reader.read(struct.calcsize(fmt)))
                if tag in (SpudType.F32, SpudType.F64):
                    line = _format_float(value, tag is SpudType.F32)
                else:
                    line = str(value)
            elif tag in (SpudType.STRING, SpudType.BINARY_BLOB):
                reader.advance(1)
                length_tag = SpudType.from_byte(reader.current)
                if length_tag not in _LENGTH_TAGS:
                    raise SpudError("expected U8, U16, U32 or U64, but got an unknown token")
                fmt = _NUMBER_FORMATS[length_tag]
                reader.advance(1)
                (length,) = struct.unpack(fmt, reader.read(struct.calcsize(fmt)))
                payload = reader.peek_slice(length)
                if tag is SpudType.STRING:
                    try:
                        line = f'"{payload.decode("utf-8")}"'
                    except UnicodeDecodeError as exc:
                        raise SpudError(f"invalid UTF-8 in string value: {exc}") from exc
                else:
                    line = str(list(payload))
                steps = length
            else:
                if reader.at_end_marker():
                    return
                yield f"Unknown type: {tag_byte}"
                reader.advance(1)
                line = ""

            yield line
            reader.advance(steps)

    def decode(self) -> str:
        """Print the decoded listing and return it as text."""
        parts: list[str] = []
        for line in self.lines():
            print(line)
            parts.append(line + "\n")
        return "".join(parts)