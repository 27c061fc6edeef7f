"""Incremental construction of spud documents."""

from __future__ import annotations

import struct
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

_LENGTH_KINDS: tuple[tuple[SpudType, int], ...] = (
    (SpudType.U8, 0xFF),
    (SpudType.U16, 0xFFFF),
    (SpudType.U32, 0xFFFF_FFFF),
    (SpudType.U64, 0xFFFF_FFFF_FFFF_FFFF),
)

_FIRST_FIELD_ID = 2
_MAX_FIELD_ID = 0xFF
_MAX_FIELD_NAME_LENGTH = 0xFF


class SpudBuilder:
    """Collects fields and serialises them into the spud format.

    Every ``add_*`` method returns the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self.data = bytearray()
        self.field_names: dict[str, int] = {}

    def _field_id(self, field_name: str) -> int:
        existing = self.field_names.get(field_name)
        if existing is not None:
            return existing
        if len(field_name.encode("utf-8")) > _MAX_FIELD_NAME_LENGTH:
            raise SpudError(
                f"field name {field_name!r} is longer than {_MAX_FIELD_NAME_LENGTH} bytes"
            )
        new_id = _FIRST_FIELD_ID + len(self.field_names)
        if new_id > _MAX_FIELD_ID:
            raise SpudError("too many distinct field names")
        self.field_names[field_name] = new_id
        return new_id

    def _add_field_name(self, field_name: str) -> None:
        self.data += bytes((SpudType.FIELD_NAME_ID, self._field_id(field_name)))

    def _add_value_length(self, length: int) -> None:
        for kind, limit in _LENGTH_KINDS:
            if length <= limit:
                self.data.append(kind)
                self.data += struct.pack(_NUMBER_FORMATS[kind], length)
                return
        raise SpudError(f"value of length {length} is too long to encode")

    def add_null(self, field_name: str) -> SpudBuilder:
        """Add a null field."""
        self._add_field_name(field_name)
        self.data.append(SpudType.NULL)
        return self

    def add_bool(self, field_name: str, value: bool) -> SpudBuilder:
        """Add a boolean field."""
        self._add_field_name(field_name)
        self.data += bytes((SpudType.BOOL, 1 if value else 0))
        return self

    def add_number(self, field_name: str, value: int | float, kind: SpudType) -> SpudBuilder:
        """Add a number stored as the numeric type ``kind`` (I8 … F64)."""
        try:
            fmt = _NUMBER_FORMATS[SpudType(kind)]
        except (ValueError, KeyError):
            raise SpudError(f"{kind!r} is not a numeric spud type") from None
        try:
            encoded = struct.pack(fmt, value)
        except (struct.error, OverflowError) as exc:
            raise SpudError(
                f"cannot store {value!r} as {SpudType(kind).name}: {exc}"
            ) from exc
        self._add_field_name(field_name)
        self.data.append(kind)
        self.data += encoded
        return self

    def add_string(self, field_name: str, value: str) -> SpudBuilder:
        """Add a UTF-8 string field, prefixed with its byte length."""
        encoded = value.encode("utf-8")
        self._add_field_name(field_name)
        self.data.append(SpudType.STRING)
        self._add_value_length(len(encoded))
        self.data += encoded
        return self

    def add_binary_blob(self, field_name: str, value: bytes) -> SpudBuilder:
        """Add a raw byte field, prefixed with its length."""
        blob = bytes(value)
        self._add_field_name(field_name)
        self.data.append(SpudType.BINARY_BLOB)
        self._add_value_length(len(blob))
        self.data += blob
        return self

    def to_bytes(self) -> bytes:
        """Return the complete document: version, field name table, data, end marker."""
        out = bytearray(VERSION_BYTES)
        for name, field_id in self.field_names.items():
            encoded = name.encode("utf-8")
            out.append(len(encoded))
            out += encoded
            out.append(field_id)
        out.append(SpudType.FIELD_NAME_LIST_END)
        out += self.data
        out += EOF_MARKER
        return bytes(out)

    def build_file(self, path: str | Path, file_name: str) -> Path:
        """Write the document to ``<path>/<file_name>.spud`` and return that path."""
        target = Path(path) / f"{file_name}.spud"
        target.write_bytes(self.to_bytes())
        return target