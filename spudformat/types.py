"""Type tags and shared constants of the spud binary format."""

from __future__ import annotations

from enum import IntEnum

SPUD_VERSION = "SPUD-0.1.0"
"""Version string written at the very start of every spud file."""

VERSION_BYTES = SPUD_VERSION.encode("utf-8")

EOF_MARKER = b"\xde\xad\xbe\xef"
"""Four bytes that close every spud file."""


class SpudError(Exception):
    """Raised when spud data cannot be built or decoded."""


class SpudType(IntEnum):
    """One-byte tags that introduce each element of a spud document."""

    FIELD_NAME_LIST_END = 0x01
    FIELD_NAME_ID = 0x02
    NULL = 0x03
    BOOL = 0x04
    I8 = 0x05
    I16 = 0x06
    I32 = 0x07
    I64 = 0x08
    U8 = 0x09
    U16 = 0x0A
    U32 = 0x0B
    U64 = 0x0C
    F32 = 0x0D
    F64 = 0x0E
    STRING = 0x0F
    ARRAY_START = 0x10
    ARRAY_END = 0x11
    OBJECT_START = 0x12
    OBJECT_END = 0x13
    BINARY_BLOB = 0x14

    @classmethod
    def from_byte(cls, value: int) -> SpudType | None:
        """Return the tag for ``value``, or None if the byte is not a known tag."""
        try:
            return cls(value)
        except ValueError:
            return None