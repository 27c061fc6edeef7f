# spudformat

`spudformat` writes and reads SPUD files. SPUD is a small binary format for
records of named values. Every value carries a one-byte type tag. Field names
are stored once in a header table, and the body refers to them by a one-byte id.

The package uses only the standard library.

## Format at a glance

A SPUD file has these parts, in this order:

1. The version marker `SPUD-0.1.0` (`spudformat.types.SPUD_VERSION`).
2. The field-name table. Each entry is a length byte, the name's UTF-8 bytes
   and the field's id. The table ends with a `FIELD_NAME_LIST_END` byte (`0x01`).
3. The body. It is a sequence of `FIELD_NAME_ID` references (`0x02` followed
   by the id), each followed by a tagged value.
4. The end marker `DE AD BE EF` (`spudformat.types.EOF_MARKER`).

These value types are supported:

| Tag            | Type                                       |
|----------------|--------------------------------------------|
| `0x03`         | null                                       |
| `0x04`         | bool (one byte, `0` or `1`)                |
| `0x05`–`0x08`  | signed integers: 8, 16, 32, 64 bit         |
| `0x09`–`0x0C`  | unsigned integers: 8, 16, 32, 64 bit       |
| `0x0D`, `0x0E` | 32- and 64-bit floats                      |
| `0x0F`         | UTF-8 string with a length prefix          |
| `0x14`         | binary blob with a length prefix           |

All numbers are little-endian. The length of a string or blob is written as a
tagged unsigned integer, using the smallest of U8, U16, U32 and U64 that can
hold it.

`spudformat.types.SpudType` is an `IntEnum` of all tags.
`SpudType.from_byte(value)` returns the tag for a byte, or `None` if the byte
is not a known tag.

## Building a file

```python
from spudformat.builder import SpudBuilder
from spudformat.types import SpudType

builder = SpudBuilder()
builder.add_null("nothing")
builder.add_bool("active", True)
builder.add_number("count", 42, SpudType.U8)
builder.add_number("offset", -1200, SpudType.I32)
builder.add_number("ratio", 0.5, SpudType.F64)
builder.add_string("name", "potato")
builder.add_binary_blob("raw", b"\x00\x01\x02")

data = builder.to_bytes()                    # the complete encoded file
path = builder.build_file("out", "example")  # writes out/example.spud, returns the Path
```

Every `add_*` method returns the builder, so calls can be chained.
`build_file` does not create the directory, so it must already exist.

`add_number` takes the storage type as a `SpudType` member, one of `I8`
through `F64`. Field ids are handed out from 2 upward in the order that names
first appear. Adding the same name again reuses its id. The builder raises
`spudformat.types.SpudError` in these cases:

- the number type is not a numeric tag;
- the value does not fit the chosen type;
- a field name is longer than 255 UTF-8 bytes;
- more than 254 distinct field names are used.

## Decoding a file

```python
from spudformat.decoder import SpudDecoder

decoder = SpudDecoder(data)          # or SpudDecoder.from_path("out/example.spud")
for line in decoder.lines():
    print(line)
```

`lines()` yields a readable listing. A field reference becomes a line such as
`"count": `, and the line after it holds the value. Values are shown as
follows:

- null as `null`;
- bools as `true` or `false`;
- integers in decimal;
- floats in their shortest round-tripping positional form, or as `NaN`,
  `inf` or `-inf`;
- strings in double quotes;
- blobs as a list of byte values, for example `[0, 1, 2]`.

An unrecognised tag byte yields `Unknown type: <byte>` followed by an empty
line, and decoding continues. Decoding stops at the end marker.

`decode()` prints the listing to standard output and also returns it as one
string.

`SpudDecoder.field_names` maps each name in the table to its id. Malformed
input raises `SpudError`. This covers:

- a wrong version marker;
- a missing or truncated field-name table;
- an unknown field id;
- a bool byte other than 0 or 1;
- a bad length tag;
- invalid UTF-8;
- data that ends too early.

## What it does not do

- Arrays and objects have tags in `SpudType` (`ARRAY_START`, `ARRAY_END`,
  `OBJECT_START`, `OBJECT_END`). The builder cannot write them, and the
  decoder treats them as unknown types.
- The decoder produces a text listing, not Python values.
- A document with no fields cannot be decoded. The field-name table must hold
  at least one entry.
- There is no command-line tool. Use the classes from Python.