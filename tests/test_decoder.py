import pytest

from spudformat.builder import SpudBuilder
from spudformat.decoder import SpudDecoder
from spudformat.types import EOF_MARKER, VERSION_BYTES, SpudError, SpudType


def _decode(builder):
    return list(SpudDecoder(builder.to_bytes()).lines())


def test_string_field():
    builder = SpudBuilder().add_string("greeting", "hello")
    assert _decode(builder) == ['"greeting": ', '"hello"']


def test_null_and_bools():
    builder = (
        SpudBuilder()
        .add_null("nothing")
        .add_bool("yes", True)
        .add_bool("no", False)
    )
    assert _decode(builder) == [
        '"nothing": ',
        "null",
        '"yes": ',
        "true",
        '"no": ',
        "false",
    ]


@pytest.mark.parametrize(
    "kind, value",
    [
        (SpudType.I8, -128),
        (SpudType.I8, 127),
        (SpudType.I16, -32768),
        (SpudType.I32, 2147483647),
        (SpudType.I64, -9223372036854775808),
        (SpudType.U8, 255),
        (SpudType.U16, 65535),
        (SpudType.U32, 4294967295),
        (SpudType.U64, 18446744073709551615),
    ],
)
def test_integer_round_trip(kind, value):
    builder = SpudBuilder().add_number("num", value, kind)
    assert _decode(builder) == ['"num": ', str(value)]


@pytest.mark.parametrize(
    "kind, value, expected",
    [
        (SpudType.F64, 2.5, "2.5"),
        (SpudType.F64, 1.0, "1"),
        (SpudType.F32, 0.1, "0.1"),
        (SpudType.F64, 1e20, "100000000000000000000"),
    ],
)
def test_float_formatting(kind, value, expected):
    builder = SpudBuilder().add_number("val", value, kind)
    assert _decode(builder)[1] == expected


def test_binary_blob():
    blob = bytes([0, 1, 2, 200, 255])
    builder = SpudBuilder().add_binary_blob("blob", blob)
    assert _decode(builder) == ['"blob": ', str(list(blob))]


def test_long_string_uses_wider_length():
    text = "x" * 300
    builder = SpudBuilder().add_string("long", text)
    assert _decode(builder) == ['"long": ', f'"{text}"']


def test_repeated_field_name_is_decoded_each_time():
    builder = SpudBuilder().add_bool("flag", True).add_bool("flag", False)
    assert _decode(builder) == ['"flag": ', "true", '"flag": ', "false"]


def test_field_names_match_builder():
    builder = SpudBuilder().add_null("first").add_string("second", "ok")
    decoder = SpudDecoder(builder.to_bytes())
    assert decoder.field_names == builder.field_names


def test_lines_can_be_iterated_twice():
    builder = SpudBuilder().add_string("name", "spud").add_number("age", 3, SpudType.U8)
    decoder = SpudDecoder(builder.to_bytes())
    expected = ['"name": ', '"spud"', '"age": ', "3"]
    first = list(decoder.lines())
    second = list(decoder.lines())
    assert first == expected
    assert second == expected


def test_unknown_type_is_reported():
    data = SpudBuilder().add_null("item").to_bytes()
    tampered = data[: -len(EOF_MARKER)] + bytes([SpudType.ARRAY_START]) + EOF_MARKER
    lines = list(SpudDecoder(tampered).lines())
    assert lines == [
        '"item": ',
        "null",
        f"Unknown type: {int(SpudType.ARRAY_START)}",
        "",
    ]


def test_decode_prints_and_returns(capsys):
    builder = SpudBuilder().add_string("word", "potato")
    text = SpudDecoder(builder.to_bytes()).decode()
    captured = capsys.readouterr()
    assert captured.out == text
    assert text.splitlines() == ['"word": ', '"potato"']


def test_from_path(tmp_path):
    builder = SpudBuilder().add_number("count", 42, SpudType.I32)
    target = builder.build_file(tmp_path, "sample")
    decoder = SpudDecoder.from_path(target)
    assert list(decoder.lines()) == ['"count": ', "42"]


def test_wrong_version_rejected():
    data = SpudBuilder().add_null("item").to_bytes()
    with pytest.raises(SpudError):
        SpudDecoder(b"X" * len(VERSION_BYTES) + data[len(VERSION_BYTES):])


def test_missing_field_list_end_rejected():
    with pytest.raises(SpudError):
        SpudDecoder(VERSION_BYTES + b"\x05ab\x02")


def test_unknown_field_id_rejected():
    data = VERSION_BYTES + b"\x02ab\x02\x01" + b"\x02\x07\x03" + EOF_MARKER
    with pytest.raises(SpudError):
        list(SpudDecoder(data).lines())


def test_invalid_bool_rejected():
    data = VERSION_BYTES + b"\x02ab\x02\x01" + b"\x02\x02\x04\x07" + EOF_MARKER
    with pytest.raises(SpudError):
        list(SpudDecoder(data).lines())


def test_invalid_length_tag_rejected():
    data = VERSION_BYTES + b"\x02ab\x02\x01" + b"\x02\x02\x0f\x05\x01a" + EOF_MARKER
    with pytest.raises(SpudError):
        list(SpudDecoder(data).lines())


def test_missing_end_marker_rejected():
    data = SpudBuilder().add_null("item").to_bytes()[: -len(EOF_MARKER)]
    with pytest.raises(SpudError):
        list(SpudDecoder(data).lines())