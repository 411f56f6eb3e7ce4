import pytest

from ldapwire.asn1 import (
    TAG_INTEGER,
    TAG_SEQUENCE,
    Asn1StructuralError,
    Asn1SyntaxError,
    LdapError,
    TagAndLength,
    TagClass,
    encode_base128_int,
    encode_bool,
    encode_int,
    encode_tag_and_length,
    parse_base128_int,
    parse_bool,
    parse_int32,
    parse_int64,
    parse_tag_and_length,
    size_base128_int,
    size_int,
    size_tag_and_length,
)

SIZE_CASES = [
    (TAG_SEQUENCE, 0, 2),
    (TAG_SEQUENCE, 127, 2),
    (TAG_SEQUENCE, 128, 3),
    (TAG_SEQUENCE, 255, 3),
    (TAG_SEQUENCE, 256, 4),
    (TAG_SEQUENCE, 65535, 4),
    (TAG_SEQUENCE, 65536, 5),
    (TAG_SEQUENCE, 16777215, 5),
]


@pytest.mark.parametrize("tag,length,expected", SIZE_CASES)
def test_size_tag_and_length(tag, length, expected):
    assert size_tag_and_length(tag, length) == expected


@pytest.mark.parametrize("tag,length,expected", SIZE_CASES)
def test_encoded_header_matches_size(tag, length, expected):
    encoded = encode_tag_and_length(TagClass.UNIVERSAL, True, tag, length)
    assert len(encoded) == expected


@pytest.mark.parametrize("tag", [0, 5, 30, 31, 127, 200, 5000])
@pytest.mark.parametrize("length", [0, 1, 127, 128, 300, 70000])
@pytest.mark.parametrize("cls", list(TagClass))
@pytest.mark.parametrize("compound", [True, False])
def test_tag_and_length_round_trip(tag, length, cls, compound):
    encoded = encode_tag_and_length(cls, compound, tag, length)
    assert len(encoded) == size_tag_and_length(tag, length)
    parsed, offset = parse_tag_and_length(encoded + b"\x00\x00", 0)
    assert parsed == TagAndLength(cls, tag, length, compound)
    assert offset == len(encoded)


def test_known_headers():
    assert encode_tag_and_length(TagClass.UNIVERSAL, True, TAG_SEQUENCE, 3) == bytes([0x30, 0x03])
    assert encode_tag_and_length(TagClass.APPLICATION, True, 0, 0x11) == bytes([0x60, 0x11])
    assert encode_tag_and_length(TagClass.CONTEXT_SPECIFIC, True, 3, 0x0A) == bytes([0xA3, 0x0A])
    assert encode_tag_and_length(TagClass.UNIVERSAL, False, TAG_INTEGER, 1) == bytes([0x02, 0x01])


def test_parse_integer_header():
    parsed, offset = parse_tag_and_length(bytes([0x02, 0x01, 0x09]), 0)
    assert parsed == TagAndLength(TagClass.UNIVERSAL, TAG_INTEGER, 1, False)
    assert offset == 2


def test_parse_at_offset():
    data = bytes([0x30, 0x03, 0x02, 0x01, 0x0F])
    parsed, offset = parse_tag_and_length(data, 2)
    assert parsed.tag == TAG_INTEGER
    assert parsed.length == 1
    assert offset == 4


def test_parse_indefinite_length():
    with pytest.raises(Asn1SyntaxError, match="indefinite length"):
        parse_tag_and_length(bytes([0x30, 0x80]), 0)


@pytest.mark.parametrize("data", [b"", bytes([0x30]), bytes([0x30, 0x82, 0x01])])
def test_parse_truncated(data):
    with pytest.raises(Asn1SyntaxError, match="truncated"):
        parse_tag_and_length(data, 0)


def test_parse_leading_zero_length():
    with pytest.raises(Asn1StructuralError, match="superfluous leading zeros"):
        parse_tag_and_length(bytes([0x30, 0x81, 0x00]), 0)


def test_expect_mismatches():
    header = TagAndLength(TagClass.UNIVERSAL, TAG_INTEGER, 1, False)
    with pytest.raises(Asn1SyntaxError, match="wrong tag class"):
        header.expect_class(TagClass.APPLICATION)
    with pytest.raises(Asn1SyntaxError, match="wrong tag value"):
        header.expect_tag(TAG_SEQUENCE)
    with pytest.raises(Asn1SyntaxError, match="wrong tag compound"):
        header.expect_compound(True)
    with pytest.raises(LdapError, match="^Expect: "):
        header.expect(TagClass.UNIVERSAL, TAG_INTEGER, True)


def test_expect_match_then_mismatch():
    header = TagAndLength(TagClass.APPLICATION, 0, 17, True)
    header.expect(TagClass.APPLICATION, 0, True)
    with pytest.raises(LdapError):
        header.expect(TagClass.APPLICATION, 1, True)


def test_error_messages_have_prefix():
    assert str(Asn1SyntaxError("x")) == "asn1: syntax error: x"
    assert str(Asn1StructuralError("y")) == "asn1: structure error: y"
    assert isinstance(Asn1SyntaxError("x"), LdapError)


def test_bool():
    assert parse_bool(b"\x00") is False
    assert parse_bool(b"\xff") is True
    assert encode_bool(True) == b"\xff"
    assert encode_bool(False) == b"\x00"


@pytest.mark.parametrize("data", [b"", b"\x01", b"\x00\x00"])
def test_bool_invalid(data):
    with pytest.raises(Asn1SyntaxError):
        parse_bool(data)


def test_parse_integers_from_wire():
    assert parse_int64(bytes([0x09])) == 0x09
    assert parse_int64(bytes([0x09, 0x87])) == 0x0987
    assert parse_int64(bytes([0x09, 0x87, 0x65])) == 0x098765
    assert parse_int32(bytes([0x09, 0x87, 0x65, 0x43])) == 0x09876543
    assert parse_int32(bytes([0x7F, 0xFF, 0xFF, 0xFF])) == 0x7FFFFFFF


def test_parse_negative():
    assert parse_int64(b"\xff") == -1
    assert parse_int32(b"\x80\x00\x00\x00") == -(2**31)


def test_integer_too_large():
    with pytest.raises(Asn1StructuralError):
        parse_int64(b"\x01" * 9)
    with pytest.raises(Asn1StructuralError):
        parse_int32(b"\x00\x80\x00\x00\x00")


@pytest.mark.parametrize("value", [0, 1, 127, 128, 255, 256, -1, -128, -129, 2**31 - 1, -(2**31)])
def test_int_round_trip(value):
    encoded = encode_int(value)
    assert len(encoded) == size_int(value)
    assert parse_int32(encoded) == value


def test_int_is_minimal():
    assert encode_int(0) == b"\x00"
    assert encode_int(0x0F) == b"\x0f"


@pytest.mark.parametrize("value", [0, 1, 127, 128, 16383, 16384, 2**28])
def test_base128_round_trip(value):
    encoded = encode_base128_int(value)
    assert len(encoded) == size_base128_int(value)
    decoded, offset = parse_base128_int(b"\xaa" + encoded, 1)
    assert decoded == value
    assert offset == len(encoded) + 1


def test_base128_errors():
    with pytest.raises(Asn1SyntaxError, match="truncated"):
        parse_base128_int(b"\x81\x82", 0)
    with pytest.raises(Asn1StructuralError, match="too large"):
        parse_base128_int(b"\x81" * 6 + b"\x01", 0)
    with pytest.raises(ValueError):
        encode_base128_int(-1)


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        encode_tag_and_length(TagClass.UNIVERSAL, True, TAG_SEQUENCE, -1)