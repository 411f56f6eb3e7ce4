"""BER/DER building blocks used by the LDAP message codec.

Covers tag/length headers, booleans, integers and base-128 integers, and the
error types raised while decoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

TAG_BOOLEAN = 1
TAG_INTEGER = 2
TAG_OCTET_STRING = 4
TAG_ENUM = 10
TAG_SEQUENCE = 16
TAG_SET = 17
TAG_GENERAL_STRING = 27

COMPOUND = True
NOT_COMPOUND = False

TAG_NAMES = {
    TAG_BOOLEAN: "BOOLEAN",
    TAG_INTEGER: "INTEGER",
    TAG_OCTET_STRING: "OCTET STRING",
    TAG_ENUM: "ENUM",
    TAG_SEQUENCE: "SEQUENCE",
    TAG_SET: "SET",
}

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


class LdapError(Exception):
    """An LDAP message could not be read or written."""


class Asn1SyntaxError(LdapError):
    """The encoded ASN.1 data is invalid."""

    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"asn1: syntax error: {msg}")


class Asn1StructuralError(LdapError):
    """The ASN.1 data is valid but does not fit the expected value."""

    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"asn1: structure error: {msg}")


class TagClass(IntEnum):
    """The class bits of an ASN.1 identifier octet."""

    UNIVERSAL = 0
    APPLICATION = 1
    CONTEXT_SPECIFIC = 2
    PRIVATE = 3


CLASS_NAMES = {
    TagClass.UNIVERSAL: "UNIVERSAL",
    TagClass.APPLICATION: "APPLICATION",
    TagClass.CONTEXT_SPECIFIC: "CONTEXT SPECIFIC",
}

COMPOUND_NAMES = {True: "COMPOUND", False: "NOT COMPOUND"}


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class TagAndLength:
    """A decoded identifier and definite length."""

    cls: TagClass
    tag: int
    length: int
    compound: bool

    def expect(self, cls: int, tag: int, compound: bool) -> None:
        """Raise LdapError unless class, tag and form all match."""
        try:
            self.expect_class(cls)
            self.expect_tag(tag)
            self.expect_compound(compound)
        except Asn1SyntaxError as err:
            raise LdapError(f"Expect: {err}.") from err

    def expect_class(self, cls: int) -> None:
        if int(cls) != int(self.cls):
            raise Asn1SyntaxError(
                f"ExpectClass: wrong tag class: got {int(self.cls)} "
                f"({CLASS_NAMES.get(self.cls, '')}), expected {int(cls)} "
                f"({CLASS_NAMES.get(cls, '')})"
            )

    def expect_tag(self, tag: int) -> None:
        if tag != self.tag:
            raise Asn1SyntaxError(
                f"ExpectTag: wrong tag value: got {self.tag} "
                f"({TAG_NAMES.get(self.tag, '')}), expected {tag} "
                f"({TAG_NAMES.get(tag, '')})"
            )

    def expect_compound(self, compound: bool) -> None:
        if bool(compound) != self.compound:
            raise Asn1SyntaxError(
                f"ExpectCompound: wrong tag compound: got {_bool_text(self.compound)} "
                f"({COMPOUND_NAMES[self.compound]}), expected {_bool_text(bool(compound))} "
                f"({COMPOUND_NAMES[bool(compound)]})"
            )


def parse_tag_and_length(data: bytes, offset: int = 0) -> tuple[TagAndLength, int]:
    """Decode an identifier and length at ``offset``; return it and the new offset."""
    if offset >= len(data):
        raise Asn1SyntaxError("truncated tag or length")
    first = data[offset]
    offset += 1
    cls = TagClass(first >> 6)
    compound = bool(first & 0x20)
    tag = first & 0x1F
    if tag == 0x1F:
        tag, offset = parse_base128_int(data, offset)
    if offset >= len(data):
        raise Asn1SyntaxError("truncated tag or length")
    octet = data[offset]
    offset += 1
    if not octet & 0x80:
        length = octet & 0x7F
    else:
        count = octet & 0x7F
        if count == 0:
            raise Asn1SyntaxError("indefinite length found (not DER)")
        chunk = data[offset:offset + count]
        length = 0
        for octet in chunk:
            if length >= 1 << 23:
                raise Asn1StructuralError("length too large")
            length = (length << 8) | octet
            if length == 0:
                raise Asn1StructuralError("superfluous leading zeros in length")
        if len(chunk) < count:
            raise Asn1SyntaxError("truncated tag or length")
        offset += count
    return TagAndLength(cls, tag, length, compound), offset


def parse_bool(data: bytes) -> bool:
    """Decode DER boolean content: 0x00 or 0xFF."""
    if len(data) > 1:
        raise Asn1SyntaxError("invalid boolean: should be encoded on one byte only")
    if not data:
        raise Asn1SyntaxError("invalid boolean: no data to read")
    if data[0] == 0x00:
        return False
    if data[0] == 0xFF:
        return True
    raise Asn1SyntaxError("invalid boolean: should be 0x00 of 0xFF")


def encode_bool(value: bool) -> bytes:
    return b"\xff" if value else b"\x00"


def parse_int64(data: bytes) -> int:
    """Decode big-endian two's complement content of at most eight bytes."""
    if len(data) > 8:
        raise Asn1StructuralError("integer too large")
    return int.from_bytes(data, "big", signed=True)


def parse_int32(data: bytes) -> int:
    """Decode an integer that must fit in 32 signed bits."""
    value = parse_int64(data)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise Asn1StructuralError("integer too large")
    return value


def encode_int(value: int) -> bytes:
    """Encode an integer as minimal big-endian two's complement content."""
    magnitude = value if value >= 0 else ~value
    length = magnitude.bit_length() // 8 + 1
    return value.to_bytes(length, "big", signed=True)


def size_int(value: int) -> int:
    return len(encode_int(value))


def parse_base128_int(data: bytes, offset: int) -> tuple[int, int]:
    """Decode a base-128 integer at ``offset``; return it and the new offset."""
    value = 0
    for shifted, octet in enumerate(data[offset:]):
        if shifted > 4:
            raise Asn1StructuralError("base 128 integer too large")
        value = (value << 7) | (octet & 0x7F)
        if not octet & 0x80:
            return value, offset + shifted + 1
    raise Asn1SyntaxError("truncated base 128 integer")


def encode_base128_int(value: int) -> bytes:
    """Encode a non-negative integer in base 128, high groups first."""
    if value < 0:
        raise ValueError("base 128 integer cannot be negative")
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


def size_base128_int(value: int) -> int:
    return len(encode_base128_int(value))


def size_tag_and_length(tag: int, length: int) -> int:
    """Number of bytes taken by an identifier and a definite length."""
    size = 1
    if tag >= 31:
        size += size_base128_int(tag)
    size += 1
    if length >= 128:
        size += 1
        while length > 255:
            size += 1
            length >>= 8
    return size


def encode_tag_and_length(cls: int, compound: bool, tag: int, length: int) -> bytes:
    """Encode an identifier followed by a definite-form length."""
    if length < 0:
        raise ValueError("Can't have a negative length")
    first = (int(cls) << 6) | (0x20 if compound else 0)
    if tag >= 31:
        head = bytes([first | 0x1F]) + encode_base128_int(tag)
    else:
        head = bytes([first | tag])
    if length < 128:
        tail = bytes([length])
    else:
        count = (length.bit_length() + 7) // 8
        tail = bytes([0x80 | count]) + length.to_bytes(count, "big")
    return head + tail