"""Cursor over encoded LDAP data plus helpers that encode primitive values."""

from __future__ import annotations

from typing import Callable, TypeVar, Union

from ldapwire.asn1 import (
    COMPOUND,
    NOT_COMPOUND,
    TAG_BOOLEAN,
    TAG_ENUM,
    TAG_INTEGER,
    TAG_OCTET_STRING,
    LdapError,
    TagAndLength,
    encode_bool,
    encode_int,
    encode_tag_and_length,
    parse_bool,
    parse_int32,
    parse_tag_and_length,
    size_tag_and_length,
)

T = TypeVar("T")

Primitive = Union[bool, int, bytes, str]

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


class Reader:
    """Reads BER elements from a byte string, advancing an offset."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = bytes(data)
        self.offset = offset

    def __repr__(self) -> str:
        return f"Reader(offset={self.offset}, length={len(self.data)})"

    def has_more_data(self) -> bool:
        return self.offset < len(self.data)

    def parse_tag_and_length(self) -> TagAndLength:
        """Decode the header at the current offset and move past it."""
        try:
            header, offset = parse_tag_and_length(self.data, self.offset)
        except LdapError as err:
            raise LdapError(f"ParseTagAndLength: {err}") from err
        self.offset = offset
        return header

    def preview_tag_and_length(self) -> TagAndLength:
        """Decode the header at the current offset without moving."""
        saved = self.offset
        try:
            return self.parse_tag_and_length()
        finally:
            self.offset = saved

    def read_sub_bytes(self, cls: int, tag: int, callback: Callable[[Reader], T]) -> T:
        """Read a constructed element and hand its content to ``callback``.

        The callback must consume the whole content; its result is returned.
        """
        try:
            header = self.parse_tag_and_length()
            header.expect(cls, tag, COMPOUND)
        except LdapError as err:
            raise LdapError(f"ReadSubBytes:\n{err}") from err

        start = self.offset
        end = start + header.length
        if end > len(self.data):
            raise LdapError(
                f"ReadSubBytes: data truncated: expecting {header.length} bytes "
                f"at offset {self.offset}"
            )
        sub = Reader(self.data[start:end])
        try:
            result = callback(sub)
        except LdapError as err:
            self.offset += sub.offset
            raise LdapError(f"ReadSubBytes:\n{err}") from err
        if sub.has_more_data():
            raise LdapError(
                f"ReadSubBytes: data too long: {end - self.offset} more bytes "
                f"to read at offset {self.offset}"
            )
        self.offset = end
        return result

    def read_primitive(self, cls: int, tag: int, type_tag: int) -> bool | int | bytes:
        """Read a primitive element whose content is decoded as ``type_tag``.

        Booleans give bool, integers and enumerations give int (32-bit),
        octet strings give bytes.
        """
        try:
            header = self.parse_tag_and_length()
            header.expect(cls, tag, NOT_COMPOUND)
        except LdapError as err:
            raise LdapError(f"ReadPrimitiveSubBytes:\n{err}") from err

        start = self.offset
        end = start + header.length
        if end > len(self.data):
            raise LdapError(
                f"ReadPrimitiveSubBytes: data truncated: expecting {header.length} "
                f"bytes at offset {self.offset} but only {len(self.data) - start} "
                "bytes are remaining"
            )
        content = self.data[start:end]
        value: bool | int | bytes
        try:
            if type_tag == TAG_BOOLEAN:
                value = parse_bool(content)
            elif type_tag in (TAG_INTEGER, TAG_ENUM):
                value = parse_int32(content)
            elif type_tag == TAG_OCTET_STRING:
                value = content
            else:
                raise LdapError(
                    f"ReadPrimitiveSubBytes: invalid type tag value {type_tag}"
                )
        except LdapError as err:
            if str(err).startswith("ReadPrimitiveSubBytes: invalid type tag"):
                raise
            raise LdapError(f"ReadPrimitiveSubBytes:\n{err}") from err
        self.offset = end
        return value

    def dump_current_bytes(self) -> str:
        """Hex of the bytes around the offset, the current one in brackets."""
        parts = []
        for position in (self.offset - 1, self.offset, self.offset + 1):
            if 0 <= position < len(self.data):
                parts.append(hex(self.data[position]))
            else:
                parts.append("")
        return f"{parts[0]}, [{parts[1]}], {parts[2]}"


def _primitive_content(value: Primitive) -> bytes:
    if isinstance(value, bool):
        return encode_bool(value)
    if isinstance(value, int):
        if not _INT32_MIN <= value <= _INT32_MAX:
            raise ValueError(f"integer {value} does not fit in 32 bits")
        return encode_int(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"invalid primitive value type {type(value).__name__}")


def encode_primitive(cls: int, tag: int, value: Primitive) -> bytes:
    """Encode a bool, int, bytes or str value as a primitive element."""
    content = _primitive_content(value)
    return encode_tag_and_length(cls, NOT_COMPOUND, tag, len(content)) + content


def size_primitive(tag: int, value: Primitive) -> int:
    """Number of bytes ``encode_primitive`` produces for this tag and value."""
    length = len(_primitive_content(value))
    return length + size_tag_and_length(tag, length)


def encode_constructed(cls: int, tag: int, content: bytes) -> bytes:
    """Wrap already encoded content in a constructed element header."""
    return encode_tag_and_length(cls, COMPOUND, tag, len(content)) + bytes(content)