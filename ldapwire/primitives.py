"""Reading and encoding of the primitive LDAP types.

BOOLEAN, INTEGER, ENUMERATED and OCTET STRING, each readable and writable
with either its universal tag or an implicit class and tag.
"""

from __future__ import annotations

from collections.abc import Container

from ldapwire.asn1 import (
    TAG_BOOLEAN,
    TAG_ENUM,
    TAG_INTEGER,
    TAG_OCTET_STRING,
    LdapError,
    TagClass,
)
from ldapwire.reader import Reader, encode_primitive

MAX_INT = 2147483647


def read_boolean(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_BOOLEAN
) -> bool:
    """Read a BOOLEAN element."""
    try:
        return bool(reader.read_primitive(cls, tag, TAG_BOOLEAN))
    except LdapError as err:
        raise LdapError(f"readBOOLEAN:\n{err}") from err


def encode_boolean(
    value: bool, cls: int = TagClass.UNIVERSAL, tag: int = TAG_BOOLEAN
) -> bytes:
    """Encode a BOOLEAN element."""
    return encode_primitive(cls, tag, bool(value))


def read_integer(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_INTEGER
) -> int:
    """Read an INTEGER element that fits in 32 signed bits."""
    try:
        value = reader.read_primitive(cls, tag, TAG_INTEGER)
    except LdapError as err:
        raise LdapError(f"readINTEGER:\n{err}") from err
    return int(value)


def read_positive_integer(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_INTEGER
) -> int:
    """Read an INTEGER constrained to 0 .. maxInt."""
    try:
        value = read_integer(reader, cls, tag)
    except LdapError as err:
        raise LdapError(f"readPositiveINTEGER:\n{err}") from err
    if not 0 <= value <= MAX_INT:
        raise LdapError(
            f"readPositiveINTEGER: Invalid INTEGER value {value} ! "
            f"Expected value between 0 and {MAX_INT}"
        )
    return value


def encode_integer(
    value: int, cls: int = TagClass.UNIVERSAL, tag: int = TAG_INTEGER
) -> bytes:
    """Encode an INTEGER element; the value must fit in 32 signed bits."""
    return encode_primitive(cls, tag, int(value))


def read_enumerated(reader: Reader, allowed: Container[int]) -> int:
    """Read a universal ENUMERATED element whose value must be in ``allowed``."""
    try:
        value = int(reader.read_primitive(TagClass.UNIVERSAL, TAG_ENUM, TAG_ENUM))
    except LdapError as err:
        raise LdapError(f"readENUMERATED:\n{err}") from err
    if value not in allowed:
        raise LdapError(f"readENUMERATED: Invalid ENUMERATED VALUE {value}")
    return value


def encode_enumerated(
    value: int, cls: int = TagClass.UNIVERSAL, tag: int = TAG_ENUM
) -> bytes:
    """Encode an ENUMERATED element."""
    return encode_primitive(cls, tag, int(value))


def read_octet_string(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_OCTET_STRING
) -> bytes:
    """Read an OCTET STRING element as bytes."""
    try:
        return bytes(reader.read_primitive(cls, tag, TAG_OCTET_STRING))
    except LdapError as err:
        raise LdapError(f"readOCTETSTRING:\n{err}") from err


def encode_octet_string(
    value: bytes | str, cls: int = TagClass.UNIVERSAL, tag: int = TAG_OCTET_STRING
) -> bytes:
    """Encode an OCTET STRING element; text is encoded as UTF-8."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return encode_primitive(cls, tag, bytes(value))