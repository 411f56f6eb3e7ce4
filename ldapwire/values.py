"""Simple LDAP value types built on the primitives.

LDAPString and its aliases (LDAPDN, AttributeDescription, URI, ...),
MessageID, AttributeValueAssertion and AttributeSelection.
"""

from __future__ import annotations

from dataclasses import dataclass

from ldapwire.asn1 import (
    TAG_INTEGER,
    TAG_OCTET_STRING,
    TAG_SEQUENCE,
    LdapError,
    TagClass,
)
from ldapwire.primitives import (
    encode_integer,
    encode_octet_string,
    read_octet_string,
    read_positive_integer,
)
from ldapwire.reader import Reader, encode_constructed


def read_ldap_string(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_OCTET_STRING
) -> str:
    """Read an LDAPString; bytes that are not UTF-8 survive as escapes."""
    try:
        raw = read_octet_string(reader, cls, tag)
    except LdapError as err:
        raise LdapError(f"readTaggedLDAPString:\n{err}") from err
    return raw.decode("utf-8", "surrogateescape")


def encode_ldap_string(
    value: str | bytes, cls: int = TagClass.UNIVERSAL, tag: int = TAG_OCTET_STRING
) -> bytes:
    """Encode an LDAPString as UTF-8."""
    if isinstance(value, str):
        value = value.encode("utf-8", "surrogateescape")
    return encode_octet_string(value, cls, tag)


def read_message_id(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_INTEGER
) -> int:
    """Read a MessageID: an INTEGER in 0 .. maxInt."""
    try:
        return read_positive_integer(reader, cls, tag)
    except LdapError as err:
        raise LdapError(f"readTaggedMessageID:\n{err}") from err


def encode_message_id(
    value: int, cls: int = TagClass.UNIVERSAL, tag: int = TAG_INTEGER
) -> bytes:
    """Encode a MessageID."""
    return encode_integer(value, cls, tag)


@dataclass
class AttributeValueAssertion:
    """An attribute description paired with an assertion value."""

    attribute_desc: str
    assertion_value: bytes

    def __post_init__(self) -> None:
        if isinstance(self.assertion_value, str):
            self.assertion_value = self.assertion_value.encode("utf-8")

    def encode(self, cls: int = TagClass.UNIVERSAL, tag: int = TAG_SEQUENCE) -> bytes:
        """Encode as a SEQUENCE, or with the given implicit class and tag."""
        content = encode_ldap_string(self.attribute_desc) + encode_octet_string(
            self.assertion_value
        )
        return encode_constructed(cls, tag, content)


def _read_ava_components(reader: Reader) -> AttributeValueAssertion:
    try:
        desc = read_ldap_string(reader)
        value = read_octet_string(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return AttributeValueAssertion(desc, value)


def read_attribute_value_assertion(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_SEQUENCE
) -> AttributeValueAssertion:
    """Read an AttributeValueAssertion."""
    try:
        return reader.read_sub_bytes(cls, tag, _read_ava_components)
    except LdapError as err:
        raise LdapError(f"readAttributeValueAssertion:\n{err}") from err


def _read_selection_components(reader: Reader) -> list[str]:
    selection: list[str] = []
    while reader.has_more_data():
        try:
            selection.append(read_ldap_string(reader))
        except LdapError as err:
            raise LdapError(f"readComponents:\n{err}") from err
    return selection


def read_attribute_selection(reader: Reader) -> list[str]:
    """Read an AttributeSelection: a SEQUENCE OF LDAPString."""
    try:
        return reader.read_sub_bytes(
            TagClass.UNIVERSAL, TAG_SEQUENCE, _read_selection_components
        )
    except LdapError as err:
        raise LdapError(f"readAttributeSelection:\n{err}") from err


def encode_attribute_selection(selection: list[str]) -> bytes:
    """Encode an AttributeSelection."""
    content = b"".join(encode_ldap_string(selector) for selector in selection)
    return encode_constructed(TagClass.UNIVERSAL, TAG_SEQUENCE, content)