"""PartialAttribute and PartialAttributeList.

A partial attribute is an attribute description with a set of values,
possibly empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ldapwire.asn1 import TAG_SEQUENCE, TAG_SET, LdapError, TagClass
from ldapwire.primitives import encode_octet_string, read_octet_string
from ldapwire.reader import Reader, encode_constructed
from ldapwire.values import encode_ldap_string, read_ldap_string


@dataclass
class PartialAttribute:
    """An attribute description with its (possibly empty) list of values."""

    type: str
    vals: list[bytes] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.vals = [
            value.encode("utf-8") if isinstance(value, str) else bytes(value)
            for value in self.vals
        ]

    def encode(self) -> bytes:
        """Encode as SEQUENCE { type, SET OF value }."""
        values = b"".join(encode_octet_string(value) for value in self.vals)
        content = encode_ldap_string(self.type) + encode_constructed(
            TagClass.UNIVERSAL, TAG_SET, values
        )
        return encode_constructed(TagClass.UNIVERSAL, TAG_SEQUENCE, content)


def _read_vals(reader: Reader) -> list[bytes]:
    vals: list[bytes] = []
    while reader.has_more_data():
        try:
            vals.append(read_octet_string(reader))
        except LdapError as err:
            raise LdapError(f"readValsComponents:\n{err}") from err
    return vals


def _read_partial_attribute_components(reader: Reader) -> PartialAttribute:
    try:
        attribute_type = read_ldap_string(reader)
        vals = reader.read_sub_bytes(TagClass.UNIVERSAL, TAG_SET, _read_vals)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return PartialAttribute(attribute_type, vals)


def read_partial_attribute(reader: Reader) -> PartialAttribute:
    """Read a PartialAttribute."""
    try:
        return reader.read_sub_bytes(
            TagClass.UNIVERSAL, TAG_SEQUENCE, _read_partial_attribute_components
        )
    except LdapError as err:
        raise LdapError(f"readPartialAttribute:\n{err}") from err


def _read_list_components(reader: Reader) -> list[PartialAttribute]:
    attributes: list[PartialAttribute] = []
    while reader.has_more_data():
        try:
            attributes.append(read_partial_attribute(reader))
        except LdapError as err:
            raise LdapError(f"readComponents:\n{err}") from err
    return attributes


def read_partial_attribute_list(reader: Reader) -> list[PartialAttribute]:
    """Read a PartialAttributeList: a SEQUENCE OF PartialAttribute."""
    try:
        return reader.read_sub_bytes(
            TagClass.UNIVERSAL, TAG_SEQUENCE, _read_list_components
        )
    except LdapError as err:
        raise LdapError(f"readPartialAttributeList:\n{err}") from err


def encode_partial_attribute_list(attributes: list[PartialAttribute]) -> bytes:
    """Encode a PartialAttributeList."""
    content = b"".join(attribute.encode() for attribute in attributes)
    return encode_constructed(TagClass.UNIVERSAL, TAG_SEQUENCE, content)