"""LDAPResult and the responses that are an LDAPResult.

An LDAPResult carries a result code, a matched DN, a diagnostic message and
an optional referral. BindResponse adds optional server SASL credentials;
SearchResultDone is an LDAPResult under its own application tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ldapwire.asn1 import TAG_SEQUENCE, LdapError, TagClass
from ldapwire.primitives import (
    encode_enumerated,
    encode_octet_string,
    read_enumerated,
    read_octet_string,
)
from ldapwire.reader import Reader, encode_constructed
from ldapwire.result_codes import RESULT_CODE_NAMES, ResultCode
from ldapwire.values import encode_ldap_string, read_ldap_string

TAG_LDAP_RESULT_REFERRAL = 3
TAG_BIND_RESPONSE = 1
TAG_BIND_RESPONSE_SERVER_SASL_CREDS = 7
TAG_SEARCH_RESULT_DONE = 5


def _encode_referral(referral: list[str]) -> bytes:
    content = b"".join(encode_ldap_string(uri) for uri in referral)
    return encode_constructed(
        TagClass.CONTEXT_SPECIFIC, TAG_LDAP_RESULT_REFERRAL, content
    )


def _read_referral_components(reader: Reader) -> list[str]:
    uris: list[str] = []
    while reader.has_more_data():
        try:
            uris.append(read_ldap_string(reader))
        except LdapError as err:
            raise LdapError(f"readComponents:\n{err}") from err
    if not uris:
        raise LdapError("readComponents: expecting at least one URI")
    return uris


def _read_referral(reader: Reader) -> list[str]:
    try:
        return reader.read_sub_bytes(
            TagClass.CONTEXT_SPECIFIC,
            TAG_LDAP_RESULT_REFERRAL,
            _read_referral_components,
        )
    except LdapError as err:
        raise LdapError(f"readTaggedReferral:\n{err}") from err


@dataclass
class LDAPResult:
    """The outcome of an LDAP operation."""

    result_code: int = ResultCode.SUCCESS
    matched_dn: str = ""
    diagnostic_message: str = ""
    referral: list[str] | None = field(default=None)

    def _encode_components(self) -> bytes:
        parts = [
            encode_enumerated(self.result_code),
            encode_ldap_string(self.matched_dn),
            encode_ldap_string(self.diagnostic_message),
        ]
        if self.referral is not None:
            parts.append(_encode_referral(self.referral))
        return b"".join(parts)

    def encode(
        self, cls: int = TagClass.UNIVERSAL, tag: int = TAG_SEQUENCE
    ) -> bytes:
        """Encode as a SEQUENCE, or with the given implicit class and tag."""
        return encode_constructed(cls, tag, self._encode_components())


def _read_result_fields(reader: Reader) -> dict[str, Any]:
    try:
        code = ResultCode(read_enumerated(reader, RESULT_CODE_NAMES))
        matched_dn = read_ldap_string(reader)
        diagnostic_message = read_ldap_string(reader)
        referral = None
        if reader.has_more_data():
            header = reader.preview_tag_and_length()
            if header.tag == TAG_LDAP_RESULT_REFERRAL:
                referral = _read_referral(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return {
        "result_code": code,
        "matched_dn": matched_dn,
        "diagnostic_message": diagnostic_message,
        "referral": referral,
    }


def read_ldap_result(
    reader: Reader, cls: int = TagClass.UNIVERSAL, tag: int = TAG_SEQUENCE
) -> LDAPResult:
    """Read an LDAPResult under the given class and tag."""
    try:
        return reader.read_sub_bytes(
            cls, tag, lambda sub: LDAPResult(**_read_result_fields(sub))
        )
    except LdapError as err:
        raise LdapError(f"readTaggedLDAPResult:\n{err}") from err


@dataclass
class BindResponse(LDAPResult):
    """The result of a bind, with optional server SASL credentials."""

    server_sasl_creds: bytes | None = None

    def __post_init__(self) -> None:
        if isinstance(self.server_sasl_creds, str):
            self.server_sasl_creds = self.server_sasl_creds.encode("utf-8")

    def encode(self) -> bytes:  # type: ignore[override]
        """Encode as [APPLICATION 1]."""
        content = self._encode_components()
        if self.server_sasl_creds is not None:
            content += encode_octet_string(
                self.server_sasl_creds,
                TagClass.CONTEXT_SPECIFIC,
                TAG_BIND_RESPONSE_SERVER_SASL_CREDS,
            )
        return encode_constructed(TagClass.APPLICATION, TAG_BIND_RESPONSE, content)


def _read_bind_response_components(reader: Reader) -> BindResponse:
    fields = _read_result_fields(reader)
    creds = None
    if reader.has_more_data():
        try:
            header = reader.preview_tag_and_length()
            if header.tag == TAG_BIND_RESPONSE_SERVER_SASL_CREDS:
                creds = read_octet_string(
                    reader,
                    TagClass.CONTEXT_SPECIFIC,
                    TAG_BIND_RESPONSE_SERVER_SASL_CREDS,
                )
        except LdapError as err:
            raise LdapError(f"readComponents:\n{err}") from err
    return BindResponse(**fields, server_sasl_creds=creds)


def read_bind_response(reader: Reader) -> BindResponse:
    """Read a BindResponse."""
    try:
        return reader.read_sub_bytes(
            TagClass.APPLICATION, TAG_BIND_RESPONSE, _read_bind_response_components
        )
    except LdapError as err:
        raise LdapError(f"readBindResponse:\n{err}") from err


@dataclass
class SearchResultDone(LDAPResult):
    """The final response of a search."""

    def encode(self) -> bytes:  # type: ignore[override]
        """Encode as [APPLICATION 5]."""
        return super().encode(TagClass.APPLICATION, TAG_SEARCH_RESULT_DONE)


def read_search_result_done(reader: Reader) -> SearchResultDone:
    """Read a SearchResultDone."""
    try:
        return reader.read_sub_bytes(
            TagClass.APPLICATION,
            TAG_SEARCH_RESULT_DONE,
            lambda sub: SearchResultDone(**_read_result_fields(sub)),
        )
    except LdapError as err:
        raise LdapError(f"readSearchResultDone:\n{err}") from err