"""Bind and unbind requests.

A BindRequest authenticates with either a simple password (bytes) or SASL
credentials; an UnbindRequest is an application-tagged NULL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ldapwire.asn1 import NOT_COMPOUND, LdapError, TagClass, encode_tag_and_length
from ldapwire.primitives import (
    encode_integer,
    encode_octet_string,
    read_integer,
    read_octet_string,
)
from ldapwire.reader import Reader, encode_constructed
from ldapwire.values import encode_ldap_string, read_ldap_string

TAG_BIND_REQUEST = 0
TAG_UNBIND_REQUEST = 2
TAG_AUTHENTICATION_CHOICE_SIMPLE = 0
TAG_AUTHENTICATION_CHOICE_SASL = 3
BIND_REQUEST_VERSION_MIN = 1
BIND_REQUEST_VERSION_MAX = 127


@dataclass
class SaslCredentials:
    """A SASL mechanism name with optional credentials."""

    mechanism: str
    credentials: bytes | None = None

    def __post_init__(self) -> None:
        if isinstance(self.credentials, str):
            self.credentials = self.credentials.encode("utf-8")

    def encode(
        self,
        cls: int = TagClass.CONTEXT_SPECIFIC,
        tag: int = TAG_AUTHENTICATION_CHOICE_SASL,
    ) -> bytes:
        """Encode as a constructed element, [3] by default."""
        content = encode_ldap_string(self.mechanism)
        if self.credentials is not None:
            content += encode_octet_string(self.credentials)
        return encode_constructed(cls, tag, content)


Authentication = Union[bytes, SaslCredentials]


@dataclass
class BindRequest:
    """A request to authenticate; ``authentication`` is bytes for simple binds."""

    version: int = 3
    name: str = ""
    authentication: Authentication = b""

    def __post_init__(self) -> None:
        if isinstance(self.authentication, str):
            self.authentication = self.authentication.encode("utf-8")

    def authentication_choice(self) -> str:
        """Return "simple", "sasl", or "" for anything else."""
        if isinstance(self.authentication, (bytes, bytearray)):
            return "simple"
        if isinstance(self.authentication, SaslCredentials):
            return "sasl"
        return ""

    def encode(self) -> bytes:
        """Encode as [APPLICATION 0]."""
        if isinstance(self.authentication, (bytes, bytearray)):
            auth = encode_octet_string(
                bytes(self.authentication),
                TagClass.CONTEXT_SPECIFIC,
                TAG_AUTHENTICATION_CHOICE_SIMPLE,
            )
        elif isinstance(self.authentication, SaslCredentials):
            auth = self.authentication.encode(
                TagClass.CONTEXT_SPECIFIC, TAG_AUTHENTICATION_CHOICE_SASL
            )
        else:
            raise LdapError(
                f"Unknown authentication choice: {self.authentication!r}"
            )
        content = encode_integer(self.version) + encode_ldap_string(self.name) + auth
        return encode_constructed(TagClass.APPLICATION, TAG_BIND_REQUEST, content)


@dataclass
class UnbindRequest:
    """A request to close the session."""

    def encode(self) -> bytes:
        """Encode as an empty [APPLICATION 2]."""
        return encode_tag_and_length(
            TagClass.APPLICATION, NOT_COMPOUND, TAG_UNBIND_REQUEST, 0
        )


def _read_sasl_components(reader: Reader) -> SaslCredentials:
    try:
        mechanism = read_ldap_string(reader)
        credentials = read_octet_string(reader) if reader.has_more_data() else None
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return SaslCredentials(mechanism, credentials)


def read_sasl_credentials(reader: Reader) -> SaslCredentials:
    """Read SaslCredentials tagged [3]."""
    try:
        return reader.read_sub_bytes(
            TagClass.CONTEXT_SPECIFIC,
            TAG_AUTHENTICATION_CHOICE_SASL,
            _read_sasl_components,
        )
    except LdapError as err:
        raise LdapError(f"readSaslCredentials:\n{err}") from err


def read_authentication_choice(reader: Reader) -> Authentication:
    """Read a simple password (as bytes) or SaslCredentials."""
    try:
        header = reader.preview_tag_and_length()
        header.expect_class(TagClass.CONTEXT_SPECIFIC)
    except LdapError as err:
        raise LdapError(f"readAuthenticationChoice:\n{err}") from err
    try:
        if header.tag == TAG_AUTHENTICATION_CHOICE_SIMPLE:
            return read_octet_string(
                reader, TagClass.CONTEXT_SPECIFIC, TAG_AUTHENTICATION_CHOICE_SIMPLE
            )
        if header.tag == TAG_AUTHENTICATION_CHOICE_SASL:
            return read_sasl_credentials(reader)
    except LdapError as err:
        raise LdapError(f"readAuthenticationChoice:\n{err}") from err
    raise LdapError(
        f"readAuthenticationChoice: invalid tag value {header.tag} "
        "for AuthenticationChoice"
    )


def _read_bind_components(reader: Reader) -> BindRequest:
    try:
        version = read_integer(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    if not BIND_REQUEST_VERSION_MIN <= version <= BIND_REQUEST_VERSION_MAX:
        raise LdapError(
            f"readComponents: invalid version {version}, must be between "
            f"{BIND_REQUEST_VERSION_MIN} and {BIND_REQUEST_VERSION_MAX}"
        )
    try:
        name = read_ldap_string(reader)
        authentication = read_authentication_choice(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return BindRequest(version, name, authentication)


def read_bind_request(reader: Reader) -> BindRequest:
    """Read a BindRequest."""
    try:
        return reader.read_sub_bytes(
            TagClass.APPLICATION, TAG_BIND_REQUEST, _read_bind_components
        )
    except LdapError as err:
        raise LdapError(f"readBindRequest:\n{err}") from err


def read_unbind_request(reader: Reader) -> UnbindRequest:
    """Read an UnbindRequest, which must have no content."""
    try:
        header = reader.parse_tag_and_length()
        header.expect(TagClass.APPLICATION, TAG_UNBIND_REQUEST, NOT_COMPOUND)
    except LdapError as err:
        raise LdapError(f"readUnbindRequest:\n{err}") from err
    if header.length != 0:
        raise LdapError("readUnbindRequest: expecting NULL")
    return UnbindRequest()