"""The LDAPMessage envelope: message ID, protocol operation and controls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from ldapwire.asn1 import TAG_SEQUENCE, LdapError, TagClass
from ldapwire.bind import (
    TAG_BIND_REQUEST,
    TAG_UNBIND_REQUEST,
    BindRequest,
    UnbindRequest,
    read_bind_request,
    read_unbind_request,
)
from ldapwire.reader import Reader, encode_constructed
from ldapwire.results import (
    TAG_BIND_RESPONSE,
    TAG_SEARCH_RESULT_DONE,
    BindResponse,
    SearchResultDone,
    read_bind_response,
    read_search_result_done,
)
from ldapwire.search import (
    TAG_SEARCH_REQUEST,
    TAG_SEARCH_RESULT_ENTRY,
    SearchRequest,
    SearchResultEntry,
    read_search_request,
    read_search_result_entry,
)
from ldapwire.values import encode_message_id, read_message_id

TAG_LDAP_MESSAGE_CONTROLS = 0

ProtocolOp = Union[
    BindRequest,
    BindResponse,
    UnbindRequest,
    SearchRequest,
    SearchResultEntry,
    SearchResultDone,
]

_READERS: dict[int, Callable[[Reader], ProtocolOp]] = {
    TAG_BIND_REQUEST: read_bind_request,
    TAG_BIND_RESPONSE: read_bind_response,
    TAG_UNBIND_REQUEST: read_unbind_request,
    TAG_SEARCH_REQUEST: read_search_request,
    TAG_SEARCH_RESULT_ENTRY: read_search_result_entry,
    TAG_SEARCH_RESULT_DONE: read_search_result_done,
}

_KNOWN_OTHER_TAGS = frozenset({6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 19, 23, 24, 25})


@dataclass
class LDAPMessage:
    """One LDAP protocol message.

    ``controls`` holds the raw encoded content of the Controls element, if any.
    """

    message_id: int = 0
    protocol_op: ProtocolOp | None = None
    controls: bytes | None = None

    def encode(self) -> bytes:
        """Encode the whole message as a universal SEQUENCE."""
        if self.protocol_op is None:
            raise LdapError("Error in LDAPMessage.Write: no protocol operation")
        try:
            content = encode_message_id(self.message_id) + self.protocol_op.encode()
            if self.controls is not None:
                content += encode_constructed(
                    TagClass.CONTEXT_SPECIFIC, TAG_LDAP_MESSAGE_CONTROLS, self.controls
                )
        except (ValueError, TypeError) as err:
            raise LdapError(f"Error in LDAPMessage.Write: {err}") from err
        return encode_constructed(TagClass.UNIVERSAL, TAG_SEQUENCE, content)

    def size(self) -> int:
        """Number of bytes of the encoded message."""
        return len(self.encode())

    def protocol_op_name(self) -> str:
        """Type name of the protocol operation, or "" when there is none."""
        if self.protocol_op is None:
            return ""
        return type(self.protocol_op).__name__

    def protocol_op_type(self) -> int:
        """The bind request tag for bind requests, 0 for everything else."""
        if isinstance(self.protocol_op, BindRequest):
            return TAG_BIND_REQUEST
        return 0


def read_protocol_op(reader: Reader) -> ProtocolOp:
    """Read the protocol operation, choosing it from its tag."""
    try:
        header = reader.preview_tag_and_length()
    except LdapError as err:
        raise LdapError(f"readProtocolOp:\n{err}") from err
    read = _READERS.get(header.tag)
    if read is None:
        if header.tag in _KNOWN_OTHER_TAGS:
            raise LdapError(
                f"readProtocolOp: unsupported protocolOp tag {header.tag}"
            )
        raise LdapError(
            f"readProtocolOp: invalid tag value {header.tag} for protocolOp"
        )
    try:
        return read(reader)
    except LdapError as err:
        raise LdapError(f"readProtocolOp:\n{err}") from err


def _read_raw_content(reader: Reader) -> bytes:
    content = reader.data[reader.offset:]
    reader.offset = len(reader.data)
    return content


def _read_message_components(reader: Reader) -> LDAPMessage:
    try:
        message_id = read_message_id(reader)
        protocol_op = read_protocol_op(reader)
        controls = None
        if reader.has_more_data():
            header = reader.preview_tag_and_length()
            if header.tag == TAG_LDAP_MESSAGE_CONTROLS:
                controls = reader.read_sub_bytes(
                    TagClass.CONTEXT_SPECIFIC,
                    TAG_LDAP_MESSAGE_CONTROLS,
                    _read_raw_content,
                )
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return LDAPMessage(message_id, protocol_op, controls)


def read_ldap_message(data: bytes | Reader) -> LDAPMessage:
    """Read one LDAPMessage from bytes or from a Reader's current offset."""
    reader = data if isinstance(data, Reader) else Reader(data)
    try:
        return reader.read_sub_bytes(
            TagClass.UNIVERSAL, TAG_SEQUENCE, _read_message_components
        )
    except LdapError as err:
        raise LdapError(f"ReadLDAPMessage:\n{err}") from err