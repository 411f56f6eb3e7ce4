"""Search requests and search result entries.

A SearchRequest names a base object, a scope, alias dereferencing, limits,
a filter and the attributes to return. A SearchResultEntry carries one
entry's DN and its partial attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from ldapwire.asn1 import LdapError, TagClass
from ldapwire.attributes import (
    PartialAttribute,
    encode_partial_attribute_list,
    read_partial_attribute_list,
)
from ldapwire.filters import (
    Filter,
    FilterAnd,
    FilterApproxMatch,
    FilterEqualityMatch,
    FilterGreaterOrEqual,
    FilterLessOrEqual,
    FilterNot,
    FilterOr,
    FilterPresent,
    read_filter,
)
from ldapwire.primitives import (
    encode_boolean,
    encode_enumerated,
    encode_integer,
    read_boolean,
    read_enumerated,
    read_positive_integer,
)
from ldapwire.reader import Reader, encode_constructed
from ldapwire.values import (
    encode_attribute_selection,
    encode_ldap_string,
    read_attribute_selection,
    read_ldap_string,
)

TAG_SEARCH_REQUEST = 3
TAG_SEARCH_RESULT_ENTRY = 4


class SearchScope(IntEnum):
    """How deep below the base object a search goes."""

    BASE_OBJECT = 0
    SINGLE_LEVEL = 1
    WHOLE_SUBTREE = 2


class DerefAliases(IntEnum):
    """When aliases are dereferenced during a search."""

    NEVER_DEREF_ALIASES = 0
    DEREF_IN_SEARCHING = 1
    DEREF_FINDING_BASE_OBJ = 2
    DEREF_ALWAYS = 3


_SCOPE_VALUES = frozenset(int(member) for member in SearchScope)
_DEREF_VALUES = frozenset(int(member) for member in DerefAliases)


def _text(value: bytes) -> str:
    return value.decode("utf-8", "replace")


def filter_to_string(filter: Filter | None) -> str:
    """Render a filter in the usual parenthesised string form."""
    if isinstance(filter, FilterAnd):
        body = "&" + "".join(filter_to_string(child) for child in filter.filters)
    elif isinstance(filter, FilterOr):
        body = "|" + "".join(filter_to_string(child) for child in filter.filters)
    elif isinstance(filter, FilterNot):
        body = "!" + filter_to_string(filter.filter)
    elif isinstance(filter, FilterEqualityMatch):
        body = f"{filter.attribute_desc}={_text(filter.assertion_value)}"
    elif isinstance(filter, FilterGreaterOrEqual):
        body = f"{filter.attribute_desc}>={_text(filter.assertion_value)}"
    elif isinstance(filter, FilterLessOrEqual):
        body = f"{filter.attribute_desc}<={_text(filter.assertion_value)}"
    elif isinstance(filter, FilterPresent):
        body = f"{filter.attribute}=*"
    elif isinstance(filter, FilterApproxMatch):
        body = f"{filter.attribute_desc}~={_text(filter.assertion_value)}"
    else:
        body = ""
    return f"({body})"


@dataclass
class SearchRequest:
    """A request to search the directory."""

    base_object: str = ""
    scope: int = SearchScope.BASE_OBJECT
    deref_aliases: int = DerefAliases.NEVER_DEREF_ALIASES
    size_limit: int = 0
    time_limit: int = 0
    types_only: bool = False
    filter: Filter | None = None
    attributes: list[str] = field(default_factory=list)

    def encode(self) -> bytes:
        """Encode as [APPLICATION 3]."""
        if self.filter is None:
            raise LdapError("SearchRequest: a filter is required")
        content = b"".join(
            (
                encode_ldap_string(self.base_object),
                encode_enumerated(self.scope),
                encode_enumerated(self.deref_aliases),
                encode_integer(self.size_limit),
                encode_integer(self.time_limit),
                encode_boolean(self.types_only),
                self.filter.encode(),
                encode_attribute_selection(self.attributes),
            )
        )
        return encode_constructed(TagClass.APPLICATION, TAG_SEARCH_REQUEST, content)

    def filter_string(self) -> str:
        """The request's filter in string form."""
        return filter_to_string(self.filter)


def _read_search_request_components(reader: Reader) -> SearchRequest:
    try:
        base_object = read_ldap_string(reader)
        scope = SearchScope(read_enumerated(reader, _SCOPE_VALUES))
        deref = DerefAliases(read_enumerated(reader, _DEREF_VALUES))
        size_limit = read_positive_integer(reader)
        time_limit = read_positive_integer(reader)
        types_only = read_boolean(reader)
        search_filter = read_filter(reader)
        attributes = read_attribute_selection(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return SearchRequest(
        base_object,
        scope,
        deref,
        size_limit,
        time_limit,
        types_only,
        search_filter,
        attributes,
    )


def read_search_request(reader: Reader) -> SearchRequest:
    """Read a SearchRequest."""
    try:
        return reader.read_sub_bytes(
            TagClass.APPLICATION, TAG_SEARCH_REQUEST, _read_search_request_components
        )
    except LdapError as err:
        raise LdapError(f"readSearchRequest:\n{err}") from err


@dataclass
class SearchResultEntry:
    """One entry returned by a search."""

    object_name: str = ""
    attributes: list[PartialAttribute] = field(default_factory=list)

    def add_attribute(self, name: str, *args: bytes | str) -> None:
        """Append an attribute with the given values."""
        self.attributes.append(PartialAttribute(name, list(args)))

    def encode(self) -> bytes:
        """Encode as [APPLICATION 4]."""
        content = encode_ldap_string(self.object_name) + encode_partial_attribute_list(
            self.attributes
        )
        return encode_constructed(
            TagClass.APPLICATION, TAG_SEARCH_RESULT_ENTRY, content
        )


def _read_search_result_entry_components(reader: Reader) -> SearchResultEntry:
    try:
        object_name = read_ldap_string(reader)
        attributes = read_partial_attribute_list(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err
    return SearchResultEntry(object_name, attributes)


def read_search_result_entry(reader: Reader) -> SearchResultEntry:
    """Read a SearchResultEntry."""
    try:
        return reader.read_sub_bytes(
            TagClass.APPLICATION,
            TAG_SEARCH_RESULT_ENTRY,
            _read_search_result_entry_components,
        )
    except LdapError as err:
        raise LdapError(f"readSearchResultEntry:\n{err}") from err