"""Search filters: and, or, not, comparisons and presence.

Each filter kind is a context-specific element of the Filter CHOICE.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from ldapwire.asn1 import LdapError, TagClass
from ldapwire.reader import Reader, encode_constructed
from ldapwire.values import (
    AttributeValueAssertion,
    encode_ldap_string,
    read_attribute_value_assertion,
    read_ldap_string,
)

TAG_FILTER_AND = 0
TAG_FILTER_OR = 1
TAG_FILTER_NOT = 2
TAG_FILTER_EQUALITY_MATCH = 3
TAG_FILTER_SUBSTRINGS = 4
TAG_FILTER_GREATER_OR_EQUAL = 5
TAG_FILTER_LESS_OR_EQUAL = 6
TAG_FILTER_PRESENT = 7
TAG_FILTER_APPROX_MATCH = 8
TAG_FILTER_EXTENSIBLE_MATCH = 9


class Filter(ABC):
    """One alternative of the Filter CHOICE."""

    tag: ClassVar[int]

    @abstractmethod
    def encode(self) -> bytes:
        """Encode the filter with its context-specific tag."""


def _read_filter_set(reader: Reader, separator: str) -> list[Filter]:
    filters: list[Filter] = []
    while reader.has_more_data():
        try:
            filters.append(read_filter(reader))
        except LdapError as err:
            raise LdapError(
                f"readComponents (filter {len(filters) + 1}):{separator}{err}"
            ) from err
    if not filters:
        raise LdapError("readComponents: expecting at least one Filter")
    return filters


@dataclass
class FilterAnd(Filter):
    """All of the sub-filters must match."""

    tag: ClassVar[int] = TAG_FILTER_AND
    filters: list[Filter] = field(default_factory=list)

    def encode(self) -> bytes:
        content = b"".join(child.encode() for child in self.filters)
        return encode_constructed(TagClass.CONTEXT_SPECIFIC, self.tag, content)

    @classmethod
    def _read(cls, reader: Reader) -> FilterAnd:
        try:
            children = reader.read_sub_bytes(
                TagClass.CONTEXT_SPECIFIC,
                cls.tag,
                lambda sub: _read_filter_set(sub, "\n"),
            )
        except LdapError as err:
            raise LdapError(f"readFilterAnd:\n{err}") from err
        return cls(children)


@dataclass
class FilterOr(Filter):
    """At least one of the sub-filters must match."""

    tag: ClassVar[int] = TAG_FILTER_OR
    filters: list[Filter] = field(default_factory=list)

    def encode(self) -> bytes:
        content = b"".join(child.encode() for child in self.filters)
        return encode_constructed(TagClass.CONTEXT_SPECIFIC, self.tag, content)

    @classmethod
    def _read(cls, reader: Reader) -> FilterOr:
        try:
            children = reader.read_sub_bytes(
                TagClass.CONTEXT_SPECIFIC,
                cls.tag,
                lambda sub: _read_filter_set(sub, " "),
            )
        except LdapError as err:
            raise LdapError(f"readFilterOr:\n{err}") from err
        return cls(children)


def _read_single_filter(reader: Reader) -> Filter:
    try:
        return read_filter(reader)
    except LdapError as err:
        raise LdapError(f"readComponents:\n{err}") from err


@dataclass
class FilterNot(Filter):
    """The sub-filter must not match."""

    tag: ClassVar[int] = TAG_FILTER_NOT
    filter: Filter

    def encode(self) -> bytes:
        return encode_constructed(
            TagClass.CONTEXT_SPECIFIC, self.tag, self.filter.encode()
        )

    @classmethod
    def _read(cls, reader: Reader) -> FilterNot:
        try:
            child = reader.read_sub_bytes(
                TagClass.CONTEXT_SPECIFIC, cls.tag, _read_single_filter
            )
        except LdapError as err:
            raise LdapError(f"readFilterNot:\n{err}") from err
        return cls(child)


@dataclass
class _AssertionFilter(Filter):
    """A filter holding an AttributeValueAssertion."""

    _reader_name: ClassVar[str] = "readFilter"

    attribute_desc: str
    assertion_value: bytes

    def __post_init__(self) -> None:
        if isinstance(self.assertion_value, str):
            self.assertion_value = self.assertion_value.encode("utf-8")

    def encode(self) -> bytes:
        assertion = AttributeValueAssertion(self.attribute_desc, self.assertion_value)
        return assertion.encode(TagClass.CONTEXT_SPECIFIC, self.tag)

    @classmethod
    def _read(cls, reader: Reader) -> _AssertionFilter:
        try:
            assertion = read_attribute_value_assertion(
                reader, TagClass.CONTEXT_SPECIFIC, cls.tag
            )
        except LdapError as err:
            raise LdapError(f"{cls._reader_name}:\n{err}") from err
        return cls(assertion.attribute_desc, assertion.assertion_value)


@dataclass
class FilterEqualityMatch(_AssertionFilter):
    """attribute=value"""

    tag: ClassVar[int] = TAG_FILTER_EQUALITY_MATCH
    _reader_name: ClassVar[str] = "readFilterEqualityMatch"


@dataclass
class FilterGreaterOrEqual(_AssertionFilter):
    """attribute>=value"""

    tag: ClassVar[int] = TAG_FILTER_GREATER_OR_EQUAL
    _reader_name: ClassVar[str] = "readFilterGreaterOrEqual"


@dataclass
class FilterLessOrEqual(_AssertionFilter):
    """attribute<=value"""

    tag: ClassVar[int] = TAG_FILTER_LESS_OR_EQUAL
    _reader_name: ClassVar[str] = "readFilterLessOrEqual"


@dataclass
class FilterApproxMatch(_AssertionFilter):
    """attribute~=value"""

    tag: ClassVar[int] = TAG_FILTER_APPROX_MATCH
    _reader_name: ClassVar[str] = "readFilterApproxMatch"


@dataclass
class FilterPresent(Filter):
    """attribute=*"""

    tag: ClassVar[int] = TAG_FILTER_PRESENT
    attribute: str

    def encode(self) -> bytes:
        return encode_ldap_string(self.attribute, TagClass.CONTEXT_SPECIFIC, self.tag)

    @classmethod
    def _read(cls, reader: Reader) -> FilterPresent:
        try:
            attribute = read_ldap_string(reader, TagClass.CONTEXT_SPECIFIC, cls.tag)
        except LdapError as err:
            raise LdapError(f"readFilterPresent:\n{err}") from err
        return cls(attribute)


_FILTER_TYPES: dict[int, type] = {
    kind.tag: kind
    for kind in (
        FilterAnd,
        FilterOr,
        FilterNot,
        FilterEqualityMatch,
        FilterGreaterOrEqual,
        FilterLessOrEqual,
        FilterPresent,
        FilterApproxMatch,
    )
}


def read_filter(reader: Reader) -> Filter:
    """Read one Filter, choosing the alternative from its tag."""
    try:
        header = reader.preview_tag_and_length()
        header.expect_class(TagClass.CONTEXT_SPECIFIC)
    except LdapError as err:
        raise LdapError(f"readFilter:\n{err}") from err
    kind = _FILTER_TYPES.get(header.tag)
    if kind is None:
        if header.tag in (TAG_FILTER_SUBSTRINGS, TAG_FILTER_EXTENSIBLE_MATCH):
            raise LdapError(f"readFilter: unsupported filter tag {header.tag}")
        raise LdapError(f"readFilter: invalid tag value {header.tag} for filter")
    try:
        return kind._read(reader)
    except LdapError as err:
        raise LdapError(f"readFilter:\n{err}") from err