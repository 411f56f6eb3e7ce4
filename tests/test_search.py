import pytest

from ldapwire.asn1 import LdapError, TagClass
from ldapwire.attributes import PartialAttribute
from ldapwire.filters import (
    FilterAnd,
    FilterApproxMatch,
    FilterEqualityMatch,
    FilterGreaterOrEqual,
    FilterLessOrEqual,
    FilterNot,
    FilterOr,
    FilterPresent,
)
from ldapwire.primitives import (
    encode_boolean,
    encode_enumerated,
    encode_integer,
)
from ldapwire.reader import Reader, encode_constructed
from ldapwire.search import (
    DerefAliases,
    SearchRequest,
    SearchResultEntry,
    SearchScope,
    filter_to_string,
    read_search_request,
    read_search_result_entry,
)
from ldapwire.values import encode_attribute_selection, encode_ldap_string


def _sample_request():
    return SearchRequest(
        base_object="dc=example,dc=com",
        scope=SearchScope.WHOLE_SUBTREE,
        deref_aliases=DerefAliases.DEREF_ALWAYS,
        size_limit=100,
        time_limit=30,
        types_only=True,
        filter=FilterAnd(
            [FilterPresent("objectClass"), FilterEqualityMatch("uid", b"john")]
        ),
        attributes=["cn", "mail"],
    )


def test_search_request_round_trip():
    request = _sample_request()
    reader = Reader(request.encode())
    decoded = read_search_request(reader)
    assert decoded == request
    assert not reader.has_more_data()
    assert decoded.scope is SearchScope.WHOLE_SUBTREE
    assert decoded.deref_aliases is DerefAliases.DEREF_ALWAYS


def test_search_request_wire_bytes():
    request = SearchRequest(filter=FilterPresent("objectClass"))
    expected = bytes.fromhex(
        "6320"
        "0400"
        "0a0100"
        "0a0100"
        "020100"
        "020100"
        "010100"
        "870b"
    ) + b"objectClass" + bytes.fromhex("3000")
    assert request.encode() == expected


def test_search_request_without_filter_raises():
    with pytest.raises(LdapError):
        SearchRequest().encode()


def test_filter_string_of_request():
    assert _sample_request().filter_string() == "(&(objectClass=*)(uid=john))"


def test_filter_to_string_each_kind():
    assert filter_to_string(FilterPresent("cn")) == "(cn=*)"
    assert filter_to_string(FilterGreaterOrEqual("age", b"18")) == "(age>=18)"
    assert filter_to_string(FilterLessOrEqual("age", b"65")) == "(age<=65)"
    assert filter_to_string(FilterApproxMatch("sn", b"smith")) == "(sn~=smith)"
    assert filter_to_string(FilterNot(FilterPresent("cn"))) == "(!(cn=*))"
    assert (
        filter_to_string(FilterOr([FilterPresent("a"), FilterPresent("b")]))
        == "(|(a=*)(b=*))"
    )


def test_filter_to_string_none():
    assert filter_to_string(None) == "()"


def _request_bytes(scope=0, deref=0, size_limit=0):
    content = b"".join(
        (
            encode_ldap_string(""),
            encode_enumerated(scope),
            encode_enumerated(deref),
            encode_integer(size_limit),
            encode_integer(0),
            encode_boolean(False),
            FilterPresent("objectClass").encode(),
            encode_attribute_selection([]),
        )
    )
    return encode_constructed(TagClass.APPLICATION, 3, content)


def test_valid_handmade_request_reads():
    decoded = read_search_request(Reader(_request_bytes()))
    assert decoded.filter == FilterPresent("objectClass")
    assert decoded.attributes == []


def test_invalid_scope_is_rejected():
    with pytest.raises(LdapError, match="Invalid ENUMERATED VALUE 5"):
        read_search_request(Reader(_request_bytes(scope=5)))


def test_invalid_deref_is_rejected():
    with pytest.raises(LdapError, match="Invalid ENUMERATED VALUE 4"):
        read_search_request(Reader(_request_bytes(deref=4)))


def test_negative_size_limit_is_rejected():
    with pytest.raises(LdapError, match="Invalid INTEGER value -1"):
        read_search_request(Reader(_request_bytes(size_limit=-1)))


def test_wrong_application_tag_is_rejected():
    data = SearchResultEntry("cn=x").encode()
    with pytest.raises(LdapError):
        read_search_request(Reader(data))


def test_search_result_entry_round_trip():
    entry = SearchResultEntry("uid=john,dc=example,dc=com")
    entry.add_attribute("cn", "John", "Johnny")
    entry.add_attribute("mail", b"john@example.com")
    assert entry.attributes == [
        PartialAttribute("cn", [b"John", b"Johnny"]),
        PartialAttribute("mail", [b"john@example.com"]),
    ]
    reader = Reader(entry.encode())
    decoded = read_search_result_entry(reader)
    assert decoded == entry
    assert not reader.has_more_data()


def test_search_result_entry_without_attributes():
    entry = SearchResultEntry("dc=example,dc=com")
    decoded = read_search_result_entry(Reader(entry.encode()))
    assert decoded.object_name == "dc=example,dc=com"
    assert decoded.attributes == []


def test_search_result_entry_truncated():
    data = SearchResultEntry("dc=example,dc=com").encode()[:-3]
    with pytest.raises(LdapError):
        read_search_result_entry(Reader(data))