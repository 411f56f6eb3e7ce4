import pytest

from ldapwire.asn1 import LdapError
from ldapwire.filters import (
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
from ldapwire.reader import Reader


def _round_trip(filt):
    encoded = filt.encode()
    reader = Reader(encoded)
    result = read_filter(reader)
    assert reader.offset == len(encoded)
    return result


def test_present_pinned_bytes():
    assert FilterPresent("objectClass").encode() == b"\x87\x0bobjectClass"


@pytest.mark.parametrize(
    "filt",
    [
        FilterEqualityMatch("cn", b"Jane"),
        FilterGreaterOrEqual("uidNumber", b"1000"),
        FilterLessOrEqual("uidNumber", b"2000"),
        FilterApproxMatch("sn", b"Smyth"),
        FilterPresent("mail"),
    ],
)
def test_simple_round_trip(filt):
    assert _round_trip(filt) == filt


def test_text_assertion_value_becomes_bytes():
    assert FilterEqualityMatch("cn", "Jane").assertion_value == b"Jane"


def test_nested_round_trip():
    filt = FilterAnd(
        [
            FilterPresent("objectClass"),
            FilterOr(
                [
                    FilterEqualityMatch("uid", b"jane"),
                    FilterNot(FilterLessOrEqual("age", b"17")),
                ]
            ),
        ]
    )
    assert _round_trip(filt) == filt


def test_comparison_kinds_differ_only_in_tag():
    equal = FilterEqualityMatch("cn", b"x").encode()
    greater = FilterGreaterOrEqual("cn", b"x").encode()
    assert equal[1:] == greater[1:]
    assert equal[0] != greater[0]


def test_empty_and_is_rejected():
    with pytest.raises(LdapError, match="expecting at least one Filter"):
        read_filter(Reader(FilterAnd([]).encode()))


def test_empty_or_is_rejected():
    with pytest.raises(LdapError, match="expecting at least one Filter"):
        read_filter(Reader(FilterOr([]).encode()))


def test_universal_class_is_rejected():
    with pytest.raises(LdapError, match="wrong tag class"):
        read_filter(Reader(b"\x04\x02cn"))


def test_unknown_tag_is_rejected():
    with pytest.raises(LdapError, match="invalid tag value"):
        read_filter(Reader(b"\xaa\x00"))


def test_not_with_two_filters_is_rejected():
    inner = FilterPresent("cn").encode() + FilterPresent("sn").encode()
    data = bytes([0xA2, len(inner)]) + inner
    with pytest.raises(LdapError, match="data too long"):
        read_filter(Reader(data))


def test_error_in_child_names_its_position():
    good = FilterPresent("cn").encode()
    inner = good + b"\x04\x00"
    data = bytes([0xA0, len(inner)]) + inner
    with pytest.raises(LdapError, match=r"filter 2"):
        read_filter(Reader(data))


def test_truncated_filter_raises():
    encoded = FilterEqualityMatch("cn", b"value").encode()
    with pytest.raises(LdapError):
        read_filter(Reader(encoded[:-2]))