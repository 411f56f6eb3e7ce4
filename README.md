# ldapwire

`ldapwire` reads and writes LDAPv3 protocol messages (RFC 4511) in their
BER/DER wire encoding. It uses only the standard library.

It handles the message envelope and these protocol operations:

- `BindRequest` (simple password or `SaslCredentials`) and `BindResponse`
- `UnbindRequest`
- `SearchRequest` with its filter, `SearchResultEntry` and `SearchResultDone`

## Installation

```
pip install ldapwire
```

## Reading a message

`ldapwire.message.read_ldap_message` takes the bytes of one message (or a
`Reader` positioned at one) and returns an `LDAPMessage` with `message_id`,
`protocol_op` and `controls`.

```python
from ldapwire.message import read_ldap_message

data = bytes([
    0x30, 0x0c, 0x02, 0x01, 0x01, 0x60, 0x07, 0x02,
    0x01, 0x03, 0x04, 0x00, 0x80, 0x00,
])
message = read_ldap_message(data)
print(message.message_id)           # 1
print(message.protocol_op_name())   # "BindRequest"
print(message.protocol_op.version)  # 3
print(message.size())               # 14
```

Malformed input raises `ldapwire.asn1.LdapError`. Its message lists, line by
line, each decoding step that failed, innermost last.

## Writing a message

Wrap a protocol operation in an `LDAPMessage` and call `encode()`:

```python
from ldapwire.bind import BindRequest
from ldapwire.message import LDAPMessage
from ldapwire.results import SearchResultDone
from ldapwire.result_codes import ResultCode

password = b"password"
bind = BindRequest(version=3, name="cn=admin,dc=example,dc=com", authentication=password)
wire = LDAPMessage(message_id=1, protocol_op=bind).encode()

done = SearchResultDone(result_code=ResultCode.SUCCESS)
wire = LDAPMessage(message_id=2, protocol_op=done).encode()
```

`LDAPMessage.size()` is the length of what `encode()` returns. Encoding a
message without a protocol operation, or with an integer that does not fit in
32 signed bits, raises `LdapError`.

## Search requests and filters

```python
from ldapwire.filters import FilterAnd, FilterEqualityMatch, FilterPresent
from ldapwire.search import SearchRequest, SearchScope

request = SearchRequest(
    base_object="dc=example,dc=com",
    scope=SearchScope.WHOLE_SUBTREE,
    filter=FilterAnd([FilterEqualityMatch("objectClass", b"person"), FilterPresent("uid")]),
    attributes=["cn", "mail"],
)
print(request.filter_string())  # (&(objectClass=person)(uid=*))
```

`ldapwire.search.filter_to_string` renders any supported `Filter` the same
way. The filter kinds are `FilterAnd`, `FilterOr`, `FilterNot`,
`FilterEqualityMatch`, `FilterGreaterOrEqual`, `FilterLessOrEqual`,
`FilterApproxMatch` and `FilterPresent`.

A `SearchResultEntry` collects attributes with `add_attribute(name, *values)`.

## Lower-level pieces

- `ldapwire.asn1`: tag and length parsing and encoding, the boolean, integer
  and base-128 codecs, `TagClass`, and the error classes `LdapError`,
  `Asn1SyntaxError` and `Asn1StructuralError`.
- `ldapwire.reader`: `Reader`, a cursor over a byte string that reads
  primitive and nested constructed elements, plus `encode_primitive`,
  `size_primitive` and `encode_constructed`.
- `ldapwire.primitives`: BOOLEAN, INTEGER, ENUMERATED and OCTET STRING.
- `ldapwire.values`: LDAPString, MessageID, `AttributeValueAssertion` and
  attribute selections.
- `ldapwire.attributes`: `PartialAttribute` and attribute lists.
- `ldapwire.results`: `LDAPResult`, `BindResponse`, `SearchResultDone`.
- `ldapwire.result_codes`: the `ResultCode` enumeration and
  `result_code_name`.

## What it does not do

- It is a codec only: it opens no connections and is neither an LDAP client
  nor a server.
- Modify, add, delete, modify DN, compare, abandon, extended and
  intermediate operations are not decoded or encoded; reading a message that
  carries one raises `LdapError` ("unsupported protocolOp tag").
- Substring and extensible-match filters are not supported; reading one
  raises `LdapError`.
- Controls are not decoded: `LDAPMessage.controls` holds the raw encoded
  content of the controls element, and is written back unchanged.