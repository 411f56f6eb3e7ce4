"""Reading and writing LDAPv3 bind, unbind and search messages in BER/DER encoding."""

__version__ = "0.1.0"

__all__ = [
    "asn1",
    "result_codes",
    "reader",
    "primitives",
    "values",
    "attributes",
    "filters",
    "results",
    "bind",
    "search",
    "message",
]