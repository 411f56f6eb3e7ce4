"""LDAP result codes and their protocol names."""

from __future__ import annotations

from enum import IntEnum


class ResultCode(IntEnum):
    """The resultCode values of an LDAPResult."""

    SUCCESS = 0
    OPERATIONS_ERROR = 1
    PROTOCOL_ERROR = 2
    TIME_LIMIT_EXCEEDED = 3
    SIZE_LIMIT_EXCEEDED = 4
    COMPARE_FALSE = 5
    COMPARE_TRUE = 6
    AUTH_METHOD_NOT_SUPPORTED = 7
    STRONGER_AUTH_REQUIRED = 8
    REFERRAL = 10
    ADMIN_LIMIT_EXCEEDED = 11
    UNAVAILABLE_CRITICAL_EXTENSION = 12
    CONFIDENTIALITY_REQUIRED = 13
    SASL_BIND_IN_PROGRESS = 14
    NO_SUCH_ATTRIBUTE = 16
    UNDEFINED_ATTRIBUTE_TYPE = 17
    INAPPROPRIATE_MATCHING = 18
    CONSTRAINT_VIOLATION = 19
    ATTRIBUTE_OR_VALUE_EXISTS = 20
    INVALID_ATTRIBUTE_SYNTAX = 21
    NO_SUCH_OBJECT = 32
    ALIAS_PROBLEM = 33
    INVALID_DN_SYNTAX = 34
    ALIAS_DEREFERENCING_PROBLEM = 36
    INAPPROPRIATE_AUTHENTICATION = 48
    INVALID_CREDENTIALS = 49
    INSUFFICIENT_ACCESS_RIGHTS = 50
    BUSY = 51
    UNAVAILABLE = 52
    UNWILLING_TO_PERFORM = 53
    LOOP_DETECT = 54
    NAMING_VIOLATION = 64
    OBJECT_CLASS_VIOLATION = 65
    NOT_ALLOWED_ON_NON_LEAF = 66
    NOT_ALLOWED_ON_RDN = 67
    ENTRY_ALREADY_EXISTS = 68
    OBJECT_CLASS_MODS_PROHIBITED = 69
    AFFECTS_MULTIPLE_DSAS = 71
    OTHER = 80


RESULT_CODE_NAMES: dict[int, str] = {
    ResultCode.SUCCESS: "success",
    ResultCode.OPERATIONS_ERROR: "operationsError",
    ResultCode.PROTOCOL_ERROR: "protocolError",
    ResultCode.TIME_LIMIT_EXCEEDED: "timeLimitExceeded",
    ResultCode.SIZE_LIMIT_EXCEEDED: "sizeLimitExceeded",
    ResultCode.COMPARE_FALSE: "compareFalse",
    ResultCode.COMPARE_TRUE: "compareTrue",
    ResultCode.AUTH_METHOD_NOT_SUPPORTED: "authMethodNotSupported",
    ResultCode.STRONGER_AUTH_REQUIRED: "strongerAuthRequired",
    ResultCode.REFERRAL: "referral",
    ResultCode.ADMIN_LIMIT_EXCEEDED: "adminLimitExceeded",
    ResultCode.UNAVAILABLE_CRITICAL_EXTENSION: "unavailableCriticalExtension",
    ResultCode.CONFIDENTIALITY_REQUIRED: "confidentialityRequired",
    ResultCode.SASL_BIND_IN_PROGRESS: "saslBindInProgress",
    ResultCode.NO_SUCH_ATTRIBUTE: "noSuchAttribute",
    ResultCode.UNDEFINED_ATTRIBUTE_TYPE: "undefinedAttributeType",
    ResultCode.INAPPROPRIATE_MATCHING: "inappropriateMatching",
    ResultCode.CONSTRAINT_VIOLATION: "constraintViolation",
    ResultCode.ATTRIBUTE_OR_VALUE_EXISTS: "attributeOrValueExists",
    ResultCode.INVALID_ATTRIBUTE_SYNTAX: "invalidAttributeSyntax",
    ResultCode.NO_SUCH_OBJECT: "noSuchObject",
    ResultCode.ALIAS_PROBLEM: "aliasProblem",
    ResultCode.INVALID_DN_SYNTAX: "invalidDNSyntax",
    ResultCode.ALIAS_DEREFERENCING_PROBLEM: "aliasDereferencingProblem",
    ResultCode.INAPPROPRIATE_AUTHENTICATION: "inappropriateAuthentication",
    ResultCode.INVALID_CREDENTIALS: "invalidCredentials",
    ResultCode.INSUFFICIENT_ACCESS_RIGHTS: "insufficientAccessRights",
    ResultCode.BUSY: "busy",
    ResultCode.UNAVAILABLE: "unavailable",
    ResultCode.UNWILLING_TO_PERFORM: "unwillingToPerform",
    ResultCode.LOOP_DETECT: "loopDetect",
    ResultCode.NAMING_VIOLATION: "namingViolation",
    ResultCode.OBJECT_CLASS_VIOLATION: "objectClassViolation",
    ResultCode.NOT_ALLOWED_ON_NON_LEAF: "notAllowedOnNonLeaf",
    ResultCode.NOT_ALLOWED_ON_RDN: "notAllowedOnRDN",
    ResultCode.ENTRY_ALREADY_EXISTS: "entryAlreadyExists",
    ResultCode.OBJECT_CLASS_MODS_PROHIBITED: "objectClassModsProhibited",
    ResultCode.AFFECTS_MULTIPLE_DSAS: "affectsMultipleDSAs",
    ResultCode.OTHER: "other",
}


def result_code_name(code: int) -> str:
    """Return the protocol name of a result code; raise ValueError if unknown."""
    try:
        return RESULT_CODE_NAMES[code]
    except KeyError:
        raise ValueError(f"unknown result code {code}") from None