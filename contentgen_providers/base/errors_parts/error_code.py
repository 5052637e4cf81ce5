"""
Normalized error codes for content generator failures.

``ErrorCode`` values are lowercase snake_case and appear verbatim in the
``error_code`` field of structured log events, so treat them as a stable
contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure categories shared by every backend."""

    AUTH = "auth"
    MISSING_CREDENTIAL = "missing_credential"
    UNRESOLVED_AUTH = "unresolved_auth"
    UNSUPPORTED = "unsupported"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    PARSE = "parse"
    UNKNOWN = "unknown"


RETRYABLE_CODES = frozenset(
    {ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE}
)


__all__ = ["ErrorCode", "RETRYABLE_CODES"]
