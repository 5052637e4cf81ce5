"""
Map arbitrary SDK / transport exceptions onto :class:`ErrorCode`.

Precedence is: passthrough of already-structured errors, timeouts, HTTP status
(read from ``status_code`` / ``status`` / ``response.status_code``), then a
message substring heuristic, then ``UNKNOWN``. :func:`wrap_call_error` builds
the :class:`ProviderCallError` that generators raise from their ``except``
blocks.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderCallError, ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "status", "code"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# Order matters: the first group with a matching substring wins.
_MESSAGE_PATTERNS = (
    (ErrorCode.TIMEOUT, ("timed out", "timeout")),
    (ErrorCode.RATE_LIMIT, ("rate limit", "quota")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden", "permission")),
    (ErrorCode.TRANSIENT, ("connection", "reset by peer")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    for code, patterns in _MESSAGE_PATTERNS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`."""
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_call_error(
    exc: BaseException,
    *,
    provider: str,
    model: Optional[str],
    phase: str,
) -> ProviderCallError:
    """Build a :class:`ProviderCallError` for ``exc`` tagged with the backend.

    Callers are expected to ``raise wrap_call_error(...) from exc``. An
    exception that already is a ``ProviderCallError`` is returned unchanged.
    """
    if isinstance(exc, ProviderCallError):
        return exc
    code = classify_exception(exc)
    return ProviderCallError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc if isinstance(exc, Exception) else None,
        phase=phase,
    )


__all__ = [
    "classify_exception",
    "wrap_call_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
