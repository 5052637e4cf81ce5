"""Error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``contentgen_providers.base.errors_parts``.

Setup-time (fatal, never retried): ``UnresolvedAuthError``,
``MissingCredentialError``, ``UnsupportedProviderError``.
Call-time: ``ProviderCallError`` tagged with the backend name.
Recovered locally: ``PartialParseError``.
"""

from .errors_parts import (
    ErrorCode,
    RETRYABLE_CODES,
    ProviderError,
    ProviderCallError,
    ResolutionError,
    UnresolvedAuthError,
    MissingCredentialError,
    UnsupportedProviderError,
    PartialParseError,
    classify_exception,
    wrap_call_error,
)

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "ProviderCallError",
    "ResolutionError",
    "UnresolvedAuthError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "PartialParseError",
    "classify_exception",
    "wrap_call_error",
]
