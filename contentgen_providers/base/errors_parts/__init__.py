"""Errors parts package public surface.

Prefer importing from ``contentgen_providers.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError, ProviderCallError
from .resolution_errors import (
    ResolutionError,
    UnresolvedAuthError,
    MissingCredentialError,
    UnsupportedProviderError,
)
from .partial_parse_error import PartialParseError
from .classification import classify_exception, wrap_call_error

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
