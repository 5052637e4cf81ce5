"""
Setup-time errors raised while resolving auth and building a generator.

All three are fatal for the session: they surface before any network call and
are never retried. They derive from :class:`ResolutionError` so callers (for
example the CLI) can report configuration problems with a single ``except``.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode


class ResolutionError(Exception):
    """Base class for auth / provider resolution failures."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider


class UnresolvedAuthError(ResolutionError):
    """No auth method could be determined and no interactive fallback exists."""

    code = ErrorCode.UNRESOLVED_AUTH


class MissingCredentialError(ResolutionError):
    """The selected backend needs an API key that was not supplied."""

    code = ErrorCode.MISSING_CREDENTIAL


class UnsupportedProviderError(ResolutionError):
    """The provider / auth pair matches no registered generator."""

    code = ErrorCode.UNSUPPORTED


__all__ = [
    "ResolutionError",
    "UnresolvedAuthError",
    "MissingCredentialError",
    "UnsupportedProviderError",
]
