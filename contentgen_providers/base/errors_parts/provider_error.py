"""
Structured provider error types.

``ProviderError`` carries a normalized :class:`ErrorCode` plus the backend
identity. ``ProviderCallError`` is the call-time specialization raised when an
SDK or HTTP request against a specific backend fails; it always chains the
original exception.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Structured error tagged with a normalized code and the backend name.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Backend where the error originated (e.g. ``"deepseek"``).
        model: Optional model name associated with the failure.
        retryable: Hint for the caller's retry policy. This layer never retries.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass
class ProviderCallError(ProviderError):
    """A request to a backend failed (network, HTTP status, SDK error).

    ``phase`` names the operation that failed (``generate``, ``stream``,
    ``embed``, ``count_tokens``) so operators can tell a provider outage apart
    from a configuration error raised during setup.
    """

    phase: str = "generate"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.phase} {self.code.value}: {self.message}"


__all__ = ["ProviderError", "ProviderCallError"]
