"""
Normalized finish reasons and their mapping to/from provider spellings.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class FinishReason(str, Enum):
    """Why a model turn ended, independent of backend."""

    STOP = "stop"
    TOOL_CALLS = "tool_calls"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    OTHER = "other"

    @classmethod
    def from_provider(cls, value: Any) -> Optional["FinishReason"]:
        """Map an OpenAI-style string or a Google ``FinishReason`` to this enum.

        ``None`` (no finish reason on this chunk) stays ``None``; unknown
        values map to :attr:`OTHER`.
        """
        if value is None:
            return None
        raw = getattr(value, "value", value)
        key = str(raw).strip()
        if not key:
            return None
        return _PROVIDER_MAP.get(key, _PROVIDER_MAP.get(key.lower(), cls.OTHER))

    @property
    def google_name(self) -> str:
        """Google content-API spelling used in the ``candidates`` view."""
        return _GOOGLE_NAMES[self]


_PROVIDER_MAP: Dict[str, FinishReason] = {
    # OpenAI-compatible chat completions
    "stop": FinishReason.STOP,
    "tool_calls": FinishReason.TOOL_CALLS,
    "function_call": FinishReason.TOOL_CALLS,
    "length": FinishReason.LENGTH,
    "content_filter": FinishReason.CONTENT_FILTER,
    # Google content API
    "STOP": FinishReason.STOP,
    "MAX_TOKENS": FinishReason.LENGTH,
    "SAFETY": FinishReason.CONTENT_FILTER,
    "RECITATION": FinishReason.CONTENT_FILTER,
    "BLOCKLIST": FinishReason.CONTENT_FILTER,
    "PROHIBITED_CONTENT": FinishReason.CONTENT_FILTER,
    "SPII": FinishReason.CONTENT_FILTER,
}

_GOOGLE_NAMES: Dict[FinishReason, str] = {
    FinishReason.STOP: "STOP",
    # Google reports a plain STOP when the turn ends with function calls.
    FinishReason.TOOL_CALLS: "STOP",
    FinishReason.LENGTH: "MAX_TOKENS",
    FinishReason.CONTENT_FILTER: "SAFETY",
    FinishReason.OTHER: "OTHER",
}


__all__ = ["FinishReason"]
