"""Timeout and retry defaults for backend calls.

The values are contracts handed to the SDK clients (``openai.OpenAI`` and
``google.genai.Client``); nothing in this package enforces a deadline or
retries a call itself.

Environment overrides (optional):
    CONTENTGEN_TIMEOUT_SECONDS
    CONTENTGEN_MAX_RETRIES
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..config.defaults import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT_SECONDS
from ..config.env import read_env

TIMEOUT_ENV = "CONTENTGEN_TIMEOUT_SECONDS"
MAX_RETRIES_ENV = "CONTENTGEN_MAX_RETRIES"


@dataclass(frozen=True)
class TimeoutConfig:
    """Per-request timeout (seconds) and SDK-level retry budget."""

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES


def _parse_env_float(name: str, default: float, env: Optional[Mapping[str, str]]) -> float:
    """Parse ``name`` as a positive float; fall back to ``default`` otherwise."""
    raw = read_env(name, env)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _parse_env_int(name: str, default: int, env: Optional[Mapping[str, str]]) -> int:
    """Parse ``name`` as a non-negative int; fall back to ``default`` otherwise."""
    raw = read_env(name, env)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val >= 0 else default


def get_timeout_config(env: Optional[Mapping[str, str]] = None) -> TimeoutConfig:
    """Return the timeout/retry policy from ``env`` with package defaults."""
    return TimeoutConfig(
        timeout_seconds=_parse_env_float(TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS, env),
        max_retries=_parse_env_int(MAX_RETRIES_ENV, DEFAULT_MAX_RETRIES, env),
    )


__all__ = [
    "TIMEOUT_ENV",
    "MAX_RETRIES_ENV",
    "TimeoutConfig",
    "get_timeout_config",
]
