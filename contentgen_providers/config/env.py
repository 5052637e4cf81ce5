"""contentgen_providers.config.env
==============================

Environment variable names consulted by the resolver and config builder, and
small helpers that read them.

Every helper takes the environment as an explicit mapping (defaulting to
``os.environ``) and only reads it. Nothing in this package writes to the
process environment.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Mapping, Optional, Tuple

# Auth-mode flags
USE_GCA_ENV = "GOOGLE_GENAI_USE_GCA"
USE_VERTEXAI_ENV = "GOOGLE_GENAI_USE_VERTEXAI"
CLOUD_SHELL_ENV = "CLOUD_SHELL"

# Provider selection override used when settings carry no provider.
PROVIDER_OVERRIDE_ENV = "GEMINI_PROVIDER"

GOOGLE_CLOUD_PROJECT_ENV = "GOOGLE_CLOUD_PROJECT"
GOOGLE_CLOUD_LOCATION_ENV = "GOOGLE_CLOUD_LOCATION"

# Canonical provider -> API key env var
ENV_MAP: Dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "vertex": "GOOGLE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "ollama": "OLLAMA_API_KEY",
}

# Provider -> ordered acceptable names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "deepseek": ("DEEPSEEK_API_KEY", "OPENAI_API_KEY"),
}

# Field -> env suffix, combined with the upper-cased provider as prefix
# (``OPENAI_MODEL``, ``DEEPSEEK_BASE_URL`` ...).
ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "api_version": "API_VERSION",
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if env is None else env


def is_truthy(value: Optional[str]) -> bool:
    """Return True for ``1``/``true``/``yes``/``on`` (case-insensitive)."""
    return value is not None and value.strip().lower() in _TRUTHY


def flag_enabled(name: str, env: Optional[Mapping[str, str]] = None) -> bool:
    """Return whether the boolean env flag ``name`` is set to a truthy value."""
    return is_truthy(_env(env).get(name))


def read_env(name: str, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the stripped value of ``name``, or ``None`` when unset or blank."""
    val = _env(env).get(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API key env var for ``provider`` (or ``None``)."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API key env var names for ``provider``, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(
    provider: str, env: Optional[Mapping[str, str]] = None
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty candidate.

    ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        if val := read_env(name, env):
            return val, name
    return None, None


def provider_env_overrides(provider: str, env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect ``<PROVIDER>_<FIELD>`` values for ``provider`` from ``env``."""
    out: Dict[str, str] = {}
    prefix = (provider or "").upper()
    for field, suffix in ENV_FIELD_MAP.items():
        if val := read_env(f"{prefix}_{suffix}", env):
            out[field] = val
    return out


__all__ = [
    "USE_GCA_ENV",
    "USE_VERTEXAI_ENV",
    "CLOUD_SHELL_ENV",
    "PROVIDER_OVERRIDE_ENV",
    "GOOGLE_CLOUD_PROJECT_ENV",
    "GOOGLE_CLOUD_LOCATION_ENV",
    "ENV_MAP",
    "ENV_ALIASES",
    "ENV_FIELD_MAP",
    "is_truthy",
    "flag_enabled",
    "read_env",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
    "provider_env_overrides",
]
