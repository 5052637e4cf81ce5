"""Credential / provider resolution.

Purpose
-------
Turn session settings plus the environment into exactly one
:class:`ResolvedAuth` before any generator is built.

Precedence
----------
1. An explicit non-default provider (settings ``provider``, else the
   ``GEMINI_PROVIDER`` variable). ``openai``, ``deepseek`` and ``ollama`` all
   resolve to ``AuthType.USE_OPENAI``.
2. An explicit auth type (settings ``selectedAuthType``).
3. Environment, in order: ``GOOGLE_GENAI_USE_GCA`` (Cloud Shell when
   ``CLOUD_SHELL`` is also set), ``GOOGLE_GENAI_USE_VERTEXAI``,
   ``GEMINI_API_KEY``, ``OPENAI_API_KEY``.

Failure modes
-------------
- ``UnresolvedAuthError`` when nothing applies and the caller is
  non-interactive. Interactive callers get ``None`` and open their own dialog.
- ``UnsupportedProviderError`` for an unknown provider or auth string.

The environment mapping is only read; a snapshot of ``os.environ`` is taken
when none is passed.
"""
from __future__ import annotations

import os
from typing import Mapping, Optional, Union

from ..base.errors import UnresolvedAuthError
from ..base.logging import get_logger, normalized_log_event
from ..config.env import (
    CLOUD_SHELL_ENV,
    ENV_MAP,
    GOOGLE_CLOUD_LOCATION_ENV,
    GOOGLE_CLOUD_PROJECT_ENV,
    PROVIDER_OVERRIDE_ENV,
    USE_GCA_ENV,
    USE_VERTEXAI_ENV,
    flag_enabled,
    read_env,
    resolve_provider_key,
)
from .selection import DEFAULT_PROVIDER, AuthType, ProviderKind, ResolvedAuth

_logger = get_logger("contentgen.auth")


def _from_environment(env: Mapping[str, str]) -> Optional[ResolvedAuth]:
    if flag_enabled(USE_GCA_ENV, env):
        if flag_enabled(CLOUD_SHELL_ENV, env):
            return ResolvedAuth(AuthType.CLOUD_SHELL, ProviderKind.GEMINI, f"env:{USE_GCA_ENV}+{CLOUD_SHELL_ENV}")
        return ResolvedAuth(AuthType.LOGIN_WITH_GOOGLE, ProviderKind.GEMINI, f"env:{USE_GCA_ENV}")
    if flag_enabled(USE_VERTEXAI_ENV, env):
        return ResolvedAuth(AuthType.USE_VERTEX_AI, ProviderKind.GEMINI, f"env:{USE_VERTEXAI_ENV}")
    gemini_key = ENV_MAP["gemini"]
    if read_env(gemini_key, env):
        return ResolvedAuth(AuthType.USE_GEMINI, ProviderKind.GEMINI, f"env:{gemini_key}")
    openai_key = ENV_MAP["openai"]
    if read_env(openai_key, env):
        return ResolvedAuth(AuthType.USE_OPENAI, ProviderKind.OPENAI, f"env:{openai_key}")
    return None


def resolve_auth(
    explicit_auth: Union[str, AuthType, None] = None,
    provider: Union[str, ProviderKind, None] = None,
    env: Optional[Mapping[str, str]] = None,
    *,
    interactive: bool = False,
) -> Optional[ResolvedAuth]:
    """Resolve the session's auth method and backend.

    Parameters
    ----------
    explicit_auth:
        Auth type from settings (``selectedAuthType``), if any.
    provider:
        Provider from settings, if any. ``gemini`` is the default and does not
        override the environment.
    env:
        Environment to consult; defaults to a snapshot of ``os.environ``.
    interactive:
        When True an undeterminable selection returns ``None`` instead of
        raising.

    Returns
    -------
    ResolvedAuth | None
        ``None`` only in interactive mode.
    """
    env = dict(os.environ) if env is None else env
    resolved: Optional[ResolvedAuth] = None

    source = "settings.provider"
    if not provider:
        provider = read_env(PROVIDER_OVERRIDE_ENV, env)
        source = f"env:{PROVIDER_OVERRIDE_ENV}"
    if provider:
        kind = ProviderKind.parse(provider)
        if kind is not DEFAULT_PROVIDER:
            resolved = ResolvedAuth(AuthType.USE_OPENAI, kind, source)

    if resolved is None and explicit_auth:
        auth_type = AuthType.parse(explicit_auth)
        kind = ProviderKind.OPENAI if auth_type is AuthType.USE_OPENAI else ProviderKind.GEMINI
        resolved = ResolvedAuth(auth_type, kind, "settings.selectedAuthType")

    if resolved is None:
        resolved = _from_environment(env)

    if resolved is None:
        if interactive:
            return None
        raise UnresolvedAuthError(
            "No auth method configured. Set selectedAuthType or provider in settings, "
            f"or one of {USE_GCA_ENV}, {USE_VERTEXAI_ENV}, {ENV_MAP['gemini']}, {ENV_MAP['openai']}."
        )

    normalized_log_event(
        _logger,
        "auth.resolved",
        phase="resolve",
        auth_type=resolved.auth_type.value,
        provider=resolved.provider.value,
        source=resolved.source,
    )
    return resolved


def validate_auth_method(
    auth_type: Union[str, AuthType],
    env: Optional[Mapping[str, str]] = None,
    provider: Union[str, ProviderKind, None] = None,
) -> Optional[str]:
    """Return a human-readable problem with the chosen method, or ``None``.

    Checks only that the environment carries what the method needs; it does
    not contact any backend.
    """
    env = dict(os.environ) if env is None else env
    auth = AuthType.parse(auth_type)
    if auth.uses_code_assist:
        return None
    if auth is AuthType.USE_GEMINI:
        if not read_env(ENV_MAP["gemini"], env):
            return f"{ENV_MAP['gemini']} environment variable not found."
        return None
    if auth is AuthType.USE_VERTEX_AI:
        has_key = bool(read_env(ENV_MAP["vertex"], env))
        has_project = bool(read_env(GOOGLE_CLOUD_PROJECT_ENV, env) and read_env(GOOGLE_CLOUD_LOCATION_ENV, env))
        if not (has_key or has_project):
            return (
                "Vertex AI needs either "
                f"{ENV_MAP['vertex']} or both {GOOGLE_CLOUD_PROJECT_ENV} and {GOOGLE_CLOUD_LOCATION_ENV}."
            )
        return None
    kind = ProviderKind.parse(provider) if provider else ProviderKind.OPENAI
    if kind.requires_api_key:
        key, _ = resolve_provider_key(kind.value, env)
        if not key:
            return f"{ENV_MAP[kind.value]} environment variable not found."
    return None


__all__ = ["resolve_auth", "validate_auth_method"]
