"""GeneratorConfig and its construction from settings + environment.

``GeneratorConfig`` is built once per session and read-only afterwards. The
builder fills model, credential and endpoint from the layered config
(defaults -> config file -> environment -> settings) according to the
resolved auth method. It does not enforce credential presence; the factory
raises ``MissingCredentialError`` when a branch that needs a key has none.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..base.http import TransportConfig
from ..base.logging import get_logger, normalized_log_event
from ..base.timeouts import get_timeout_config
from ..config import get_provider_config
from ..config.defaults import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    GEMINI_DEFAULT_MODEL,
    STREAM_FLUSH_THRESHOLD,
)
from ..config.env import (
    ENV_MAP,
    GOOGLE_CLOUD_LOCATION_ENV,
    GOOGLE_CLOUD_PROJECT_ENV,
    read_env,
    resolve_provider_key,
)
from .selection import AuthType, ProviderKind, ResolvedAuth
from .settings import Settings

_logger = get_logger("contentgen.config")


@dataclass(frozen=True)
class GeneratorConfig:
    """Everything a generator needs, fixed for the session.

    ``api_key`` may be ``None``: code-assist sessions, Vertex with project and
    location credentials, and Ollama run without one.
    """

    model: str
    provider: ProviderKind
    auth_type: AuthType
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    api_version: Optional[str] = None
    vertexai: bool = False
    project: Optional[str] = None
    location: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    sampling_params: Mapping[str, float] = field(default_factory=dict)
    transport: TransportConfig = field(default_factory=TransportConfig)
    stream_flush_threshold: int = STREAM_FLUSH_THRESHOLD
    enable_logging: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.sampling_params, MappingProxyType):
            object.__setattr__(self, "sampling_params", MappingProxyType(dict(self.sampling_params)))

    @property
    def proxy(self) -> Optional[str]:
        return self.transport.proxy

    def __repr__(self) -> str:
        key = "***" if self.api_key else None
        return (
            f"GeneratorConfig(model={self.model!r}, provider={self.provider.value!r}, "
            f"auth_type={self.auth_type.value!r}, api_key={key!r}, base_url={self.base_url!r}, "
            f"vertexai={self.vertexai}, timeout_seconds={self.timeout_seconds}, "
            f"max_retries={self.max_retries})"
        )

    __str__ = __repr__


def _pick_api_key(
    resolved: ResolvedAuth,
    settings: Settings,
    layered: Mapping[str, Any],
    env: Mapping[str, str],
) -> Optional[str]:
    auth = resolved.auth_type
    if auth.uses_code_assist:
        return None
    if settings.api_key:
        return settings.api_key
    if auth is AuthType.USE_VERTEX_AI:
        return read_env(ENV_MAP["vertex"], env)
    if layered.get("api_key"):
        return str(layered["api_key"])
    key, _ = resolve_provider_key(resolved.provider.value, env)
    return key


def create_generator_config(
    settings: Union[Settings, Mapping[str, Any], None],
    resolved: ResolvedAuth,
    env: Optional[Mapping[str, str]] = None,
) -> GeneratorConfig:
    """Build the session's :class:`GeneratorConfig`.

    Parameters
    ----------
    settings:
        Session settings (model or raw mapping); ``None`` means all defaults.
    resolved:
        Output of :func:`resolve_auth`.
    env:
        Environment to consult; defaults to a snapshot of ``os.environ``.
    """
    env = dict(os.environ) if env is None else env
    if settings is None:
        settings = Settings()
    elif not isinstance(settings, Settings):
        settings = Settings.model_validate(settings)

    model_override = settings.model
    if resolved.provider.is_openai_compatible and model_override == GEMINI_DEFAULT_MODEL:
        # A leftover Gemini default must not be sent to an OpenAI-compatible host.
        model_override = None

    layered = get_provider_config(
        resolved.provider.value,
        overrides={
            "model": model_override,
            "base_url": settings.base_url,
            "api_version": settings.api_version,
        },
        env=env,
    )
    policy = get_timeout_config(env)
    vertexai = resolved.auth_type is AuthType.USE_VERTEX_AI

    config = GeneratorConfig(
        model=str(layered.get("model") or GEMINI_DEFAULT_MODEL),
        provider=resolved.provider,
        auth_type=resolved.auth_type,
        api_key=_pick_api_key(resolved, settings, layered, env),
        base_url=layered.get("base_url"),
        api_version=layered.get("api_version"),
        vertexai=vertexai,
        project=read_env(GOOGLE_CLOUD_PROJECT_ENV, env) if vertexai else None,
        location=read_env(GOOGLE_CLOUD_LOCATION_ENV, env) if vertexai else None,
        timeout_seconds=settings.timeout_seconds or policy.timeout_seconds,
        max_retries=settings.max_retries if settings.max_retries is not None else policy.max_retries,
        sampling_params=settings.sampling_params,
        transport=TransportConfig(proxy=settings.proxy, verify_tls=settings.verify_tls),
        stream_flush_threshold=settings.stream_flush_threshold or STREAM_FLUSH_THRESHOLD,
        enable_logging=settings.enable_logging,
    )
    normalized_log_event(
        _logger,
        "generator.config",
        phase="configure",
        provider=config.provider.value,
        model=config.model,
        auth_type=config.auth_type.value,
        has_api_key=bool(config.api_key),
        base_url=config.base_url,
    )
    return config


__all__ = ["GeneratorConfig", "create_generator_config"]
