"""Session wiring: settings + environment -> ready ``ContentGenerator``.

Runs the three setup steps in order: resolve the auth method, build the
:class:`GeneratorConfig`, and let the factory build the generator. Every
setup failure is a :class:`ResolutionError` subclass and is raised before any
network call.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .auth import GeneratorConfig, ResolvedAuth, Settings, create_generator_config, resolve_auth
from .base.factory import CodeAssistFactory, GeneratorFactory
from .base.interfaces import ContentGenerator
from .base.logging import configure_logger


@dataclass(frozen=True)
class GeneratorSession:
    """The resolved selection, its config and the generator built from them."""

    resolved: ResolvedAuth
    config: GeneratorConfig
    generator: ContentGenerator


def _coerce_settings(settings: Union[Settings, Mapping[str, Any], None]) -> Settings:
    if settings is None:
        return Settings()
    if isinstance(settings, Settings):
        return settings
    return Settings.model_validate(settings)


def create_session(
    settings: Union[Settings, Mapping[str, Any], None] = None,
    env: Optional[Mapping[str, str]] = None,
    *,
    code_assist_factory: Optional[CodeAssistFactory] = None,
    **generator_kwargs: Any,
) -> GeneratorSession:
    """Resolve, configure and build in one call (non-interactive).

    ``generator_kwargs`` are forwarded to the generator constructor, e.g. an
    injected SDK ``client``.
    """
    env = dict(os.environ) if env is None else env
    settings = _coerce_settings(settings)
    if settings.enable_logging:
        configure_logger(level="DEBUG")
    resolved = resolve_auth(settings.selected_auth_type, settings.provider, env)
    config = create_generator_config(settings, resolved, env)
    generator = GeneratorFactory.build(config, code_assist_factory=code_assist_factory, **generator_kwargs)
    return GeneratorSession(resolved=resolved, config=config, generator=generator)


def create_content_generator(
    settings: Union[Settings, Mapping[str, Any], None] = None,
    env: Optional[Mapping[str, str]] = None,
    *,
    code_assist_factory: Optional[CodeAssistFactory] = None,
    **generator_kwargs: Any,
) -> ContentGenerator:
    return create_session(settings, env, code_assist_factory=code_assist_factory, **generator_kwargs).generator


__all__ = ["GeneratorSession", "create_session", "create_content_generator"]
