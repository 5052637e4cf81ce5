from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from contentgen_providers import (
    AuthType,
    MissingCredentialError,
    ProviderKind,
    UnresolvedAuthError,
    create_content_generator,
    create_session,
)
from contentgen_providers.base.logging import configure_logger, get_logger


def _fake_client():
    return SimpleNamespace(chat=SimpleNamespace(completions=None), embeddings=None)


def test_provider_setting_builds_openai_compatible_session(env):
    session = create_session({"provider": "ollama", "model": "qwen2.5"}, env, client=_fake_client())
    assert session.resolved.auth_type is AuthType.USE_OPENAI  # nosec B101
    assert session.resolved.source == "settings.provider"  # nosec B101
    assert session.config.model == "qwen2.5"  # nosec B101
    assert session.generator.provider_name == "ollama"  # nosec B101


def test_environment_key_selects_openai(env):
    env["OPENAI_API_KEY"] = "sk-env"
    session = create_session(None, env, client=_fake_client())
    assert session.resolved.provider is ProviderKind.OPENAI  # nosec B101
    assert session.config.api_key == "sk-env"  # nosec B101


def test_nothing_configured_is_fatal(env):
    with pytest.raises(UnresolvedAuthError):
        create_session(None, env)


def test_missing_credential_surfaces_before_any_client(env):
    with pytest.raises(MissingCredentialError):
        create_session({"provider": "deepseek"}, env)


def test_code_assist_session_uses_collaborator(env):
    env.update({"GOOGLE_GENAI_USE_GCA": "true", "CLOUD_SHELL": "1"})
    built = SimpleNamespace(provider_name="code-assist")
    gen = create_content_generator(None, env, code_assist_factory=lambda auth, cfg: built)
    assert gen is built  # nosec B101


def test_enable_logging_raises_verbosity(env, monkeypatch):
    monkeypatch.delenv("CONTENTGEN_LOG_LEVEL", raising=False)
    configure_logger(level=logging.INFO)
    try:
        create_session({"provider": "ollama", "enableLogging": True}, env, client=_fake_client())
        assert get_logger().level == logging.DEBUG  # nosec B101
    finally:
        configure_logger(level=logging.INFO)
