from __future__ import annotations

from types import SimpleNamespace

import pytest

from contentgen_providers.auth import AuthType, GeneratorConfig, ProviderKind
from contentgen_providers.base.errors import MissingCredentialError, UnsupportedProviderError
from contentgen_providers.base.factory import GeneratorFactory, create_generator


def _cfg(auth: AuthType, provider: ProviderKind, **kw) -> GeneratorConfig:
    kw.setdefault("model", "m")
    return GeneratorConfig(provider=provider, auth_type=auth, **kw)


def _fake_client():
    return SimpleNamespace(chat=SimpleNamespace(completions=None), embeddings=None)


def test_ollama_builds_without_key():
    gen = GeneratorFactory.build(_cfg(AuthType.USE_OPENAI, ProviderKind.OLLAMA), client=_fake_client())
    assert type(gen).__name__ == "OpenAICompatibleGenerator"  # nosec B101
    assert gen.provider_name == "ollama"  # nosec B101
    assert gen.base_url.endswith("/v1")  # nosec B101


@pytest.mark.parametrize("provider", [ProviderKind.OPENAI, ProviderKind.DEEPSEEK])
def test_keyed_aliases_fail_without_key(provider):
    with pytest.raises(MissingCredentialError) as ei:
        GeneratorFactory.build(_cfg(AuthType.USE_OPENAI, provider), client=_fake_client())
    assert ei.value.provider == provider.value  # nosec B101


def test_gemini_without_key_fails_before_sdk_import(monkeypatch):
    def _boom(branch):
        raise AssertionError(f"{branch} should not be loaded")

    monkeypatch.setattr(GeneratorFactory, "_load", classmethod(lambda cls, branch: _boom(branch)))
    with pytest.raises(MissingCredentialError):
        GeneratorFactory.build(_cfg(AuthType.USE_GEMINI, ProviderKind.GEMINI))
    with pytest.raises(MissingCredentialError):
        GeneratorFactory.build(_cfg(AuthType.USE_VERTEX_AI, ProviderKind.GEMINI, vertexai=True, project="p"))


def test_gemini_builds_with_injected_client():
    gen = create_generator(
        _cfg(AuthType.USE_GEMINI, ProviderKind.GEMINI, api_key="k"),
        client=SimpleNamespace(models=None),
    )
    assert type(gen).__name__ == "GoogleGenAIGenerator"  # nosec B101
    assert gen.provider_name == "gemini"  # nosec B101


def test_vertex_with_project_and_location_needs_no_key():
    cfg = _cfg(AuthType.USE_VERTEX_AI, ProviderKind.GEMINI, vertexai=True, project="p", location="europe-west4")
    gen = GeneratorFactory.build(cfg, client=SimpleNamespace(models=None))
    assert gen.config.vertexai  # nosec B101


@pytest.mark.parametrize("auth", [AuthType.LOGIN_WITH_GOOGLE, AuthType.CLOUD_SHELL])
def test_code_assist_uses_collaborator(auth):
    seen = []
    sentinel = SimpleNamespace(provider_name="code-assist")

    def _factory(auth_type, config):
        seen.append((auth_type, config.model))
        return sentinel

    cfg = _cfg(auth, ProviderKind.GEMINI)
    assert GeneratorFactory.build(cfg, code_assist_factory=_factory) is sentinel  # nosec B101
    assert seen == [(auth, "m")]  # nosec B101


def test_code_assist_without_collaborator_is_unsupported():
    with pytest.raises(UnsupportedProviderError):
        GeneratorFactory.build(_cfg(AuthType.LOGIN_WITH_GOOGLE, ProviderKind.GEMINI))


def test_openai_auth_with_gemini_provider_is_unsupported():
    with pytest.raises(UnsupportedProviderError):
        GeneratorFactory.build(_cfg(AuthType.USE_OPENAI, ProviderKind.GEMINI, api_key="k"))


def test_factory_import_failure(monkeypatch):
    # Point the OpenAI-compatible branch at a module that does not exist
    monkeypatch.setattr(
        GeneratorFactory,
        "_GENERATORS",
        {"openai_compat": {"module": "does.not.exist", "class": "X"}},
        raising=False,
    )
    with pytest.raises(UnsupportedProviderError) as ei:
        GeneratorFactory.build(_cfg(AuthType.USE_OPENAI, ProviderKind.OLLAMA))
    assert isinstance(ei.value.__cause__, ImportError)  # nosec B101


def test_supported_lists_every_provider():
    assert GeneratorFactory.supported() == ("gemini", "openai", "deepseek", "ollama")  # nosec B101


def test_build_logs_generator_choice(log_events):
    GeneratorFactory.build(_cfg(AuthType.USE_OPENAI, ProviderKind.OLLAMA), client=_fake_client())
    (event,) = log_events.events("generator.build")
    assert event["generator"] == "OpenAICompatibleGenerator"  # nosec B101
    assert event["auth_type"] == "openai"  # nosec B101
    assert event["provider"] == "ollama"  # nosec B101
