"""GeneratorConfig construction from settings, config file and environment."""

from __future__ import annotations

import dataclasses

import pytest

from contentgen_providers.auth import (
    AuthType,
    ProviderKind,
    ResolvedAuth,
    Settings,
    create_generator_config,
)


def _resolved(auth: AuthType, provider: ProviderKind = ProviderKind.GEMINI) -> ResolvedAuth:
    return ResolvedAuth(auth, provider, "test")


def test_gemini_key_from_environment(env):
    env["GEMINI_API_KEY"] = "g-key"
    cfg = create_generator_config(None, _resolved(AuthType.USE_GEMINI), env)
    assert cfg.api_key == "g-key"  # nosec B101
    assert cfg.model == "gemini-2.5-pro"  # nosec B101
    assert cfg.vertexai is False  # nosec B101


def test_vertex_reads_google_api_key_and_project(env):
    env.update({"GOOGLE_API_KEY": "v-key", "GOOGLE_CLOUD_PROJECT": "proj", "GOOGLE_CLOUD_LOCATION": "eu"})
    cfg = create_generator_config({}, _resolved(AuthType.USE_VERTEX_AI), env)
    assert cfg.vertexai is True  # nosec B101
    assert cfg.api_key == "v-key"  # nosec B101
    assert (cfg.project, cfg.location) == ("proj", "eu")  # nosec B101


def test_code_assist_has_no_key(env):
    env["GEMINI_API_KEY"] = "g-key"
    cfg = create_generator_config({}, _resolved(AuthType.LOGIN_WITH_GOOGLE), env)
    assert cfg.api_key is None  # nosec B101


def test_openai_family_defaults_per_alias(env):
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.OLLAMA), env)
    assert cfg.model == "llama3"  # nosec B101
    assert cfg.api_key is None  # nosec B101
    assert cfg.base_url is None  # nosec B101


def test_settings_override_env(env):
    env.update({"OPENAI_API_KEY": "env-key", "OPENAI_MODEL": "env-model", "OPENAI_BASE_URL": "http://env"})
    settings = Settings(apiKey="set-key", model="set-model", baseURL="http://set")
    cfg = create_generator_config(settings, _resolved(AuthType.USE_OPENAI, ProviderKind.OPENAI), env)
    assert (cfg.api_key, cfg.model, cfg.base_url) == ("set-key", "set-model", "http://set")  # nosec B101


def test_env_model_and_base_url_used_without_settings(env):
    env.update({"DEEPSEEK_API_KEY": "d", "DEEPSEEK_MODEL": "deepseek-coder", "DEEPSEEK_BASE_URL": "http://ds"})
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.DEEPSEEK), env)
    assert (cfg.api_key, cfg.model, cfg.base_url) == ("d", "deepseek-coder", "http://ds")  # nosec B101


def test_deepseek_accepts_openai_key_alias(env):
    env["OPENAI_API_KEY"] = "shared"
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.DEEPSEEK), env)
    assert cfg.api_key == "shared"  # nosec B101


def test_gemini_default_model_is_dropped_for_openai_family(env):
    settings = {"model": "gemini-2.5-pro"}
    cfg = create_generator_config(settings, _resolved(AuthType.USE_OPENAI, ProviderKind.OPENAI), env)
    assert cfg.model == "gpt-4o-mini"  # nosec B101


def test_timeouts_from_env_and_settings(env):
    env.update({"CONTENTGEN_TIMEOUT_SECONDS": "30", "CONTENTGEN_MAX_RETRIES": "1"})
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.OLLAMA), env)
    assert (cfg.timeout_seconds, cfg.max_retries) == (30.0, 1)  # nosec B101
    cfg = create_generator_config(
        {"timeoutSeconds": 5, "maxRetries": 0}, _resolved(AuthType.USE_OPENAI, ProviderKind.OLLAMA), env
    )
    assert (cfg.timeout_seconds, cfg.max_retries) == (5.0, 0)  # nosec B101


def test_config_file_layer_sits_below_env(env, tmp_path):
    path = tmp_path / "contentgen.yaml"
    path.write_text("ollama:\n  model: qwen2.5-coder\n  base_url: http://gpu-box:11434\n", encoding="utf-8")
    env["CONTENTGEN_CONFIG_FILE"] = str(path)
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.OLLAMA), env)
    assert cfg.model == "qwen2.5-coder"  # nosec B101
    assert cfg.base_url == "http://gpu-box:11434"  # nosec B101

    env["OLLAMA_MODEL"] = "llama3.1"
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.OLLAMA), env)
    assert cfg.model == "llama3.1"  # nosec B101


def test_transport_and_sampling_from_settings(env):
    settings = {
        "proxy": "http://proxy:3128",
        "verify": False,
        "samplingParams": {"temperature": 0.2},
        "streamFlushThreshold": 32,
    }
    cfg = create_generator_config(settings, _resolved(AuthType.USE_OPENAI, ProviderKind.OLLAMA), env)
    assert cfg.proxy == "http://proxy:3128"  # nosec B101
    assert cfg.transport.verify_tls is False  # nosec B101
    assert dict(cfg.sampling_params) == {"temperature": 0.2}  # nosec B101
    assert cfg.stream_flush_threshold == 32  # nosec B101


def test_config_is_immutable_and_redacts_key(env):
    env["OPENAI_API_KEY"] = "sk-very-secret"
    cfg = create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.OPENAI), env)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.model = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        cfg.sampling_params["temperature"] = 1.0  # type: ignore[index]
    assert "sk-very-secret" not in repr(cfg)  # nosec B101


def test_config_build_logs_without_key(env, log_events):
    env["OPENAI_API_KEY"] = "sk-very-secret"
    create_generator_config({}, _resolved(AuthType.USE_OPENAI, ProviderKind.OPENAI), env)
    events = log_events.events("generator.config")
    assert events and events[-1]["has_api_key"] is True  # nosec B101
    assert "sk-very-secret" not in str(events)  # nosec B101
