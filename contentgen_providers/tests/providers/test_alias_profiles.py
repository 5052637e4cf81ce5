"""Per-alias URL, credential and header conventions."""

from __future__ import annotations

import pytest

from contentgen_providers.auth import ProviderKind
from contentgen_providers.base.errors import UnsupportedProviderError
from contentgen_providers.base.openai_compat import ALIAS_PROFILES, profile_for


@pytest.mark.parametrize(
    "configured, expected",
    [
        (None, "http://localhost:11434/v1"),
        ("http://gpu:11434", "http://gpu:11434/v1"),
        ("http://gpu:11434/", "http://gpu:11434/v1"),
        ("http://gpu:11434/v1", "http://gpu:11434/v1"),
    ],
)
def test_ollama_base_url_always_ends_in_v1(configured, expected):
    assert profile_for(ProviderKind.OLLAMA).resolve_base_url(configured) == expected  # nosec B101


def test_openai_and_deepseek_keep_configured_url():
    assert profile_for(ProviderKind.OPENAI).resolve_base_url(None) == "https://api.openai.com/v1"  # nosec B101
    assert profile_for(ProviderKind.DEEPSEEK).resolve_base_url("https://proxy/ds/") == "https://proxy/ds"  # nosec B101


def test_credential_rules():
    ollama = profile_for(ProviderKind.OLLAMA)
    assert not ollama.requires_api_key  # nosec B101
    assert ollama.effective_api_key(None) == "ollama"  # nosec B101
    assert ollama.effective_api_key("real") == "real"  # nosec B101
    assert profile_for(ProviderKind.OPENAI).requires_api_key  # nosec B101
    assert profile_for(ProviderKind.DEEPSEEK).effective_api_key(None) is None  # nosec B101


def test_alias_headers():
    assert profile_for(ProviderKind.DEEPSEEK).headers("dk") == {"X-API-KEY": "dk"}  # nosec B101
    assert profile_for(ProviderKind.OPENAI).headers("sk", "2024-06-01") == {"OpenAI-Version": "2024-06-01"}  # nosec B101
    assert profile_for(ProviderKind.OPENAI).headers("sk") == {}  # nosec B101
    assert profile_for(ProviderKind.OLLAMA).headers("ollama") == {}  # nosec B101


def test_gemini_has_no_profile():
    assert ProviderKind.GEMINI not in ALIAS_PROFILES  # nosec B101
    with pytest.raises(UnsupportedProviderError):
        profile_for(ProviderKind.GEMINI)
