"""Per-alias conventions of the OpenAI-compatible backend family.

``openai``, ``deepseek`` and ``ollama`` speak the same chat-completions
protocol. They differ only in default host, required path suffix, credential
rules and extra headers, which this module captures as data.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ...auth.selection import ProviderKind
from ...config.defaults import (
    DEEPSEEK_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_OPENAI_PATH_SUFFIX,
    OLLAMA_PLACEHOLDER_API_KEY,
    OPENAI_DEFAULT_BASE_URL,
)
from ..errors import UnsupportedProviderError


@dataclass(frozen=True)
class AliasProfile:
    """Connection conventions for one OpenAI-compatible alias.

    Attributes:
        kind: The alias.
        default_base_url: Host used when nothing is configured.
        path_suffix: Path the API lives under; appended when the configured
            base URL lacks it.
        placeholder_api_key: Sent when no key is configured, for aliases that
            do not authenticate. ``None`` means a real key is required.
    """

    kind: ProviderKind
    default_base_url: str
    path_suffix: Optional[str] = None
    placeholder_api_key: Optional[str] = None

    @property
    def requires_api_key(self) -> bool:
        return self.placeholder_api_key is None

    def resolve_base_url(self, configured: Optional[str]) -> str:
        url = (configured or self.default_base_url).rstrip("/")
        if self.path_suffix and not url.endswith(self.path_suffix):
            url += self.path_suffix
        return url

    def effective_api_key(self, configured: Optional[str]) -> Optional[str]:
        return configured or self.placeholder_api_key

    def headers(self, api_key: Optional[str], api_version: Optional[str] = None) -> Dict[str, str]:
        """Alias-specific default headers sent with every request."""
        if self.kind is ProviderKind.OPENAI:
            return {"OpenAI-Version": api_version} if api_version else {}
        if self.kind is ProviderKind.DEEPSEEK:
            # Some DeepSeek accounts authenticate through this header only.
            return {"X-API-KEY": api_key} if api_key else {}
        if self.kind is ProviderKind.OLLAMA:
            return {}
        raise UnsupportedProviderError(
            f"'{self.kind.value}' is not an OpenAI-compatible provider", provider=self.kind.value
        )


ALIAS_PROFILES: Dict[ProviderKind, AliasProfile] = {
    ProviderKind.OPENAI: AliasProfile(ProviderKind.OPENAI, OPENAI_DEFAULT_BASE_URL),
    ProviderKind.DEEPSEEK: AliasProfile(ProviderKind.DEEPSEEK, DEEPSEEK_DEFAULT_BASE_URL),
    ProviderKind.OLLAMA: AliasProfile(
        ProviderKind.OLLAMA,
        OLLAMA_DEFAULT_HOST,
        path_suffix=OLLAMA_OPENAI_PATH_SUFFIX,
        placeholder_api_key=OLLAMA_PLACEHOLDER_API_KEY,
    ),
}


def profile_for(kind: ProviderKind) -> AliasProfile:
    """Return the profile for ``kind``; Gemini has none."""
    try:
        return ALIAS_PROFILES[kind]
    except KeyError:
        raise UnsupportedProviderError(
            f"'{kind.value}' is not an OpenAI-compatible provider", provider=kind.value
        ) from None


__all__ = ["AliasProfile", "ALIAS_PROFILES", "profile_for"]
