"""
Closed sets of auth methods and backend kinds, and the resolved selection.

``AuthType`` values keep the wire spelling used in settings files
(``selectedAuthType``). ``ProviderKind`` is the concrete backend; the three
OpenAI-compatible kinds all share ``AuthType.USE_OPENAI`` and differ only in
host, headers and credential rules applied later by the factory.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from ..base.errors import UnsupportedProviderError


class AuthType(str, Enum):
    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"
    USE_OPENAI = "openai"

    @classmethod
    def parse(cls, value: "str | AuthType") -> "AuthType":
        """Accept an ``AuthType``, its value, or a descriptive alias.

        Raises ``UnsupportedProviderError`` for anything else.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in _AUTH_ALIASES:
            return _AUTH_ALIASES[key]
        raise UnsupportedProviderError(f"Unsupported auth type '{value}'")

    @property
    def uses_code_assist(self) -> bool:
        return self in (AuthType.LOGIN_WITH_GOOGLE, AuthType.CLOUD_SHELL)


_AUTH_ALIASES: Dict[str, AuthType] = {
    "google-oauth": AuthType.LOGIN_WITH_GOOGLE,
    "google-api-key": AuthType.USE_GEMINI,
    "vertex": AuthType.USE_VERTEX_AI,
    "openai-compatible": AuthType.USE_OPENAI,
}


class ProviderKind(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: "str | ProviderKind") -> "ProviderKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedProviderError(
                f"Unknown provider '{value}'; expected one of {[k.value for k in cls]}",
                provider=str(value),
            ) from None

    @property
    def is_openai_compatible(self) -> bool:
        return self is not ProviderKind.GEMINI

    @property
    def requires_api_key(self) -> bool:
        """Local inference (Ollama) runs without a credential."""
        return self is not ProviderKind.OLLAMA


DEFAULT_PROVIDER = ProviderKind.GEMINI


@dataclass(frozen=True)
class ResolvedAuth:
    """The single auth selection of a session.

    Attributes:
        auth_type: Auth method; drives which generator family is built.
        provider: Concrete backend.
        source: Where the decision came from (``settings.provider``,
            ``env:GEMINI_API_KEY`` ...), for diagnostics only.
    """

    auth_type: AuthType
    provider: ProviderKind
    source: str

    def to_dict(self) -> Dict[str, str]:
        return {"auth_type": self.auth_type.value, "provider": self.provider.value, "source": self.source}


__all__ = ["AuthType", "ProviderKind", "DEFAULT_PROVIDER", "ResolvedAuth"]
