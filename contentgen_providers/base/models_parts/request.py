"""
Requests accepted by every content generator.

``generation_config`` holds sampling knobs under their Google names
(``temperature``, ``maxOutputTokens``, ``topP`` ...). Only keys that are
present are forwarded to a backend; nothing is defaulted here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from .content import Content
from .tools import Tool


def _as_tuple(obj: Any, attr: str) -> None:
    value = getattr(obj, attr)
    if not isinstance(value, tuple):
        object.__setattr__(obj, attr, tuple(value))


@dataclass(frozen=True)
class GenerateContentRequest:
    """One generation call.

    Attributes:
        contents: Conversation so far, oldest first.
        tools: Tool groups the model may call.
        generation_config: Sampling parameters (Google spelling).
        model: Per-request model override; the session model otherwise.
    """

    contents: Tuple[Content, ...]
    tools: Tuple[Tool, ...] = ()
    generation_config: Mapping[str, Any] = field(default_factory=dict)
    model: Optional[str] = None

    def __post_init__(self) -> None:
        _as_tuple(self, "contents")
        _as_tuple(self, "tools")

    @classmethod
    def from_prompt(cls, prompt: str, **kwargs: Any) -> "GenerateContentRequest":
        return cls(contents=(Content.from_text(prompt),), **kwargs)


@dataclass(frozen=True)
class CountTokensRequest:
    contents: Tuple[Content, ...]
    model: Optional[str] = None

    def __post_init__(self) -> None:
        _as_tuple(self, "contents")


@dataclass(frozen=True)
class EmbedContentRequest:
    contents: Tuple[Content, ...]
    model: Optional[str] = None

    def __post_init__(self) -> None:
        _as_tuple(self, "contents")


__all__ = [
    "GenerateContentRequest",
    "CountTokensRequest",
    "EmbedContentRequest",
]
