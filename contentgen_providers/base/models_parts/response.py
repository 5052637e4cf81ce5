"""
Response value objects returned by content generators.

``GenerateContentResponse`` is produced fresh for every emitted unit (one per
non-streaming call, one per stream flush) and never mutated afterwards.
``candidates`` / ``to_dict`` render it in the Google response shape whatever
backend served the request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .finish_reason import FinishReason


@dataclass(frozen=True)
class FunctionCallResult:
    """A tool call requested by the model, with arguments already parsed."""

    name: str
    args: Mapping[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.args, MappingProxyType):
            object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "args": dict(self.args)}
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass(frozen=True)
class GenerateContentResponse:
    """Text, tool calls and finish reason of one model turn (or stream flush)."""

    text: str = ""
    function_calls: Optional[Tuple[FunctionCallResult, ...]] = None
    finish_reason: Optional[FinishReason] = None

    def __post_init__(self) -> None:
        calls = self.function_calls
        if calls is not None and not isinstance(calls, tuple):
            object.__setattr__(self, "function_calls", tuple(calls))
        if calls is not None and len(calls) == 0:
            object.__setattr__(self, "function_calls", None)

    @property
    def candidates(self) -> List[Dict[str, Any]]:
        parts: List[Dict[str, Any]] = []
        if self.text:
            parts.append({"text": self.text})
        for call in self.function_calls or ():
            parts.append({"functionCall": call.to_dict()})
        candidate: Dict[str, Any] = {
            "content": {"role": "model", "parts": parts or [{"text": ""}]},
            "index": 0,
            "safetyRatings": [],
        }
        if self.finish_reason is not None:
            candidate["finishReason"] = self.finish_reason.google_name
        return [candidate]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidates": self.candidates,
            "text": self.text,
            "functionCalls": [c.to_dict() for c in self.function_calls] if self.function_calls else None,
            "finishReason": self.finish_reason.value if self.finish_reason else None,
        }


@dataclass(frozen=True)
class CountTokensResponse:
    total_tokens: int

    def to_dict(self) -> Dict[str, Any]:
        return {"totalTokens": self.total_tokens}


@dataclass(frozen=True)
class EmbedContentResponse:
    embedding: Tuple[float, ...]

    def __post_init__(self) -> None:
        emb: Sequence[float] = self.embedding
        if not isinstance(emb, tuple):
            object.__setattr__(self, "embedding", tuple(float(v) for v in emb))

    def to_dict(self) -> Dict[str, Any]:
        return {"embedding": list(self.embedding)}


__all__ = [
    "FunctionCallResult",
    "GenerateContentResponse",
    "CountTokensResponse",
    "EmbedContentResponse",
]
