"""Pydantic schemas for the OpenAI chat-completions wire format.

Purpose
-------
Validate both directions at the boundary instead of passing loosely shaped
objects around:

- Outbound: :class:`OpenAIChatRequest` is what the request translator
  produces; ``to_params()`` returns the keyword arguments for
  ``client.chat.completions.create``.
- Inbound: :class:`OpenAIStreamChunk`, :class:`OpenAIChatCompletion` and
  :class:`OpenAIEmbeddingResponse` are validated from SDK objects (attribute
  access), plain dicts, or test doubles via ``from_attributes``.

External dependencies
---------------------
- Pydantic v2. No SDK imports; the schemas are SDK-version agnostic.

Failure modes
-------------
- ``pydantic.ValidationError`` when a provider payload has the wrong types.
  Unknown fields are ignored.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["system", "user", "assistant", "tool"]

# Chat-completions parameters the OpenAI SDK accepts as keyword arguments.
# Other sampling knobs travel in ``extra_body`` under their own name.
SDK_SAMPLING_PARAMS = frozenset(
    {
        "temperature",
        "max_tokens",
        "top_p",
        "presence_penalty",
        "frequency_penalty",
        "stop",
        "seed",
        "n",
        "logprobs",
        "top_logprobs",
    }
)


class _WireModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


# ---------------------------------------------------------------- outbound


class FunctionSpec(BaseModel):
    name: str
    description: str = ""
    parameters: Optional[Any] = None


class ToolSpec(BaseModel):
    type: Literal["function"] = "function"
    function: FunctionSpec


class ChatMessage(BaseModel):
    """One outbound message. ``content`` is always a string, possibly empty."""

    role: ChatRole
    content: str = ""
    tool_call_id: Optional[str] = None


class OpenAIChatRequest(BaseModel):
    """A complete, validated chat-completions request."""

    model: str
    messages: List[ChatMessage]
    stream: bool = False
    tools: Optional[List[ToolSpec]] = None
    tool_choice: Optional[Literal["auto", "none", "required"]] = None
    sampling: Dict[str, Any] = Field(default_factory=dict)

    def to_params(self) -> Dict[str, Any]:
        """Keyword arguments for ``client.chat.completions.create``."""
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.model_dump(exclude_none=True) for m in self.messages],
        }
        if self.stream:
            params["stream"] = True
        if self.tools:
            params["tools"] = [t.model_dump(exclude_none=True) for t in self.tools]
            params["tool_choice"] = self.tool_choice or "auto"
        extra_body: Dict[str, Any] = {}
        for name, value in self.sampling.items():
            if name in SDK_SAMPLING_PARAMS:
                params[name] = value
            else:
                extra_body[name] = value
        if extra_body:
            params["extra_body"] = extra_body
        return params


# ----------------------------------------------------------------- inbound


class FunctionDelta(_WireModel):
    name: Optional[str] = None
    arguments: Union[str, Dict[str, Any], None] = None


class ToolCallDelta(_WireModel):
    index: int = 0
    id: Optional[str] = None
    function: Optional[FunctionDelta] = None


class ChoiceDelta(_WireModel):
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None


class StreamChoice(_WireModel):
    index: int = 0
    delta: Optional[ChoiceDelta] = None
    finish_reason: Optional[str] = None


class Usage(_WireModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {"prompt": self.prompt_tokens, "completion": self.completion_tokens, "total": self.total_tokens}


class OpenAIStreamChunk(_WireModel):
    id: Optional[str] = None
    choices: Optional[List[StreamChoice]] = None
    usage: Optional[Usage] = None

    @property
    def first_choice(self) -> Optional[StreamChoice]:
        return self.choices[0] if self.choices else None


class ToolCallFunction(_WireModel):
    name: Optional[str] = None
    arguments: Union[str, Dict[str, Any], None] = None


class ToolCall(_WireModel):
    id: Optional[str] = None
    function: Optional[ToolCallFunction] = None


class AssistantMessage(_WireModel):
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class CompletionChoice(_WireModel):
    index: int = 0
    message: Optional[AssistantMessage] = None
    finish_reason: Optional[str] = None


class OpenAIChatCompletion(_WireModel):
    id: Optional[str] = None
    choices: Optional[List[CompletionChoice]] = None
    usage: Optional[Usage] = None

    @property
    def first_choice(self) -> Optional[CompletionChoice]:
        return self.choices[0] if self.choices else None


class EmbeddingItem(_WireModel):
    index: int = 0
    embedding: List[float] = Field(default_factory=list)


class OpenAIEmbeddingResponse(_WireModel):
    data: Optional[List[EmbeddingItem]] = None


__all__ = [
    "SDK_SAMPLING_PARAMS",
    "FunctionSpec",
    "ToolSpec",
    "ChatMessage",
    "OpenAIChatRequest",
    "FunctionDelta",
    "ToolCallDelta",
    "ChoiceDelta",
    "StreamChoice",
    "Usage",
    "OpenAIStreamChunk",
    "ToolCallFunction",
    "ToolCall",
    "AssistantMessage",
    "CompletionChoice",
    "OpenAIChatCompletion",
    "EmbeddingItem",
    "OpenAIEmbeddingResponse",
]
