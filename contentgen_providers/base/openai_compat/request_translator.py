"""Translate internal content and tool declarations to chat-completions form.

Purpose
-------
Pure functions mapping the Google-shaped internal contract
(:class:`Content`, :class:`Tool`, Google-named sampling knobs) to a validated
:class:`OpenAIChatRequest`.

Message rules
-------------
- role ``model`` becomes ``assistant``.
- A message holding a ``function_response`` part becomes a ``tool`` message
  whose ``tool_call_id`` is the response id and whose content is the
  stringified payload.
- Otherwise a ``function_call`` part is replayed as the JSON text of the call.
- Otherwise text parts are concatenated in order. Messages without text keep
  their slot with empty content.

Translation is deterministic: identical input yields identical params.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..models import Content, FunctionDeclaration, Tool
from .wire import ChatMessage, FunctionSpec, OpenAIChatRequest, ToolSpec

_ROLE_MAP = {"model": "assistant", "user": "user", "tool": "tool"}

_SCHEMA_TYPES = {
    "STRING": "string",
    "NUMBER": "number",
    "INTEGER": "integer",
    "BOOLEAN": "boolean",
    "ARRAY": "array",
    "OBJECT": "object",
}

_INT_KEYWORDS = ("minLength", "maxLength", "minItems", "maxItems")

# Google generation-config names that differ from chat-completions names.
_SAMPLING_RENAMES = {
    "maxOutputTokens": "max_tokens",
    "topP": "top_p",
    "topK": "top_k",
    "presencePenalty": "presence_penalty",
    "frequencyPenalty": "frequency_penalty",
    "stopSequences": "stop",
    "candidateCount": "n",
}


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def stringify_tool_payload(payload: Any) -> str:
    """Render a tool result as message content.

    Strings pass through. Mappings yield their ``output`` field, else their
    ``content`` field, else their whole JSON text. Anything else is JSON.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, Mapping):
        for key in ("output", "content"):
            if key in payload:
                inner = payload[key]
                return inner if isinstance(inner, str) else _dumps(inner)
        return _dumps(dict(payload))
    return _dumps(payload)


def to_chat_message(content: Content) -> ChatMessage:
    response_part = next((p for p in content.parts if p.function_response is not None), None)
    if response_part is not None:
        fr = response_part.function_response
        return ChatMessage(role="tool", tool_call_id=fr.id, content=stringify_tool_payload(fr.response))

    role = _ROLE_MAP[content.role]
    call_part = next((p for p in content.parts if p.function_call is not None), None)
    if call_part is not None:
        return ChatMessage(role=role, content=_dumps(call_part.function_call.to_dict()))

    return ChatMessage(role=role, content="".join(p.text or "" for p in content.parts))


def to_messages(contents: Iterable[Content]) -> List[ChatMessage]:
    return [to_chat_message(c) for c in contents]


def _schema_type(tag: Any) -> Any:
    if not isinstance(tag, str):
        return tag
    return _SCHEMA_TYPES.get(tag.upper(), tag.lower())


def _coerce_int(value: Any) -> Any:
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return value


def convert_schema(schema: Any) -> Any:
    """Convert a Google parameter schema to JSON Schema, recursively.

    Non-mapping input is returned unchanged. The input is never mutated.
    """
    if not isinstance(schema, Mapping):
        return schema
    converted: Dict[str, Any] = dict(schema)
    if "type" in converted:
        converted["type"] = _schema_type(converted["type"])
    props = converted.get("properties")
    if isinstance(props, Mapping):
        converted["properties"] = {name: convert_schema(prop) for name, prop in props.items()}
    if "items" in converted:
        converted["items"] = convert_schema(converted["items"])
    for key in _INT_KEYWORDS:
        if key in converted:
            converted[key] = _coerce_int(converted[key])
    return converted


def to_tool_spec(decl: FunctionDeclaration) -> ToolSpec:
    return ToolSpec(
        function=FunctionSpec(
            name=decl.name,
            description=decl.description,
            parameters=convert_schema(decl.parameters),
        )
    )


def to_tools(tools: Iterable[Tool]) -> List[ToolSpec]:
    return [to_tool_spec(decl) for tool in tools for decl in tool.function_declarations]


def map_sampling(sampling: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Rename Google knobs to chat-completions names; forward present keys only."""
    out: Dict[str, Any] = {}
    for name, value in (sampling or {}).items():
        if value is None:
            continue
        out[_SAMPLING_RENAMES.get(name, name)] = value
    return out


def to_provider_request(
    contents: Sequence[Content],
    tools: Sequence[Tool] = (),
    sampling: Optional[Mapping[str, Any]] = None,
    *,
    model: str,
    stream: bool = False,
) -> OpenAIChatRequest:
    """Build the validated chat-completions request for one call."""
    tool_specs = to_tools(tools)
    return OpenAIChatRequest(
        model=model,
        messages=to_messages(contents),
        stream=stream,
        tools=tool_specs or None,
        tool_choice="auto" if tool_specs else None,
        sampling=map_sampling(sampling),
    )


__all__ = [
    "stringify_tool_payload",
    "to_chat_message",
    "to_messages",
    "convert_schema",
    "to_tool_spec",
    "to_tools",
    "map_sampling",
    "to_provider_request",
]
