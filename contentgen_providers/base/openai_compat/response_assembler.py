"""Build internal responses from chat-completions replies.

Used twice: once per flush by the stream normalizer, and once per call for
non-streaming replies. Replies without a message body produce an empty
response instead of an error.

Tool-call argument text that is not a JSON object raises
:class:`PartialParseError` inside :func:`parse_arguments`; :func:`build_call`
recovers from it with an empty argument mapping and a debug event.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..errors import PartialParseError
from ..logging import LogContext, get_logger, log_event
from ..models import FinishReason, FunctionCallResult, GenerateContentResponse
from .wire import OpenAIChatCompletion

_logger = get_logger("contentgen.openai_compat")


def parse_arguments(text: Union[str, Mapping[str, Any], None], name: Optional[str] = None) -> Dict[str, Any]:
    """Parse tool-call argument text into a mapping.

    Empty text means no arguments. Raises :class:`PartialParseError` for
    invalid JSON or JSON that is not an object.
    """
    if text is None:
        return {}
    if isinstance(text, Mapping):
        return dict(text)
    if not text.strip():
        return {}
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PartialParseError(text, name=name, reason=exc.msg) from exc
    if not isinstance(parsed, dict):
        raise PartialParseError(text, name=name, reason=f"expected an object, got {type(parsed).__name__}")
    return parsed


def build_call(
    name: Optional[str],
    arguments: Union[str, Mapping[str, Any], None],
    call_id: Optional[str] = None,
    *,
    ctx: Optional[LogContext] = None,
) -> FunctionCallResult:
    """Freeze one tool call, degrading unparseable arguments to ``{}``."""
    try:
        args = parse_arguments(arguments, name)
    except PartialParseError as exc:
        log_event(
            _logger,
            "stream.args_parse_failed",
            ctx,
            level=logging.DEBUG,
            function=name,
            call_id=call_id,
            reason=exc.reason,
            length=len(exc.text),
        )
        args = {}
    return FunctionCallResult(name=name or "", args=args, id=call_id)


def assemble_response(
    text: str = "",
    calls: Optional[Iterable[FunctionCallResult]] = None,
    finish_reason: Any = None,
) -> GenerateContentResponse:
    """Combine text, frozen calls and a provider finish reason."""
    frozen = tuple(calls) if calls is not None else ()
    return GenerateContentResponse(
        text=text or "",
        function_calls=frozen or None,
        finish_reason=FinishReason.from_provider(finish_reason),
    )


def response_from_completion(completion: Any, *, ctx: Optional[LogContext] = None) -> GenerateContentResponse:
    """Map a non-streaming chat-completions reply (SDK object or dict)."""
    wire = OpenAIChatCompletion.model_validate(completion, from_attributes=True)
    choice = wire.first_choice
    if choice is None:
        return assemble_response()
    message = choice.message
    if message is None:
        return assemble_response(finish_reason=choice.finish_reason)
    calls = [
        build_call(
            tc.function.name if tc.function else None,
            tc.function.arguments if tc.function else None,
            tc.id,
            ctx=ctx,
        )
        for tc in message.tool_calls or ()
    ]
    return assemble_response(message.content or "", calls, choice.finish_reason)


__all__ = [
    "parse_arguments",
    "build_call",
    "assemble_response",
    "response_from_completion",
]
