"""Map ``google-genai`` responses onto :class:`GenerateContentResponse`.

Only the first candidate is read. Thought parts are skipped; text parts are
concatenated and function-call parts become :class:`FunctionCallResult`
entries in order.
"""
from __future__ import annotations

from typing import Any, List, Optional

from ..base.models import FinishReason, FunctionCallResult, GenerateContentResponse


def _first_candidate(sdk_response: Any) -> Optional[Any]:
    candidates = getattr(sdk_response, "candidates", None) or ()
    return candidates[0] if candidates else None


def response_from_google(sdk_response: Any) -> GenerateContentResponse:
    """Build the internal response from one SDK response (or stream chunk)."""
    candidate = _first_candidate(sdk_response)
    if candidate is None:
        return GenerateContentResponse()

    texts: List[str] = []
    calls: List[FunctionCallResult] = []
    content = getattr(candidate, "content", None)
    for part in getattr(content, "parts", None) or ():
        if getattr(part, "thought", False):
            continue
        fc = getattr(part, "function_call", None)
        if fc is not None:
            calls.append(
                FunctionCallResult(
                    name=getattr(fc, "name", None) or "",
                    args=getattr(fc, "args", None) or {},
                    id=getattr(fc, "id", None),
                )
            )
            continue
        text = getattr(part, "text", None)
        if text:
            texts.append(text)

    return GenerateContentResponse(
        text="".join(texts),
        function_calls=tuple(calls) or None,
        finish_reason=FinishReason.from_provider(getattr(candidate, "finish_reason", None)),
    )


def usage_from_google(sdk_response: Any) -> Optional[dict]:
    um = getattr(sdk_response, "usage_metadata", None)
    if um is None:
        return None
    return {
        "prompt": getattr(um, "prompt_token_count", None),
        "completion": getattr(um, "candidates_token_count", None),
        "total": getattr(um, "total_token_count", None),
    }


__all__ = ["response_from_google", "usage_from_google"]
