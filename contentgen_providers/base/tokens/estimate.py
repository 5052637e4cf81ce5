"""Length-based token estimate for backends without a tokenizer endpoint.

The estimate is ``ceil(chars / 4)`` over the text of every part of every
message. The result is approximate but monotonic: adding text never lowers
the count.
"""
from __future__ import annotations

import math
from typing import Iterable, List

from ...config.defaults import CHARS_PER_TOKEN
from ..models import Content


def iter_text(contents: Iterable[Content]) -> Iterable[str]:
    """Yield the text of text parts, in message then part order."""
    for content in contents:
        for part in content.parts:
            if part.text:
                yield part.text


def joined_text(contents: Iterable[Content], sep: str = "\n") -> str:
    """Concatenate text parts per message, messages separated by ``sep``."""
    messages: List[str] = []
    for content in contents:
        messages.append("".join(p.text or "" for p in content.parts))
    return sep.join(messages)


def estimate_tokens(contents: Iterable[Content], chars_per_token: int = CHARS_PER_TOKEN) -> int:
    total_chars = sum(len(t) for t in iter_text(contents))
    return math.ceil(total_chars / chars_per_token)


__all__ = ["iter_text", "joined_text", "estimate_tokens"]
