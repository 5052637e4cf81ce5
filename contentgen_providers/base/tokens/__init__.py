"""Token counting helpers package."""

from .estimate import estimate_tokens, iter_text, joined_text

__all__ = ["estimate_tokens", "iter_text", "joined_text"]
