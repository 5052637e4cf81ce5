"""Non-fatal parse failure for streamed tool-call arguments."""
from __future__ import annotations

from typing import Optional


class PartialParseError(ValueError):
    """Accumulated tool-call argument text is not valid JSON (yet).

    Raised by :func:`parse_arguments` and recovered locally by the response
    assembler, which substitutes an empty argument mapping.
    """

    def __init__(self, text: str, *, name: Optional[str] = None, reason: str = "") -> None:
        super().__init__(f"unparseable arguments for {name or '<unnamed>'}: {reason}")
        self.text = text
        self.name = name
        self.reason = reason


__all__ = ["PartialParseError"]
