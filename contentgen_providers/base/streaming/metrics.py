"""Per-stream counters reported in the ``stream.end`` log event."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return the canonical ``{"prompt", "completion", "total"}`` mapping.

    ``total`` is derived only when both components are known.
    """
    derived_total = total
    if derived_total is None and prompt is not None and completion is not None:
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


@dataclass
class StreamMetrics:
    """Counters for one stream consumption.

    Attributes:
        chunks: Provider chunks consumed.
        emitted: Responses yielded to the caller.
        time_to_first_emit_ms: Delay from stream start to the first yield.
        total_duration_ms: Stream start to completion (or abandonment).
        tokens: Usage reported by the provider, when it reports any.
    """

    chunks: int = 0
    emitted: int = 0
    time_to_first_emit_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Optional[int]]] = None

    def apply_usage(self, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> None:
        self.tokens = build_token_usage(prompt, completion, total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chunks": self.chunks,
            "emitted_count": self.emitted,
            "time_to_first_emit_ms": self.time_to_first_emit_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics", "build_token_usage"]
