"""Structured logging context carried through generator calls."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Common fields attached to every event of one generator call.

    ``auth_type`` is the resolved auth method value (e.g. ``"openai"``) and
    ``provider`` the concrete backend (e.g. ``"ollama"``); the two differ for
    the OpenAI-compatible family.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    auth_type: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
