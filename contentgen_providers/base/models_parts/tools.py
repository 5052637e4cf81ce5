"""
Tool declarations in Google content-API form.

``parameters`` is kept as a plain mapping using the Google schema vocabulary
(``"type": "OBJECT"``, ``"STRING"`` ...); translators convert it for other
backends.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FunctionDeclaration:
    name: str
    description: str = ""
    parameters: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "description": self.description}
        if self.parameters is not None:
            data["parameters"] = self.parameters
        return data


@dataclass(frozen=True)
class Tool:
    """A group of function declarations (mirrors Google's ``Tool``)."""

    function_declarations: Tuple[FunctionDeclaration, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.function_declarations, tuple):
            object.__setattr__(self, "function_declarations", tuple(self.function_declarations))

    def to_dict(self) -> Dict[str, Any]:
        return {"functionDeclarations": [d.to_dict() for d in self.function_declarations]}


__all__ = ["FunctionDeclaration", "Tool"]
