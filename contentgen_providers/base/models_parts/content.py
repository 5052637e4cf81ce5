"""
Internal conversation content: ``Content`` messages made of ``Part`` items.

The shape follows the Google content API (role ``user`` / ``model`` /
``tool``; parts carrying text, a function call, or a function response) and is
what every generator accepts regardless of the backend it talks to. Each part
carries exactly one payload kind; construction fails otherwise.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Sequence, Tuple

Role = Literal["user", "model", "tool"]
ROLES: Tuple[str, ...] = ("user", "model", "tool")


@dataclass(frozen=True)
class FunctionCall:
    """A tool invocation previously requested by the model."""

    name: str
    args: Mapping[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "args": dict(self.args)}
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass(frozen=True)
class FunctionResponse:
    """The result of executing a tool, sent back to the model.

    ``response`` is whatever the tool produced: a string, a mapping (often
    with an ``output`` or ``content`` key), or any JSON-serializable value.
    """

    id: Optional[str]
    response: Any
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"response": self.response}
        if self.id is not None:
            data["id"] = self.id
        if self.name is not None:
            data["name"] = self.name
        return data


@dataclass(frozen=True)
class Part:
    """One piece of a message; exactly one of the three fields is set."""

    text: Optional[str] = None
    function_call: Optional[FunctionCall] = None
    function_response: Optional[FunctionResponse] = None

    def __post_init__(self) -> None:
        present = [
            name
            for name, value in (
                ("text", self.text),
                ("function_call", self.function_call),
                ("function_response", self.function_response),
            )
            if value is not None
        ]
        if len(present) != 1:
            raise ValueError(f"Part needs exactly one payload, got {present or 'none'}")

    @property
    def kind(self) -> str:
        if self.text is not None:
            return "text"
        if self.function_call is not None:
            return "function_call"
        return "function_response"

    def to_dict(self) -> Dict[str, Any]:
        """Google-style camelCase representation."""
        if self.function_call is not None:
            return {"functionCall": self.function_call.to_dict()}
        if self.function_response is not None:
            return {"functionResponse": self.function_response.to_dict()}
        return {"text": self.text}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Part":
        """Build a part from a Google-style mapping (camelCase or snake_case keys)."""
        call = data.get("functionCall", data.get("function_call"))
        if call is not None:
            return cls(
                function_call=FunctionCall(
                    name=str(call.get("name") or ""),
                    args=dict(call.get("args") or {}),
                    id=call.get("id"),
                )
            )
        resp = data.get("functionResponse", data.get("function_response"))
        if resp is not None:
            return cls(
                function_response=FunctionResponse(
                    id=resp.get("id"),
                    response=resp.get("response"),
                    name=resp.get("name"),
                )
            )
        return cls(text=str(data.get("text") or ""))


@dataclass(frozen=True)
class Content:
    """An ordered message: a role plus its parts (possibly none)."""

    role: Role
    parts: Tuple[Part, ...] = ()

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unknown role {self.role!r}; expected one of {ROLES}")
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def from_text(cls, text: str, role: Role = "user") -> "Content":
        return cls(role=role, parts=(Part(text=text),))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Content":
        parts: Sequence[Mapping[str, Any]] = data.get("parts") or ()
        return cls(role=data.get("role", "user"), parts=tuple(Part.from_dict(p) for p in parts))

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "parts": [p.to_dict() for p in self.parts]}


__all__ = [
    "Role",
    "ROLES",
    "FunctionCall",
    "FunctionResponse",
    "Part",
    "Content",
]
