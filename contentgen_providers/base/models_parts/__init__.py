"""Single-class modules for the internal request/response contract.

Import from ``contentgen_providers.base.models`` for the stable surface.
"""

from .content import Content, FunctionCall, FunctionResponse, Part, Role, ROLES
from .tools import FunctionDeclaration, Tool
from .finish_reason import FinishReason
from .request import CountTokensRequest, EmbedContentRequest, GenerateContentRequest
from .response import (
    CountTokensResponse,
    EmbedContentResponse,
    FunctionCallResult,
    GenerateContentResponse,
)

__all__ = [
    "Content",
    "FunctionCall",
    "FunctionResponse",
    "Part",
    "Role",
    "ROLES",
    "FunctionDeclaration",
    "Tool",
    "FinishReason",
    "GenerateContentRequest",
    "CountTokensRequest",
    "EmbedContentRequest",
    "FunctionCallResult",
    "GenerateContentResponse",
    "CountTokensResponse",
    "EmbedContentResponse",
]
