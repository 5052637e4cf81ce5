"""
Internal request/response contract public surface.

Re-exports the one-class-per-file implementations under
``contentgen_providers.base.models_parts``.
"""

from .models_parts.content import Content, FunctionCall, FunctionResponse, Part, Role, ROLES
from .models_parts.tools import FunctionDeclaration, Tool
from .models_parts.finish_reason import FinishReason
from .models_parts.request import CountTokensRequest, EmbedContentRequest, GenerateContentRequest
from .models_parts.response import (
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
