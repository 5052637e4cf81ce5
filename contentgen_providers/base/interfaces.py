"""ContentGenerator Protocol.

The capability surface implemented identically by every backend branch.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from .models import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentRequest,
    GenerateContentResponse,
)


@runtime_checkable
class ContentGenerator(Protocol):
    """Generate, stream, count and embed against one resolved backend.

    Implementations translate the internal request into their wire format and
    always answer with the internal response types. Call-time failures are
    raised as ``ProviderCallError`` tagged with the backend name.
    """

    @property
    def provider_name(self) -> str:
        """Backend identifier, e.g. ``"gemini"`` or ``"ollama"``."""
        ...

    def generate_content(self, request: GenerateContentRequest) -> GenerateContentResponse:
        """Single call; no partial results."""
        ...

    def generate_content_stream(self, request: GenerateContentRequest) -> Iterator[GenerateContentResponse]:
        """Lazy, single-pass sequence of responses.

        Closing the iterator before exhaustion releases the network stream.
        """
        ...

    def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        """Token count; an estimate where the backend has no tokenizer endpoint."""
        ...

    def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        ...


__all__ = ["ContentGenerator"]
