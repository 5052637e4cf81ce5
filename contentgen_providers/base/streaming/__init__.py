"""Streaming helpers: fragment merging, chunk normalization and metrics."""

from .cleanup import register_stream_cleanup
from .fragments import FragmentSet, ToolCallFragment
from .metrics import StreamMetrics, build_token_usage
from .normalizer import StreamNormalizer, StreamState, normalize_stream

__all__ = [
    "register_stream_cleanup",
    "FragmentSet",
    "ToolCallFragment",
    "StreamMetrics",
    "build_token_usage",
    "StreamNormalizer",
    "StreamState",
    "normalize_stream",
]
