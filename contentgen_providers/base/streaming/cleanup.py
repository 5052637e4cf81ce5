"""Release native provider streams when consumption stops early."""
from __future__ import annotations

from contextlib import ExitStack, suppress


def register_stream_cleanup(stream, stack: ExitStack) -> None:
    """Register best-effort ``close()`` of the native stream on ``stack``."""
    close_fn = getattr(stream, "close", None)
    if callable(close_fn):
        def _safe_close():
            with suppress(Exception):
                close_fn()
        stack.callback(_safe_close)


__all__ = ["register_stream_cleanup"]
