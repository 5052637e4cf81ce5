"""Turn chat-completions stream chunks into internal responses.

Purpose
-------
Providers send text one token at a time and split each tool call into
fragments keyed by ``index``. Callers want fewer, larger text pieces and
tool calls only once their arguments are complete. :class:`StreamNormalizer`
buffers both and emits a :class:`GenerateContentResponse` per flush.

States
------
``ACCUMULATING``
    Buffering text and merging tool-call fragments.
``FLUSH_READY``
    A flush is being assembled for the current chunk.
``DONE``
    A terminal finish reason (``stop`` or ``tool_calls``) was flushed. Later
    chunks are only inspected for usage.

Flush rule
----------
A chunk triggers a flush when its finish reason is terminal, or when no tool
call is in progress, the chunk carried text, and the buffered text reached
``flush_threshold`` characters. Every flush clears the text buffer. Only the
terminal flush emits the merged tool calls and clears the fragment state, so
text flushed early never drops a fragment that arrives later.

When the chunk iterator ends without a terminal finish reason, :meth:`finish`
flushes what is pending with the last reported finish reason (for example
``length``).
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from ...config.defaults import STREAM_FLUSH_THRESHOLD
from ..logging import LogContext, get_logger, log_event
from ..models import GenerateContentResponse
from ..openai_compat.response_assembler import assemble_response, build_call
from ..openai_compat.wire import OpenAIStreamChunk
from .fragments import FragmentSet
from .metrics import StreamMetrics

_TERMINAL_FINISH_REASONS = frozenset({"stop", "tool_calls"})


class StreamState(str, Enum):
    ACCUMULATING = "accumulating"
    FLUSH_READY = "flush_ready"
    DONE = "done"


class StreamNormalizer:
    """Stateful chunk consumer for a single stream.

    Parameters
    ----------
    flush_threshold:
        Minimum buffered characters before text is emitted mid-stream.
    ctx:
        Logging context merged into ``stream.flush`` events.
    """

    def __init__(
        self,
        flush_threshold: int = STREAM_FLUSH_THRESHOLD,
        *,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.flush_threshold = flush_threshold
        self.ctx = ctx
        self._logger = logger or get_logger("contentgen.streaming")
        self.metrics = StreamMetrics()
        self._t0 = time.perf_counter()
        self._text = ""
        self._fragments = FragmentSet()
        self._tools_in_progress = False
        self._last_finish_reason: Optional[str] = None
        self._state = StreamState.ACCUMULATING

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def buffered_text(self) -> str:
        return self._text

    @property
    def pending_fragments(self) -> int:
        return len(self._fragments)

    def feed(self, chunk: Any) -> Optional[GenerateContentResponse]:
        """Consume one chunk; return a response when it triggers a flush."""
        wire = OpenAIStreamChunk.model_validate(chunk, from_attributes=True)
        self.metrics.chunks += 1
        if wire.usage is not None:
            self.metrics.apply_usage(wire.usage.prompt_tokens, wire.usage.completion_tokens, wire.usage.total_tokens)
        if self._state is StreamState.DONE:
            return None

        choice = wire.first_choice
        if choice is None:
            return None

        delta = choice.delta
        chunk_text = delta.content if delta is not None else None
        for tool_delta in (delta.tool_calls if delta is not None else None) or ():
            self._fragments.merge(tool_delta)
            self._tools_in_progress = True
        if chunk_text:
            self._text += chunk_text
        if choice.finish_reason:
            self._last_finish_reason = choice.finish_reason

        done = choice.finish_reason in _TERMINAL_FINISH_REASONS
        ready = (
            not self._tools_in_progress
            and bool(chunk_text)
            and len(self._text) >= self.flush_threshold
        )
        if not (done or ready):
            return None
        self._state = StreamState.FLUSH_READY
        return self._flush(choice.finish_reason, done=done)

    def finish(self) -> Optional[GenerateContentResponse]:
        """Flush leftovers once the provider iterator is exhausted."""
        if self.metrics.total_duration_ms is None:
            self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        if self._state is StreamState.DONE:
            return None
        if not self._text and not self._fragments:
            self._state = StreamState.DONE
            return None
        self._state = StreamState.FLUSH_READY
        return self._flush(self._last_finish_reason, done=True)

    def run(self, chunks: Iterable[Any]) -> Iterator[GenerateContentResponse]:
        for chunk in chunks:
            response = self.feed(chunk)
            if response is not None:
                yield response
        tail = self.finish()
        if tail is not None:
            yield tail

    def _flush(self, finish_reason: Optional[str], *, done: bool) -> GenerateContentResponse:
        calls = []
        if done:
            calls = [
                build_call(fragment.name, fragment.arguments_text, fragment.id, ctx=self.ctx)
                for fragment in self._fragments
            ]
        response = assemble_response(self._text, calls, finish_reason)
        log_event(
            self._logger,
            "stream.flush",
            self.ctx,
            level=logging.DEBUG,
            chars=len(self._text),
            calls=len(calls),
            done=done,
        )

        self._text = ""
        if done:
            self._fragments.clear()
            self._tools_in_progress = False
            self._state = StreamState.DONE
        else:
            self._state = StreamState.ACCUMULATING

        self.metrics.emitted += 1
        if self.metrics.time_to_first_emit_ms is None:
            self.metrics.time_to_first_emit_ms = (time.perf_counter() - self._t0) * 1000.0
        return response


def normalize_stream(
    chunks: Iterable[Any],
    flush_threshold: int = STREAM_FLUSH_THRESHOLD,
    *,
    ctx: Optional[LogContext] = None,
) -> Iterator[GenerateContentResponse]:
    """Yield normalized responses for ``chunks``."""
    yield from StreamNormalizer(flush_threshold, ctx=ctx).run(chunks)


__all__ = ["StreamState", "StreamNormalizer", "normalize_stream"]
