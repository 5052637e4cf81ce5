"""Tool-call fragments accumulated across stream chunks.

Providers split one tool call's name, id and argument text across any number
of chunks and tell concurrent calls apart only by ``index``. Fragments are
therefore keyed by index and grow by merge only.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from ..openai_compat.wire import ToolCallDelta


@dataclass
class ToolCallFragment:
    """Partial tool call; ``arguments_text`` only ever grows by appending."""

    index: int
    name: Optional[str] = None
    arguments_text: str = ""
    id: Optional[str] = None

    def merge(self, delta: ToolCallDelta) -> None:
        if delta.id:
            self.id = delta.id
        fn = delta.function
        if fn is None:
            return
        if fn.name:
            self.name = fn.name
        if isinstance(fn.arguments, dict):
            # Some servers send already-decoded arguments in one piece.
            self.arguments_text = json.dumps(fn.arguments, ensure_ascii=False)
        elif fn.arguments:
            self.arguments_text += fn.arguments


class FragmentSet:
    """Fragments of one in-flight stream, iterated in index order."""

    def __init__(self) -> None:
        self._by_index: Dict[int, ToolCallFragment] = {}

    def merge(self, delta: ToolCallDelta) -> ToolCallFragment:
        fragment = self._by_index.get(delta.index)
        if fragment is None:
            fragment = ToolCallFragment(index=delta.index)
            self._by_index[delta.index] = fragment
        fragment.merge(delta)
        return fragment

    def clear(self) -> None:
        self._by_index.clear()

    def __len__(self) -> int:
        return len(self._by_index)

    def __bool__(self) -> bool:
        return bool(self._by_index)

    def __iter__(self) -> Iterator[ToolCallFragment]:
        for index in sorted(self._by_index):
            yield self._by_index[index]


__all__ = ["ToolCallFragment", "FragmentSet"]
