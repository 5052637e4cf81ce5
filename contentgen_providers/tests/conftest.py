"""Shared fixtures for the contentgen_providers test suite.

- ``env``: an empty environment mapping; tests never read ``os.environ``.
- ``log_events``: captures structured events from the ``contentgen`` logger
  at DEBUG level (the base logger does not propagate to root, so
  ``caplog`` would miss them).
- ``fake_openai``: builds a fake OpenAI SDK client exposing
  ``chat.completions.create`` and ``embeddings.create``.
"""

from __future__ import annotations

import json
import logging
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional

import pytest

from contentgen_providers.base.http import close_all_clients
from contentgen_providers.base.logging import LOG_LEVEL_ENV, get_logger
from contentgen_providers.config import reset_config_cache


class _ListHandler(logging.Handler):
    """Collect records and decode the JSON payloads written by ``log_event``."""

    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict) and (name is None or payload.get("event") == name):
                payload["_level"] = record.levelname
                out.append(payload)
        return out


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def env() -> Dict[str, str]:
    return {}


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[_ListHandler]:
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    base = get_logger()
    handler = _ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)


class FakeCompletions:
    """Records ``create`` kwargs; returns ``result`` or raises ``error``."""

    def __init__(self, result: Any = None, error: Optional[BaseException] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def create(self, **params: Any) -> Any:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.result


class FakeEmbeddings:
    def __init__(self, vector: Optional[List[float]] = None) -> None:
        self.vector = vector or [0.1, 0.2, 0.3]
        self.calls: List[Dict[str, Any]] = []

    def create(self, **params: Any) -> Any:
        self.calls.append(params)
        return SimpleNamespace(data=[SimpleNamespace(index=0, embedding=list(self.vector))])


@pytest.fixture()
def fake_openai():
    def _make(result: Any = None, error: Optional[BaseException] = None, vector: Optional[List[float]] = None):
        return SimpleNamespace(
            chat=SimpleNamespace(completions=FakeCompletions(result, error)),
            embeddings=FakeEmbeddings(vector),
        )

    return _make
