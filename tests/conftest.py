from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from history_store.runtime import telemetry


class RecordingLogger:
    """Captures what telemetry hands to a telelog logger."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Dict[str, str]]] = []
        self.context: Dict[str, str] = {}
        self.profiles: List[str] = []
        self.components: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiles.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    def debug_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("debug", message, dict(pairs)))

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("error", message, dict(pairs)))

    def messages(self) -> List[str]:
        return [message for _level, message, _fields in self.records]


@pytest.fixture
def recording_logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()

    def fake_get_logger(name: Any = None) -> RecordingLogger:
        return logger

    monkeypatch.setattr(telemetry, "get_logger", fake_get_logger)
    return logger
