"""Event bus used to notify views about history changes."""

from __future__ import annotations

from typing import Callable, Dict

HISTORY_EVENTS = (
    "history.update",
    "history.undo",
    "history.redo",
    "history.reset",
    "history.reseed",
)


class HistoryBus:
    """Minimal synchronous pub/sub keyed by event name."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(
        self, event: str, callback: Callable[[object], None]
    ) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""

        listeners = self._subscribers.setdefault(event, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def subscribe_all(self, callback: Callable[[str, object], None]) -> Callable[[], None]:
        """Subscribe ``callback(event, payload)`` to every history event."""

        removers = [
            self.subscribe(event, lambda payload, name=event: callback(name, payload))
            for event in HISTORY_EVENTS
        ]

        def unsubscribe() -> None:
            for remove in removers:
                remove()

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._subscribers.get(event, []))
        return sum(len(listeners) for listeners in self._subscribers.values())


__all__ = ["HISTORY_EVENTS", "HistoryBus"]
