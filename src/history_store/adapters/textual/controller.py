"""Toolkit-neutral adapter that keeps host widgets in step with a HistoryStore."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, Mapping, Optional, TypeVar

from history_store.history import HistoryStore

T = TypeVar("T")

DEFAULT_KEYMAP: Mapping[str, str] = {
    "ctrl+z": "undo",
    "ctrl+y": "redo",
    "ctrl+shift+z": "redo",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HistoryUIHooks:
    """Callbacks the adapter uses to push state into host widgets."""

    update_value: Callable[[object], None]
    update_status: Callable[[str], None] = _noop
    update_controls: Callable[[bool, bool], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter(Generic[T]):
    """Routes key presses to undo/redo and mirrors every history event."""

    def __init__(
        self,
        store: HistoryStore[T],
        hooks: HistoryUIHooks,
        *,
        keymap: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.store = store
        self.hooks = hooks
        self.keymap: Dict[str, str] = {
            key.lower(): action for key, action in (keymap or DEFAULT_KEYMAP).items()
        }
        self._unsubscribe: Optional[Callable[[], None]] = store.bus.subscribe_all(
            self._handle_event
        )
        self.refresh()

    def handle_textual_key(self, key: str) -> bool:
        """Run the history action bound to ``key``; return whether it was bound."""

        action = self.keymap.get(key.lower())
        if action is None:
            return False
        self._log_state("key ->", key=key, action=action)
        if action == "undo":
            moved = self.store.undo()
        elif action == "redo":
            moved = self.store.redo()
        else:
            raise ValueError(f"Unknown history action '{action}' for key '{key}'")
        if not moved:
            self.hooks.update_status(f"nothing to {action}")
        return True

    def refresh(self) -> None:
        self.hooks.update_value(self.store.current)
        self.hooks.update_controls(self.store.can_undo(), self.store.can_redo())

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name in {"history.undo", "history.redo"}:
            self.hooks.update_status(name.split(".", 1)[1])
        self.refresh()

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "store": self.store.name,
            "past": len(self.store.past),
            "future": len(self.store.future),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["DEFAULT_KEYMAP", "HistoryUIHooks", "TextualHistoryAdapter"]
