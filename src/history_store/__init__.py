"""Bounded, skip-aware undo/redo history for editable session state."""

from history_store.history import (
    HistoryConfigError,
    HistoryOptions,
    HistoryStore,
    HistoryView,
    create_history,
)

__all__ = [
    "adapters",
    "history",
    "runtime",
    "HistoryConfigError",
    "HistoryOptions",
    "HistoryStore",
    "HistoryView",
    "create_history",
]

__version__ = "0.1.0"
