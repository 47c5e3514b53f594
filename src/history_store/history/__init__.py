"""Undo/redo history store, its options, skip set, and change bus."""

from .bus import HISTORY_EVENTS, HistoryBus
from .options import (
    DEFAULT_MAX_HISTORY,
    SKIP_MATCH_MODES,
    HistoryConfigError,
    HistoryOptions,
)
from .skip import SkipSet
from .store import HistoryStore, HistoryView, Updater, create_history

__all__ = [
    "DEFAULT_MAX_HISTORY",
    "HISTORY_EVENTS",
    "SKIP_MATCH_MODES",
    "HistoryBus",
    "HistoryConfigError",
    "HistoryOptions",
    "HistoryStore",
    "HistoryView",
    "SkipSet",
    "Updater",
    "create_history",
]
