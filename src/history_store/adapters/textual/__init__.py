"""Textual bindings for history stores."""

from .controller import DEFAULT_KEYMAP, HistoryUIHooks, TextualHistoryAdapter

__all__ = ["DEFAULT_KEYMAP", "HistoryUIHooks", "TextualHistoryAdapter"]
