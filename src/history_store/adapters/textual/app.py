"""Executable Textual app: an annotation label editor with undo/redo."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use history_store.adapters.textual.app"
    ) from exc

from history_store.history import HistoryOptions, HistoryStore, create_history
from history_store.runtime.telemetry import record_event

from .controller import HistoryUIHooks, TextualHistoryAdapter


@dataclass(frozen=True, slots=True)
class AnnotationDraft:
    """Editable annotation state for one record."""

    record_id: str
    labels: Tuple[str, ...] = ()
    selected: int = -1

    def add_label(self, label: str) -> "AnnotationDraft":
        labels = self.labels + (label,)
        return replace(self, labels=labels, selected=len(labels) - 1)

    def remove_selected(self) -> "AnnotationDraft":
        if not 0 <= self.selected < len(self.labels):
            return self
        labels = self.labels[: self.selected] + self.labels[self.selected + 1 :]
        return replace(self, labels=labels, selected=min(self.selected, len(labels) - 1))

    def select_next(self) -> "AnnotationDraft":
        if not self.labels:
            return self
        return replace(self, selected=(self.selected + 1) % len(self.labels))

    def render(self) -> str:
        if not self.labels:
            return f"[{self.record_id}] (no labels)"
        lines = [f"[{self.record_id}]"]
        for index, label in enumerate(self.labels):
            marker = ">" if index == self.selected else " "
            lines.append(f"{marker} {label}")
        return "\n".join(lines)


def create_default_store(
    record_id: str = "record-1", *, options: Optional[HistoryOptions[Any]] = None
) -> HistoryStore[AnnotationDraft]:
    """Build the store backing the demo, honouring ``HISTORY_STORE_*`` overrides."""

    return create_history(
        AnnotationDraft(record_id=record_id),
        options=options or HistoryOptions.from_env(),
        name="annotation",
    )


class HistoryDemoApp(App[None]):
    """Minimal Textual UI editing an annotation draft through a HistoryStore."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#draft-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#controls-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, max_history: int | None = None) -> None:
        super().__init__()
        options = HistoryOptions.from_env(max_history=max_history)
        self.store = create_default_store(options=options)
        self.adapter: TextualHistoryAdapter[AnnotationDraft] | None = None
        self._record_counter = 1
        self._label_counter = 0
        self._draft_widget: Static | None = None
        self._status_widget: Static | None = None
        self._controls_widget: Static | None = None
        self._edits: Dict[str, Callable[[], None]] = {
            "a": self._add_label,
            "d": self._remove_label,
            "s": self._select_next,
            "n": self._open_next_record,
            "r": self._reset_history,
        }

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="draft-area"):
            self._draft_widget = Static("", id="draft-view")
            yield self._draft_widget
        self._status_widget = Static("", id="status-line")
        self._controls_widget = Static("", id="controls-line")
        yield self._status_widget
        yield self._controls_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = HistoryUIHooks(
            update_value=self._update_draft,
            update_status=self._update_status,
            update_controls=self._update_controls,
            log=self._log_line,
        )
        self.adapter = TextualHistoryAdapter(self.store, hooks)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if self.adapter.handle_textual_key(event.key):
            event.stop()
            return
        edit = self._edits.get(event.key)
        if edit is not None:
            edit()
            event.stop()

    def _add_label(self) -> None:
        self._label_counter += 1
        label = f"label-{self._label_counter}"
        self.store.update(lambda draft: draft.add_label(label))

    def _remove_label(self) -> None:
        self.store.update(lambda draft: draft.remove_selected())

    def _select_next(self) -> None:
        # Selection is view state: it changes the draft but is not an edit.
        self.store.update(lambda draft: draft.select_next(), skip=True)

    def _open_next_record(self) -> None:
        self._record_counter += 1
        self._label_counter = 0
        self.store.sync_initial(AnnotationDraft(record_id=f"record-{self._record_counter}"))
        self._update_status("opened new record")

    def _reset_history(self) -> None:
        self.store.reset()
        self._update_status("history cleared")

    def _update_draft(self, draft: object) -> None:
        if self._draft_widget and isinstance(draft, AnnotationDraft):
            self._draft_widget.update(draft.render())

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _update_controls(self, can_undo: bool, can_redo: bool) -> None:
        if self._controls_widget:
            undo = "ctrl+z undo" if can_undo else "-"
            redo = "ctrl+y redo" if can_redo else "-"
            self._controls_widget.update(
                f"{undo} | {redo} | a add | d delete | s select | n new | r reset"
            )

    def _log_line(self, line: str) -> None:
        record_event("demo.adapter", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the annotation history Textual demo."
    )
    parser.add_argument(
        "--max-history",
        type=int,
        default=None,
        help="Undo depth (default: HISTORY_STORE_MAX_HISTORY or 20)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = HistoryDemoApp(max_history=args.max_history)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
