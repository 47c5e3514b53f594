"""Bounded, skip-aware undo/redo history for a single value."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from history_store.runtime.telemetry import record_event, span

from .bus import HistoryBus
from .options import HistoryOptions
from .skip import SkipSet

T = TypeVar("T")

Updater = Union[T, Callable[[Optional[T]], T]]


@dataclass(frozen=True, slots=True)
class HistoryView(Generic[T]):
    """Read-only snapshot of a store's position in its history."""

    current: Optional[T]
    past: Tuple[T, ...]
    future: Tuple[T, ...]
    skipped: Tuple[T, ...]

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


class HistoryStore(Generic[T]):
    """Owns one live value plus a linear past/future of full snapshots.

    ``None`` stands for "no value yet": the first update out of ``None`` is
    not recorded, and ``None`` never enters either sequence. Values marked
    with ``skip=True`` become current like any other value but are filtered
    out of ``past`` on the next update. Both sequences are capped at
    ``options.max_history``; the skip set is pruned after each mutation to
    the values still reachable from the store.

    Navigation on an empty sequence is a no-op that returns ``False``.
    ``on_undo``/``on_redo`` run after the mutation, followed by the bus
    event, so both observe the final state.
    """

    def __init__(
        self,
        initial: Optional[T] = None,
        options: Optional[HistoryOptions[T]] = None,
        *,
        name: str = "default",
        logger_name: str | None = None,
        bus: Optional[HistoryBus] = None,
    ) -> None:
        self.name = name
        self.options: HistoryOptions[T] = options or HistoryOptions()
        self.bus = bus or HistoryBus()
        self._logger_name = logger_name
        self._initial = initial
        self._current = initial
        self._past: List[T] = []
        self._future: List[T] = []
        self._skip: SkipSet[T] = SkipSet(match=self.options.skip_match)

    @property
    def current(self) -> Optional[T]:
        return self._current

    @property
    def past(self) -> Tuple[T, ...]:
        return tuple(self._past)

    @property
    def future(self) -> Tuple[T, ...]:
        return tuple(self._future)

    @property
    def skipped(self) -> Tuple[T, ...]:
        return tuple(self._skip)

    @property
    def max_history(self) -> int:
        return self.options.max_history

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def snapshot(self) -> HistoryView[T]:
        return HistoryView(
            current=self._current,
            past=self.past,
            future=self.future,
            skipped=self.skipped,
        )

    def update(self, next_value: Updater[T], skip: bool = False) -> None:
        """Make ``next_value`` current, recording the previous value.

        A callable is treated as an updater and called once with the
        current value. ``skip=True`` keeps the resulting value out of
        ``past`` once it is displaced. Only ``None`` counts as "no previous
        value"; falsy values such as ``0`` or ``""`` are recorded.
        """

        with self._span("update", skip=skip):
            previous = self._current
            resolved = next_value(previous) if callable(next_value) else next_value

            if skip:
                self._skip.add(resolved)

            if previous is not None:
                self._past = self._skip.exclude([*self._past, previous])[
                    -self.max_history :
                ]

            self._current = resolved
            self._future = []
            self._prune_skipped()
            self.bus.emit("history.update", resolved)

    def undo(self) -> bool:
        if not self._past:
            self._record_noop("undo")
            return False

        with self._span("undo"):
            restored = self._past.pop()
            previous = self._current
            if previous is not None:
                self._future = [previous, *self._future][: self.max_history]
            self._current = restored
            self._prune_skipped()

            if self.options.on_undo is not None:
                self.options.on_undo(restored)
            self.bus.emit("history.undo", restored)
        return True

    def redo(self) -> bool:
        if not self._future:
            self._record_noop("redo")
            return False

        with self._span("redo"):
            restored = self._future.pop(0)
            previous = self._current
            if previous is not None:
                self._past = [*self._past, previous][-self.max_history :]
            self._current = restored
            self._prune_skipped()

            if self.options.on_redo is not None:
                self.options.on_redo(restored)
            self.bus.emit("history.redo", restored)
        return True

    def reset(self) -> None:
        """Forget all history and skipped values; keep the current value."""

        with self._span("reset"):
            self._clear_history()
            self.bus.emit("history.reset", self._current)

    def reseed(self, initial: Optional[T]) -> None:
        """Start over from ``initial`` as if the store were newly created."""

        with self._span("reseed"):
            self._clear_history()
            self._initial = initial
            self._current = initial
            self.bus.emit("history.reseed", initial)

    def sync_initial(self, initial: Optional[T]) -> bool:
        """Re-seed only when ``initial`` is a different object than last time."""

        if initial is self._initial:
            return False
        self.reseed(initial)
        return True

    def _clear_history(self) -> None:
        self._past = []
        self._future = []
        self._skip.clear()

    def _prune_skipped(self) -> None:
        if not len(self._skip):
            return
        reachable: List[Any] = [*self._past, *self._future]
        if self._current is not None:
            reachable.append(self._current)
        self._skip.retain_reachable(reachable)

    @contextmanager
    def _span(self, operation: str, **extra: Any) -> Iterator[Any]:
        metadata = {
            "store": self.name,
            "past": len(self._past),
            "future": len(self._future),
            **extra,
        }
        with span(
            f"history::{operation}",
            logger_name=self._logger_name,
            component="history",
            metadata=metadata,
        ) as log:
            yield log

    def _record_noop(self, operation: str) -> None:
        record_event(
            f"history.{operation}.noop",
            level="debug",
            data={"store": self.name},
            logger_name=self._logger_name,
        )


def create_history(
    initial: Optional[T] = None,
    *,
    max_history: int | None = None,
    on_undo: Optional[Callable[[T], None]] = None,
    on_redo: Optional[Callable[[T], None]] = None,
    options: Optional[HistoryOptions[T]] = None,
    name: str = "default",
    logger_name: str | None = None,
) -> HistoryStore[T]:
    """Build a :class:`HistoryStore`; keyword arguments override ``options``."""

    base = options or HistoryOptions()
    merged = base.merged(max_history=max_history, on_undo=on_undo, on_redo=on_redo)
    return HistoryStore(initial, merged, name=name, logger_name=logger_name)


__all__ = ["HistoryStore", "HistoryView", "Updater", "create_history"]
