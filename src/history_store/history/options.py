"""Configuration for history stores."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Optional, TypeVar

from history_store.runtime.telemetry import env

T = TypeVar("T")

DEFAULT_MAX_HISTORY = 20
SKIP_MATCH_MODES = ("equality", "identity")


class HistoryConfigError(ValueError):
    """Raised when history options are out of range or cannot be parsed."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True, slots=True)
class HistoryOptions(Generic[T]):
    """Retention bound, navigation hooks, and skip-set matching policy.

    ``on_undo``/``on_redo`` receive the value that navigation restored and
    run after the store has finished mutating.
    """

    max_history: int = DEFAULT_MAX_HISTORY
    on_undo: Optional[Callable[[T], None]] = None
    on_redo: Optional[Callable[[T], None]] = None
    skip_match: str = "equality"

    def __post_init__(self) -> None:
        if isinstance(self.max_history, bool) or not isinstance(self.max_history, int):
            raise HistoryConfigError(
                f"max_history must be an int, got {self.max_history!r}",
                field="max_history",
            )
        if self.max_history < 1:
            raise HistoryConfigError(
                f"max_history must be >= 1, got {self.max_history}",
                field="max_history",
            )
        if self.skip_match not in SKIP_MATCH_MODES:
            raise HistoryConfigError(
                f"skip_match must be one of {SKIP_MATCH_MODES}, got {self.skip_match!r}",
                field="skip_match",
            )

    def merged(self, **overrides: Any) -> "HistoryOptions[T]":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_env(cls, **overrides: Any) -> "HistoryOptions[Any]":
        """Build options from ``HISTORY_STORE_*`` variables plus overrides."""

        values: dict[str, Any] = {}
        raw_max = env("MAX_HISTORY")
        if raw_max:
            try:
                values["max_history"] = int(raw_max)
            except ValueError as exc:
                raise HistoryConfigError(
                    f"HISTORY_STORE_MAX_HISTORY is not an integer: {raw_max!r}",
                    field="max_history",
                ) from exc
        raw_match = env("SKIP_MATCH")
        if raw_match:
            values["skip_match"] = raw_match.strip().lower()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = [
    "DEFAULT_MAX_HISTORY",
    "SKIP_MATCH_MODES",
    "HistoryConfigError",
    "HistoryOptions",
]
