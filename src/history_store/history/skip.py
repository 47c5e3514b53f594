"""Set of values that must never be recorded as past history."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, List, TypeVar

T = TypeVar("T")


class SkipSet(Generic[T]):
    """Ordered membership container for skipped values.

    Values are often unhashable (lists, dicts, mutable dataclasses), so
    membership is a linear scan. ``match="equality"`` compares with ``==``
    after an identity shortcut; ``match="identity"`` compares with ``is``.
    """

    def __init__(self, *, match: str = "equality") -> None:
        self._match = match
        self._values: List[T] = []

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._values))

    def __contains__(self, value: Any) -> bool:
        return any(self._same(value, entry) for entry in self._values)

    def add(self, value: T) -> None:
        if value not in self:
            self._values.append(value)

    def clear(self) -> None:
        self._values.clear()

    def exclude(self, values: Iterable[T]) -> List[T]:
        """Return ``values`` without any entry that is in the set."""

        if not self._values:
            return list(values)
        return [value for value in values if value not in self]

    def retain_reachable(self, reachable: Iterable[T]) -> int:
        """Drop entries that match none of ``reachable``; return how many went."""

        if not self._values:
            return 0
        pool = list(reachable)
        kept = [
            entry
            for entry in self._values
            if any(self._same(candidate, entry) for candidate in pool)
        ]
        dropped = len(self._values) - len(kept)
        self._values = kept
        return dropped

    def _same(self, left: Any, right: Any) -> bool:
        if left is right:
            return True
        if self._match == "identity":
            return False
        return bool(left == right)


__all__ = ["SkipSet"]
