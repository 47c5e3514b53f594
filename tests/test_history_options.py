from __future__ import annotations

import pytest

from history_store import HistoryConfigError, HistoryOptions, create_history
from history_store.history import DEFAULT_MAX_HISTORY


def test_defaults() -> None:
    options = HistoryOptions()

    assert options.max_history == DEFAULT_MAX_HISTORY == 20
    assert options.on_undo is None
    assert options.skip_match == "equality"


@pytest.mark.parametrize("value", [0, -3])
def test_max_history_must_be_positive(value: int) -> None:
    with pytest.raises(HistoryConfigError) as excinfo:
        HistoryOptions(max_history=value)

    assert excinfo.value.field == "max_history"


def test_max_history_rejects_non_int() -> None:
    with pytest.raises(HistoryConfigError):
        HistoryOptions(max_history="5")  # type: ignore[arg-type]


def test_unknown_skip_match_rejected() -> None:
    with pytest.raises(HistoryConfigError) as excinfo:
        HistoryOptions(skip_match="fuzzy")

    assert excinfo.value.field == "skip_match"


def test_create_history_keywords_override_options() -> None:
    hook = lambda value: None  # noqa: E731
    base = HistoryOptions(max_history=5, skip_match="identity")

    store = create_history(None, max_history=2, on_undo=hook, options=base)

    assert store.max_history == 2
    assert store.options.on_undo is hook
    assert store.options.skip_match == "identity"
    assert base.max_history == 5


def test_merged_without_overrides_returns_same_options() -> None:
    options = HistoryOptions(max_history=4)

    assert options.merged(max_history=None) is options


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HISTORY_STORE_MAX_HISTORY", "7")
    monkeypatch.setenv("HISTORY_STORE_SKIP_MATCH", "Identity")

    options = HistoryOptions.from_env()

    assert options.max_history == 7
    assert options.skip_match == "identity"


def test_from_env_explicit_values_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HISTORY_STORE_MAX_HISTORY", "7")

    options = HistoryOptions.from_env(max_history=3)

    assert options.max_history == 3


def test_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HISTORY_STORE_MAX_HISTORY", "lots")

    with pytest.raises(HistoryConfigError) as excinfo:
        HistoryOptions.from_env()

    assert excinfo.value.field == "max_history"


def test_from_env_without_variables_uses_defaults(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("HISTORY_STORE_MAX_HISTORY", raising=False)
    monkeypatch.delenv("HISTORY_STORE_SKIP_MATCH", raising=False)

    assert HistoryOptions.from_env() == HistoryOptions()

