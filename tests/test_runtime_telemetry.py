from __future__ import annotations

import pytest

from history_store.runtime import telemetry


def test_configure_rejects_config_and_level() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), level="DEBUG")


def test_configure_level_clears_logger_cache() -> None:
    telemetry.get_logger("history_store.tests")
    assert "history_store.tests" in telemetry._LOGGER_CACHE

    try:
        telemetry.configure(level="DEBUG")
        assert telemetry._LOGGER_CACHE == {}
        assert telemetry.get_logger("history_store.tests") is telemetry.get_logger(
            "history_store.tests"
        )
    finally:
        telemetry.configure()


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HISTORY_STORE_LOG_JSON", "yes")
    monkeypatch.delenv("HISTORY_STORE_NO_COLOR", raising=False)

    assert telemetry.env_flag("LOG_JSON", False) is True
    assert telemetry.env_flag("NO_COLOR", True) is True
    assert telemetry.env_flag("NO_COLOR", False) is False


def test_record_event_emits_structured_pairs(recording_logger) -> None:
    telemetry.record_event("history.test", level="debug", data={"size": 3})

    assert recording_logger.records == [
        ("debug", "event::history.test", {"event": "history.test", "size": "3"})
    ]


def test_record_event_rejects_unknown_level(recording_logger) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("history.test", level="shout")


def test_span_profiles_and_scopes_context(recording_logger) -> None:
    with telemetry.span(
        "history::update", component="history", metadata={"store": "s"}
    ):
        assert recording_logger.context == {"store": "s"}

    assert recording_logger.profiles == ["history::update"]
    assert recording_logger.components == ["history"]
    assert recording_logger.context == {}
    assert recording_logger.records == []


def test_span_logs_failure_and_reraises(recording_logger) -> None:
    with pytest.raises(KeyError):
        with telemetry.span("history::undo", component="history"):
            raise KeyError("gone")

    level, message, fields = recording_logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert fields["span"] == "history::undo"
    assert fields["component"] == "history"
    assert "gone" in fields["reason"]
