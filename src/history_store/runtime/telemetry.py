"""Telemetry for history stores, built directly on telelog.

``configure`` picks the telelog config (from ``HISTORY_STORE_*`` variables
unless one is passed in), ``get_logger`` caches loggers per name,
``record_event`` emits ``event::<name>`` lines, and ``span`` profiles a
history operation and logs ``span::fail`` when it raises.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HISTORY_STORE_"
DEFAULT_LOGGER_NAME = "history_store"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``HISTORY_STORE_<name>`` from the environment."""

    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def build_config(*, level: Optional[str] = None) -> Any:
    """Telelog config driven by the environment; ``level`` beats LOG_LEVEL."""

    config = tl.Config()
    # History operations are chatty; stay quiet unless asked.
    config.with_min_level((level or env("LOG_LEVEL") or "WARNING").upper())
    config.with_console_output(not env_flag("DISABLE_CONSOLE", False))
    config.with_colored_output(not env_flag("NO_COLOR", False))
    config.with_json_format(env_flag("LOG_JSON", False))

    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(env("LOG_BUFFER_SIZE") or "2048"))

    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, level: Optional[str] = None) -> None:
    """Swap the active config and drop cached loggers.

    ``config`` is an explicit ``telelog.Config``; ``level`` rebuilds the
    environment config at that minimum level. They are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config is not None and level is not None:
        raise ValueError("Provide either `config` or `level`, not both.")
    _ACTIVE_CONFIG = config if config is not None else build_config(level=level)
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config()
    logger_name = name or env("LOGGER") or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    pairs = [(str(key), str(value)) for key, value in fields.items()]
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[Any]:
    """Profile the block under ``name`` with ``metadata`` as logger context.

    Yields the logger. An exception escaping the block is logged as
    ``span::fail`` with its message and then re-raised.
    """

    log = get_logger(logger_name)
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield log
        except Exception as exc:
            fields: Dict[str, Any] = {"span": name, **context, "reason": exc}
            if component:
                fields["component"] = component
            _emit(log, "error", "span::fail", fields)
            raise
        finally:
            for key in context:
                log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "build_config",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
