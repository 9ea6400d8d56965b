"""Engine logging on top of telelog.

Events are logged as ``event::<name>`` with key/value fields. Spans wrap an
engine operation in ``logger.profile`` and log ``span::<name>`` once the
block ends, carrying whatever results the block noted on its handle.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional

import telelog  # type: ignore[import]

ENV_PREFIX = "AMARA_EVENTS_"
DEFAULT_LOGGER_NAME = "amara_events"

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def configure(config: Optional[Any] = None) -> None:
    """Install ``config`` (a ``telelog.Config``) for loggers created from now on.

    Without one, the configuration is read from ``AMARA_EVENTS_LOG_LEVEL``
    (default ``INFO``), ``AMARA_EVENTS_LOG_FILE`` and
    ``AMARA_EVENTS_DISABLE_CONSOLE``.
    """

    global _config
    if config is None:
        config = telelog.Config()
        config.with_min_level((env_value("LOG_LEVEL") or "INFO").upper())
        config.with_console_output(not env_flag("DISABLE_CONSOLE", False))
        log_file = env_value("LOG_FILE")
        if log_file:
            config.with_file_output(log_file)
        config.with_profiling(True)
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    key = name or DEFAULT_LOGGER_NAME
    if key not in _loggers:
        if _config is None:
            configure()
        _loggers[key] = telelog.Logger.with_config(key, _config)
    return _loggers[key]


def _log(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    pairs = [(str(key), str(value)) for key, value in fields.items()]
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
    else:
        getattr(logger, level)(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


class SpanHandle:
    """Collects the fields logged when a span ends."""

    __slots__ = ("name", "fields")

    def __init__(self, name: str, fields: Dict[str, Any]) -> None:
        self.name = name
        self.fields = fields

    def note(self, key: str, value: Any) -> None:
        self.fields[key] = value


@contextmanager
def span(
    name: str,
    *,
    level: str = "info",
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    **fields: Any,
) -> Iterator[SpanHandle]:
    """Profile a block and log ``span::<name>`` with its fields when it ends.

    A block that raises is logged at ``error`` with the exception added as
    ``error``, and the exception propagates.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(name, dict(fields))
    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.note("error", f"{type(exc).__name__}: {exc}")
            _log(log, "error", f"span::{name}", handle.fields)
            raise
    _log(log, level, f"span::{name}", handle.fields)


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "env_flag",
    "env_value",
    "get_logger",
    "record_event",
    "span",
]
