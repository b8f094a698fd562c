"""
Core logger object, processor chain and the process-wide accessor.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import ConsoleFormatter, sprint, sprintf, sprintln
from .levels import Level, parse_level
from .sinks import BaseSink, StdioSink, SyslogSink

if TYPE_CHECKING:
    from callerlog.config.logging import LoggingSettings

# Bootstrap diagnostics only; never used for facade output.
_diagnostics = logging.getLogger(__name__)

DEFAULT_LEVEL = Level.INFO


def exit_process(code: int) -> None:
    """Flush the standard streams and end the process from any thread."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, OSError, ValueError):
            pass
    os._exit(code)


class PanicError(RuntimeError):
    """Raised after a panic-level entry has been emitted."""

    def __init__(self, message: str, fields: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = dict(fields or {})


# =============================================================================
# Structlog Processors
# =============================================================================


def add_log_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the canonical level name (``warn``, ``fatal``...) to the log event."""
    event_dict["level"] = method_name
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def render_to_sinks(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> tuple[tuple[EventDict], dict]:
    """Hand the finished event dict to the wrapped fan-out logger."""
    return (event_dict,), {}


class SinkFanout:
    """Wrapped logger that delivers finished entries to every sink of its owner."""

    def __init__(self, owner: Logger):
        self.owner = owner

    def msg(self, event_dict: EventDict) -> None:
        for sink in self.owner.sinks:
            try:
                sink.emit(event_dict)
            except Exception:
                # One failing sink must not keep the entry from the others.
                _diagnostics.debug("sink %r failed to emit", sink, exc_info=True)

    debug = info = warn = error = fatal = panic = msg


# =============================================================================
# Bound Entry
# =============================================================================


class Entry(structlog.BoundLoggerBase):
    """A bound logger carrying the fields of a single log call.

    Provides the three call styles for every level: space-joined
    (``info``), line-joined (``infoln``) and printf-style (``infof``).
    """

    _logger: SinkFanout

    def log(self, level: Level, message: str) -> None:
        """Emit ``message`` at ``level``, then exit or raise for fatal and panic."""
        self._proxy_to_logger(level.method_name, message)
        if level is Level.FATAL:
            self._logger.owner.exit(1)
        elif level is Level.PANIC:
            raise PanicError(message, self._context)

    def debug(self, *args: Any) -> None:
        self.log(Level.DEBUG, sprint(*args))

    def debugln(self, *args: Any) -> None:
        self.log(Level.DEBUG, sprintln(*args))

    def debugf(self, template: str, *args: Any) -> None:
        self.log(Level.DEBUG, sprintf(template, *args))

    def info(self, *args: Any) -> None:
        self.log(Level.INFO, sprint(*args))

    def infoln(self, *args: Any) -> None:
        self.log(Level.INFO, sprintln(*args))

    def infof(self, template: str, *args: Any) -> None:
        self.log(Level.INFO, sprintf(template, *args))

    def warn(self, *args: Any) -> None:
        self.log(Level.WARN, sprint(*args))

    def warnln(self, *args: Any) -> None:
        self.log(Level.WARN, sprintln(*args))

    def warnf(self, template: str, *args: Any) -> None:
        self.log(Level.WARN, sprintf(template, *args))

    def error(self, *args: Any) -> None:
        self.log(Level.ERROR, sprint(*args))

    def errorln(self, *args: Any) -> None:
        self.log(Level.ERROR, sprintln(*args))

    def errorf(self, template: str, *args: Any) -> None:
        self.log(Level.ERROR, sprintf(template, *args))

    def fatal(self, *args: Any) -> None:
        self.log(Level.FATAL, sprint(*args))

    def fatalln(self, *args: Any) -> None:
        self.log(Level.FATAL, sprintln(*args))

    def fatalf(self, template: str, *args: Any) -> None:
        self.log(Level.FATAL, sprintf(template, *args))

    def panic(self, *args: Any) -> None:
        self.log(Level.PANIC, sprint(*args))

    def panicln(self, *args: Any) -> None:
        self.log(Level.PANIC, sprintln(*args))

    def panicf(self, template: str, *args: Any) -> None:
        self.log(Level.PANIC, sprintf(template, *args))


# =============================================================================
# Logger
# =============================================================================


class Logger:
    """Leveled logger owning a threshold and a set of sinks.

    The threshold and the sink tuple are replaced under a lock and read
    without one; every emission sees a single consistent value of each.

    Args:
        level: Initial threshold
        sinks: Initial sinks
        exit_func: Called with status 1 after a fatal entry (default: exit_process)
    """

    def __init__(
        self,
        level: str | Level = DEFAULT_LEVEL,
        sinks: Iterable[BaseSink] = (),
        exit_func: Callable[[int], Any] = exit_process,
    ):
        self._lock = threading.Lock()
        self._level = parse_level(level)
        self._sinks: tuple[BaseSink, ...] = tuple(sinks)
        self.exit_func = exit_func
        self._fanout = SinkFanout(self)
        self._processors = [
            self._drop_below_threshold,
            add_log_level,
            add_timestamp,
            rename_event_key,
            render_to_sinks,
        ]

    def __repr__(self) -> str:
        return f"<Logger level={self._level} sinks={len(self._sinks)}>"

    @property
    def level(self) -> Level:
        return self._level

    def set_level(self, level: str | Level) -> Level:
        """Parse ``level`` and make it the threshold.

        Raises:
            LevelParseError: the threshold is left unchanged.
        """
        parsed = parse_level(level)
        with self._lock:
            self._level = parsed
        return parsed

    def is_enabled(self, level: Level) -> bool:
        return level >= self._level

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return self._sinks

    def add_sink(self, sink: BaseSink) -> None:
        with self._lock:
            self._sinks = (*self._sinks, sink)

    def bind(self, **fields: Any) -> Entry:
        """Return an Entry carrying ``fields``."""
        return Entry(self._fanout, self._processors, dict(fields))

    def exit(self, code: int) -> None:
        self.exit_func(code)

    def close(self) -> None:
        """Close all sinks."""
        with self._lock:
            sinks, self._sinks = self._sinks, ()
        for sink in sinks:
            sink.close()

    def _drop_below_threshold(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if Level[method_name.upper()] < self._level:
            raise structlog.DropEvent
        return event_dict


# =============================================================================
# Global State
# =============================================================================

_logger: Logger | None = None
_logger_lock = threading.RLock()


def get_logger() -> Logger:
    """Return the process-wide logger, configuring it on first use."""
    logger = _logger
    if logger is not None:
        return logger
    with _logger_lock:
        if _logger is None:
            configure_logging()
        assert _logger is not None
        return _logger


def set_logger(logger: Logger | None) -> Logger | None:
    """Install ``logger`` as the process-wide logger and return the previous one."""
    global _logger
    with _logger_lock:
        previous, _logger = _logger, logger
    return previous


def attach_syslog(
    logger: Logger,
    address: str | tuple[str, int] | None = None,
    facility: str | int = "user",
    tag: str = "",
) -> SyslogSink | None:
    """Attach a syslog sink if one can be constructed.

    Construction errors are reported on the diagnostic channel only.
    """
    try:
        sink = SyslogSink(address=address, facility=facility, tag=tag)
    except Exception as exc:
        _diagnostics.debug("syslog sink unavailable, continuing without it: %s", exc)
        return None
    logger.add_sink(sink)
    return sink


def configure_logging(
    *,
    level: str | Level | None = None,
    fmt: str | None = None,
    stream: Any = None,
    syslog: bool | None = None,
    settings: LoggingSettings | None = None,
) -> Logger:
    """
    Build the process-wide logger and install it.

    Explicit arguments override the values from ``settings`` (default: the
    ``CALLERLOG_LOG_*`` environment).

    Args:
        level: Threshold (debug, info, warn, error, fatal, panic)
        fmt: Output format for the stdio sink (console, json)
        stream: Output stream for the stdio sink
        syslog: Whether to attempt attaching the syslog sink
        settings: Logging settings to read defaults from
    """
    if settings is None:
        from callerlog.config import settings as app_settings

        settings = app_settings.logging

    # Column layout is class-level and applies to every console StdioSink in the process.
    ConsoleFormatter.configure(
        timestamp_format=settings.console_timestamp_format,
        level_width=settings.console_level_width,
        caller_width=settings.console_caller_width,
        separator=settings.console_separator,
    )

    log_format = fmt or settings.format.value
    if stream is None:
        stream = sys.stdout if settings.stream == "stdout" else sys.stderr

    logger = Logger(level=level if level is not None else settings.level)
    logger.add_sink(StdioSink(fmt="json" if log_format.lower() == "json" else "console", stream=stream))

    if syslog is None:
        syslog = settings.syslog_enabled
    if syslog:
        attach_syslog(
            logger,
            address=settings.syslog_address,
            facility=settings.syslog_facility,
            tag=settings.syslog_tag,
        )

    previous = set_logger(logger)
    if previous is not None:
        previous.close()
    return logger
