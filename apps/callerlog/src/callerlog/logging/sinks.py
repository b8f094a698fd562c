"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from abc import ABC, abstractmethod
from logging.handlers import SysLogHandler
from typing import Any, Literal

import orjson
from structlog.typing import EventDict

from .formatters import ConsoleFormatter, format_logfmt

LogFormat = Literal["console", "json"]

LOCAL_SYSLOG_SOCKETS = ("/dev/log", "/var/run/syslog", "/var/run/log")


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default or str, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (colored human-readable) or "json"
        stream: Output stream (default: stderr)
    """

    def __init__(self, fmt: LogFormat = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream or sys.stderr
        self._lock = threading.Lock()

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event_dict, use_color=use_color)

        with self._lock:
            self._stream.write(output + "\n")
            self._stream.flush()

    def close(self) -> None:
        pass


# =============================================================================
# System Log Sink
# =============================================================================


class _SyslogTransport(SysLogHandler):
    """SysLogHandler that maps facade level names onto syslog severities."""

    LEVEL_PRIORITIES = {
        "debug": "debug",
        "info": "info",
        "warn": "warning",
        "error": "err",
        "fatal": "crit",
        "panic": "emerg",
    }

    def mapPriority(self, levelName: str) -> str:  # noqa: N802 - stdlib override
        return self.LEVEL_PRIORITIES.get(levelName, "info")

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802 - stdlib override
        # Called from the except block in emit; the sink fan-out reports it.
        raise


def local_syslog_address() -> str:
    """Return the first local syslog socket path that exists."""
    for path in LOCAL_SYSLOG_SOCKETS:
        if os.path.exists(path):
            return path
    raise OSError(f"no local syslog socket found (tried {', '.join(LOCAL_SYSLOG_SOCKETS)})")


class SyslogSink(BaseSink):
    """System log sink.

    Connects on construction; any connection error propagates so the caller
    can decide to run without it. Each entry is sent as one ``key=value``
    line with a syslog severity derived from the entry level.

    Args:
        address: Unix socket path or ``(host, port)``; auto-detected when omitted
        facility: Syslog facility name or number
        tag: Message tag; defaults to the program name
    """

    def __init__(
        self,
        address: str | tuple[str, int] | None = None,
        facility: str | int = "user",
        tag: str = "",
    ):
        if isinstance(facility, str):
            facility = SysLogHandler.facility_names[facility.lower()]
        address = address or local_syslog_address()
        self._handler = _SyslogTransport(address=address, facility=facility)
        if isinstance(address, str):
            # SysLogHandler ignores unix socket connection errors.
            try:
                self._handler.socket.getpeername()
            except (OSError, AttributeError) as exc:
                self._handler.close()
                raise OSError(f"cannot connect to syslog socket {address}") from exc
        tag = tag or os.path.basename(sys.argv[0] if sys.argv and sys.argv[0] else "python")
        self._handler.ident = f"{tag}: "
        self._lock = threading.Lock()

    def emit(self, event_dict: EventDict) -> None:
        record = logging.makeLogRecord(
            {
                "msg": format_logfmt(event_dict),
                "levelname": str(event_dict.get("level", "info")),
            }
        )
        with self._lock:
            self._handler.emit(record)

    def close(self) -> None:
        self._handler.close()
