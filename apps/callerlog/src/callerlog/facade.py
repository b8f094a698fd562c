"""
Package-level logging functions.

Every function logs on the process-wide logger with a ``caller`` field
naming the file and line that called it.
"""

from __future__ import annotations

from typing import Any

from callerlog.logging.caller import resolve_caller
from callerlog.logging.core import Entry, get_logger
from callerlog.logging.levels import Level


def set_level(level: str) -> Level:
    """Set the threshold of the process-wide logger.

    Raises:
        LevelParseError: if ``level`` is not a level name; the threshold is unchanged.
    """
    return get_logger().set_level(level)


def _file_line_entry() -> Entry:
    # Two frames up: past the public function to the user's call site.
    return get_logger().bind(caller=resolve_caller(2))


def debug(*args: Any) -> None:
    """Log at level Debug."""
    _file_line_entry().debug(*args)


def debugln(*args: Any) -> None:
    """Log at level Debug."""
    _file_line_entry().debugln(*args)


def debugf(template: str, *args: Any) -> None:
    """Log at level Debug."""
    _file_line_entry().debugf(template, *args)


def info(*args: Any) -> None:
    """Log at level Info."""
    _file_line_entry().info(*args)


def infoln(*args: Any) -> None:
    """Log at level Info."""
    _file_line_entry().infoln(*args)


def infof(template: str, *args: Any) -> None:
    """Log at level Info."""
    _file_line_entry().infof(template, *args)


def print(*args: Any) -> None:  # noqa: A001
    """Log at level Info."""
    _file_line_entry().info(*args)


def println(*args: Any) -> None:
    """Log at level Info."""
    _file_line_entry().infoln(*args)


def printf(template: str, *args: Any) -> None:
    """Log at level Info."""
    _file_line_entry().infof(template, *args)


def warn(*args: Any) -> None:
    """Log at level Warn."""
    _file_line_entry().warn(*args)


def warnln(*args: Any) -> None:
    """Log at level Warn."""
    _file_line_entry().warnln(*args)


def warnf(template: str, *args: Any) -> None:
    """Log at level Warn."""
    _file_line_entry().warnf(template, *args)


def error(*args: Any) -> None:
    """Log at level Error."""
    _file_line_entry().error(*args)


def errorln(*args: Any) -> None:
    """Log at level Error."""
    _file_line_entry().errorln(*args)


def errorf(template: str, *args: Any) -> None:
    """Log at level Error."""
    _file_line_entry().errorf(template, *args)


def fatal(*args: Any) -> None:
    """Log at level Fatal, then exit with status 1."""
    _file_line_entry().fatal(*args)


def fatalln(*args: Any) -> None:
    """Log at level Fatal, then exit with status 1."""
    _file_line_entry().fatalln(*args)


def fatalf(template: str, *args: Any) -> None:
    """Log at level Fatal, then exit with status 1."""
    _file_line_entry().fatalf(template, *args)


def panic(*args: Any) -> None:
    """Log at level Panic, then raise PanicError."""
    _file_line_entry().panic(*args)


def panicln(*args: Any) -> None:
    """Log at level Panic, then raise PanicError."""
    _file_line_entry().panicln(*args)


def panicf(template: str, *args: Any) -> None:
    """Log at level Panic, then raise PanicError."""
    _file_line_entry().panicf(template, *args)


__all__ = [
    "set_level",
    "debug",
    "debugln",
    "debugf",
    "info",
    "infoln",
    "infof",
    "print",
    "println",
    "printf",
    "warn",
    "warnln",
    "warnf",
    "error",
    "errorln",
    "errorf",
    "fatal",
    "fatalln",
    "fatalf",
    "panic",
    "panicln",
    "panicf",
]
