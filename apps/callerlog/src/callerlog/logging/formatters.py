"""
Log formatters and color utilities.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import orjson
from structlog.typing import EventDict

# =============================================================================
# Message Formatting (call styles)
# =============================================================================


def sprint(*args: Any) -> str:
    """Space-joined message text."""
    return " ".join(str(arg) for arg in args)


def sprintln(*args: Any) -> str:
    """Space-joined message text without a trailing newline; the sink terminates the line."""
    text = sprint(*args)
    if text.endswith("\n"):
        text = text[:-1]
    return text


def sprintf(template: Any, *args: Any) -> str:
    """printf-style message text.

    A single non-empty mapping argument feeds named placeholders, as with the
    stdlib ``logging`` module. A template that does not match its arguments
    never raises; the arguments are appended instead.
    """
    template = str(template)
    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]
    try:
        return template % values
    except (TypeError, ValueError, KeyError):
        return sprint(template, *args)


# =============================================================================
# Console Formatter (Aligned Columns)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "caller": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Handles human-readable console log rendering (fixed width, right-aligned)."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARN": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "FATAL": "\x1b[1;31m",
        "PANIC": "\x1b[1;35m",
    }

    EXCLUDED_KEYS = {"level", "message", "event", "caller", "timestamp"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 5
    CALLER_WIDTH = 24
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        level_width: int | None = None,
        caller_width: int | None = None,
        separator: str | None = None,
    ) -> None:
        """Configure alignment and rendering parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
            cls.TIMESTAMP_WIDTH = len(datetime.now().strftime(timestamp_format))
        if level_width:
            cls.LEVEL_WIDTH = level_width
        if caller_width:
            cls.CALLER_WIDTH = caller_width
        if separator is not None:
            cls.SEPARATOR = separator

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                normalized = raw_timestamp.replace("Z", "+00:00")
                dt = datetime.fromisoformat(normalized)
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def _colorize_level(cls, text: str, level_upper: str, use_color: bool) -> str:
        if not use_color:
            return text
        color = cls._LEVEL_COLORS.get(level_upper)
        if not color:
            return text
        return f"{color}{text}{cls._RESET}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level = str(event_dict.get("level", "info"))
        message_text = str(event_dict.get("message", event_dict.get("event", "")))
        caller = str(event_dict.get("caller", ""))

        extras = []
        for k, v in event_dict.items():
            if k not in cls.EXCLUDED_KEYS:
                key_colored = cls._maybe_color(k, "key", use_color)
                value_colored = cls._maybe_color(str(v), "dim", use_color)
                extras.append(f"{key_colored}={value_colored}")

        if extras:
            message_text = f"{message_text} " + " ".join(extras)

        level_upper = level.upper()
        level_text = cls._colorize_level(cls._fit_right(level_upper, cls.LEVEL_WIDTH), level_upper, use_color)
        timestamp = cls._format_timestamp(event_dict.get("timestamp"))

        return "".join(
            [
                cls._maybe_color(cls._fit_right(timestamp, cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                cls.SEPARATOR,
                level_text,
                cls.SEPARATOR,
                cls._maybe_color(cls._fit_right(caller, cls.CALLER_WIDTH), "caller", use_color),
                cls.SEPARATOR,
                message_text,
            ]
        )


# =============================================================================
# Text Formatter (key=value, used for syslog)
# =============================================================================


def _quote(value: Any) -> str:
    text = str(value)
    if text and not any(ch in text for ch in ' "=\n\t\\'):
        return text
    return orjson.dumps(text).decode()


def format_logfmt(event_dict: EventDict, *, include_timestamp: bool = True) -> str:
    """Render an event dict as a single ``key=value`` line.

    ``level`` and ``msg`` lead, then the remaining fields in insertion order.
    """
    parts = []
    if include_timestamp and "timestamp" in event_dict:
        parts.append(f"time={_quote(event_dict['timestamp'])}")
    parts.append(f"level={_quote(event_dict.get('level', 'info'))}")
    parts.append(f"msg={_quote(event_dict.get('message', event_dict.get('event', '')))}")
    for k, v in event_dict.items():
        if k in {"timestamp", "level", "message", "event"}:
            continue
        parts.append(f"{k}={_quote(v)}")
    return " ".join(parts)
