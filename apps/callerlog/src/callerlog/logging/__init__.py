"""
Leveled Logging Service for callerlog.

Provides a leveled logger with multiple sink support:
- stdio: Standard error/output (console/json format)
- syslog: Local system log (attached when reachable)

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog + orjson for the processor pipeline and JSON serialization.
"""

from .caller import resolve_caller
from .core import Entry, Logger, PanicError, configure_logging, get_logger, set_logger
from .flags import FLAG_NAME, LevelFlag, add_level_flag
from .levels import Level, LevelParseError, parse_level
from .sinks import BaseSink, StdioSink, SyslogSink

__all__ = [
    "BaseSink",
    "Entry",
    "FLAG_NAME",
    "Level",
    "LevelFlag",
    "LevelParseError",
    "Logger",
    "PanicError",
    "StdioSink",
    "SyslogSink",
    "add_level_flag",
    "configure_logging",
    "get_logger",
    "parse_level",
    "resolve_caller",
    "set_logger",
]
