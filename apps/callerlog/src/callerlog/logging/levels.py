"""
Severity levels and level-name parsing.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class LevelParseError(ValueError):
    """Raised when a string does not name a known severity level."""

    def __init__(self, value: Any):
        super().__init__(f"not a valid log level: {value!r}")
        self.value = value


class Level(IntEnum):
    """Ordered severity levels, lowest first."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @property
    def method_name(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


LEVEL_NAMES: tuple[str, ...] = tuple(str(level) for level in Level)

_ALIASES = {"warning": "warn"}


def parse_level(name: str | Level) -> Level:
    """Parse a level name (case-insensitive) into a Level.

    Accepts ``warning`` as an alias of ``warn``. String enum members are
    parsed by value.

    Raises:
        LevelParseError: if the name is not a known level.
    """
    if isinstance(name, Level):
        return name

    raw = getattr(name, "value", name)
    if not isinstance(raw, str):
        raise LevelParseError(name)

    key = raw.lower()
    key = _ALIASES.get(key, key)
    try:
        return Level[key.upper()]
    except KeyError:
        raise LevelParseError(name) from None
