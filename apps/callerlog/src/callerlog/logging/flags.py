"""
Command-line binding for the log threshold.

The flag only takes effect once the host program has parsed its arguments,
so ``parse_args`` must run before anything is logged.
"""

from __future__ import annotations

import argparse
from typing import Any

from .core import Logger, get_logger
from .levels import LEVEL_NAMES, Level, LevelParseError

FLAG_NAME = "log.level"
FLAG_HELP = (
    "Only log messages with the given severity or above. "
    f"Valid levels: [{', '.join(LEVEL_NAMES)}]."
)


class LevelFlag:
    """Flag value bound to a logger's threshold.

    ``str()`` is always the threshold's current name, whoever changed it last.
    Without an explicit logger the process-wide logger is used.
    """

    def __init__(self, logger: Logger | None = None):
        self._logger = logger

    @property
    def logger(self) -> Logger:
        return self._logger or get_logger()

    def __str__(self) -> str:
        return str(self.logger.level)

    def __repr__(self) -> str:
        return f"LevelFlag({str(self)!r})"

    def set(self, value: str) -> Level:
        return self.logger.set_level(value)


class LevelAction(argparse.Action):
    """argparse action applying ``--log.level`` to a LevelFlag."""

    def __init__(self, option_strings: list[str], dest: str, flag: LevelFlag | None = None, **kwargs: Any):
        self.flag = flag or LevelFlag()
        kwargs.setdefault("default", self.flag)
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        try:
            self.flag.set(values)
        except LevelParseError as exc:
            raise argparse.ArgumentError(self, str(exc)) from exc
        setattr(namespace, self.dest, self.flag)


def add_level_flag(parser: argparse.ArgumentParser, logger: Logger | None = None) -> argparse.Action:
    """Register ``--log.level`` on ``parser``; the parsed namespace holds a LevelFlag under ``log_level``."""
    return parser.add_argument(
        f"--{FLAG_NAME}",
        dest="log_level",
        metavar="LEVEL",
        action=LevelAction,
        flag=LevelFlag(logger),
        help=FLAG_HELP,
    )
