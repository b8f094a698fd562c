"""
callerlog: process-wide leveled logging with caller annotation.

Usage:
    import argparse
    import callerlog

    parser = argparse.ArgumentParser()
    callerlog.add_level_flag(parser)
    parser.parse_args()

    callerlog.infof("listening on %s", addr)   # caller=server.py:42
"""

from callerlog.facade import (
    debug,
    debugf,
    debugln,
    error,
    errorf,
    errorln,
    fatal,
    fatalf,
    fatalln,
    info,
    infof,
    infoln,
    panic,
    panicf,
    panicln,
    print,
    printf,
    println,
    set_level,
    warn,
    warnf,
    warnln,
)
from callerlog.logging import (
    Level,
    LevelFlag,
    LevelParseError,
    Logger,
    PanicError,
    add_level_flag,
    configure_logging,
    get_logger,
    set_logger,
)

__all__ = [
    "Level",
    "LevelFlag",
    "LevelParseError",
    "Logger",
    "PanicError",
    "add_level_flag",
    "configure_logging",
    "get_logger",
    "set_logger",
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
