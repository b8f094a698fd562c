"""
Logging Configuration.
"""

from enum import Enum
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"
    PANIC = "panic"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CALLERLOG_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum severity to emit")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Output format")
    stream: Literal["stdout", "stderr"] = Field(default="stderr", description="Stream for the stdio sink")
    syslog_enabled: bool = Field(default=True, description="Attach the syslog sink when reachable")
    syslog_address: str | None = Field(
        default=None,
        description="Syslog socket path; auto-detected when unset",
    )
    syslog_facility: str = Field(default="user", description="Syslog facility name")
    syslog_tag: str = Field(default="", description="Syslog tag; program name when empty")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Console timestamp format",
    )
    console_level_width: int = Field(default=5, description="Console level column width")
    console_caller_width: int = Field(default=24, description="Console caller column width")
    console_separator: str = Field(default=" | ", description="Console column separator")
