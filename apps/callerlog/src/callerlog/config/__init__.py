"""
callerlog Configuration Module.

Implements the Nested Settings Pattern: each concern is a sub-settings class
with its own environment variable prefix.

Usage:
    from callerlog.config import settings

    settings.logging.level
    settings.logging.syslog_enabled
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LogFormat, LoggingSettings, LogLevel


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingSettings",
    "Settings",
    "settings",
]
