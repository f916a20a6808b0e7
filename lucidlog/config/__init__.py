"""Configuration Package

Purpose: Environment-based settings for the lucidlog logger facade
"""

from .settings import (
    LogFormat,
    LoggingSettings,
    ReconfigurePolicy,
    get_settings,
    parse_log_format,
    reset_settings,
)

__all__ = [
    "LogFormat",
    "LoggingSettings",
    "ReconfigurePolicy",
    "get_settings",
    "parse_log_format",
    "reset_settings",
]
