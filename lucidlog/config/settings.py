"""
Logging Configuration for lucidlog

Single source of truth for logger configuration using pydantic-settings.

ARCHITECTURAL PRINCIPLES:
- Only this module accesses environment variables directly
- LoggerFacade receives its settings via dependency injection
- Type-safe validation with automatic conversion
"""

from enum import Enum
from typing import Optional, Union

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lucidlog.exceptions import ConfigurationException


# =============================================================================
# ENUMS
# =============================================================================

class LogFormat(str, Enum):
    """Output encoding of log entries."""
    LINES = "lines"
    GOOGLE_CLOUD = "google_cloud"


class ReconfigurePolicy(str, Enum):
    """What happens when a setter runs after the logger was built."""
    WARN = "warn"
    RAISE = "raise"


def _normalize_format_name(value: str) -> str:
    normalized = value.strip().lower().replace("-", "_")
    if normalized == "googlecloud":
        return LogFormat.GOOGLE_CLOUD.value
    return normalized


def parse_log_format(value: Union[str, LogFormat]) -> LogFormat:
    """
    Resolve a format name such as ``GoogleCloud`` or ``lines``.

    Raises:
        ConfigurationException: If the name is not a known format
    """
    if isinstance(value, LogFormat):
        return value
    try:
        return LogFormat(_normalize_format_name(value))
    except ValueError as e:
        raise ConfigurationException(
            f"Unknown log format: {value}",
            details={"allowed": [f.value for f in LogFormat]},
        ) from e


# =============================================================================
# SETTINGS
# =============================================================================

class LoggingSettings(BaseSettings):
    """Logger facade configuration"""
    format: LogFormat = Field(default=LogFormat.LINES, description="Output encoding")
    debug: bool = Field(default=False, description="Emit debug-level entries")

    # Log volume sampling
    sampling_initial: int = Field(default=100, ge=1)
    sampling_thereafter: int = Field(default=100, ge=1)
    sampling_interval: float = Field(default=1.0, gt=0)

    reconfigure_policy: ReconfigurePolicy = Field(default=ReconfigurePolicy.WARN)
    colors: bool = Field(default=False, description="ANSI colors in lines format")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v: Union[str, LogFormat]) -> Union[str, LogFormat]:
        """Accept `GoogleCloud`, `google-cloud`, `LINES` and friends."""
        if isinstance(v, str) and not isinstance(v, LogFormat):
            return _normalize_format_name(v)
        return v

    @field_validator("reconfigure_policy", mode="before")
    @classmethod
    def lowercase_policy(cls, v: Union[str, ReconfigurePolicy]) -> Union[str, ReconfigurePolicy]:
        if isinstance(v, str) and not isinstance(v, ReconfigurePolicy):
            return v.strip().lower()
        return v


# =============================================================================
# GLOBAL SETTINGS INSTANCE
# =============================================================================

_settings_instance: Optional[LoggingSettings] = None


def get_settings() -> LoggingSettings:
    """
    Get global settings instance (singleton pattern).

    Raises:
        ConfigurationException: If settings validation fails
    """
    global _settings_instance
    if _settings_instance is None:
        try:
            _settings_instance = LoggingSettings()
        except ValidationError as e:
            raise ConfigurationException(
                f"Logging settings initialization failed: {e}",
                details={"errors": e.errors(include_url=False)},
            ) from e
    return _settings_instance


def reset_settings() -> None:
    """
    Reset settings instance (primarily for testing).

    Forces recreation of settings on next get_settings() call.
    """
    global _settings_instance
    _settings_instance = None
