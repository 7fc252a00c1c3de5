"""Runtime settings for openiban.

Pydantic-based configuration, overridable through environment variables or a
``.env`` file.

Environment Variables:
- OPENIBAN_MAX_INPUT_LENGTH: Reject raw input longer than this (default: 64)
- OPENIBAN_REGISTRY_FILE: YAML file with country definitions (default: built-in table)
- OPENIBAN_LOG_LEVEL: Logging level (default: WARNING)
- OPENIBAN_JSON_LOGS: Emit JSON logs (default: false)
- OPENIBAN_DEV_MODE: Colored console logs (default: true)
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """openiban settings.

    Example:
        >>> settings = Settings()
        >>> settings.max_input_length
        64
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENIBAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Partitioned 34-character IBANs take 42 characters; leave room for stray whitespace
    max_input_length: int = Field(
        default=64,
        ge=5,
        le=1024,
        description="Raw inputs longer than this are rejected before normalization",
    )

    registry_file: Path | None = Field(
        default=None,
        description="YAML file with country definitions replacing the built-in table",
    )

    log_level: str = Field(default="WARNING", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit JSON logs")
    dev_mode: bool = Field(default=True, description="Colored console logs")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the process-wide settings."""
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """Re-read settings from the environment."""
    global _settings

    _settings = Settings()
    return _settings
