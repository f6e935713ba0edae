"""Settings for snapzap, read from SNAPZAP_* environment variables or a .env file."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings with environment variable support."""

    # Volumes
    mount_root: str = Field(
        default="/Volumes/",
        description="Prefix added to volume names that do not already contain it",
    )

    # External commands
    diskutil_command: str = Field(default="diskutil", description="diskutil executable")
    tmutil_command: str = Field(default="tmutil", description="tmutil executable")
    command_timeout_seconds: int = Field(
        default=300, description="Timeout for a single external command"
    )

    # Pauses so messages can be read before the menu redraws
    not_purgeable_pause: float = Field(
        default=1.5, description="Seconds to wait after a 'not purgeable' message"
    )
    invalid_choice_pause: float = Field(
        default=1.2, description="Seconds to wait after an invalid snapshot choice"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")
    log_max_bytes: int = Field(default=1_000_000, description="Log file size before rotation")
    log_backup_count: int = Field(default=3, description="Rotated log files to keep")

    model_config = SettingsConfigDict(
        env_prefix="SNAPZAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("mount_root")
    @classmethod
    def validate_mount_root(cls, v: str) -> str:
        """Mount root must be absolute and end with a slash."""
        if not v.startswith("/"):
            raise ValueError(f"mount_root must be an absolute path, got '{v}'")
        return v if v.endswith("/") else v + "/"

    @field_validator("command_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"command_timeout_seconds must be positive, got {v}")
        return v

    @field_validator("not_purgeable_pause", "invalid_choice_pause")
    @classmethod
    def validate_pause(cls, v: float) -> float:
        """Pauses cannot be negative."""
        if v < 0:
            raise ValueError(f"pause must not be negative, got {v}")
        return v


# Module-level settings cache
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings  # noqa: PLW0603
    _settings = None
