"""Process-wide configuration using pydantic-settings."""

from __future__ import annotations

import threading
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from errtree.errors import ConfigurationError
from errtree.levels import Level
from errtree.logging_config import get_logger

logger = get_logger(__name__)

_lock = threading.Lock()
_installed: "Settings | None" = None


class Settings(BaseSettings):
    """Library settings from ``ERRTREE_*`` environment variables.

    All fields are optional with sensible defaults. Instances are frozen:
    once installed they are read for the rest of the process.
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Minimum level of the root Log built by setup()
    log_level: str = "INFO"

    # Rendering
    line_width: int | None = Field(default=None, ge=20)
    color: bool | None = None
    timestamps: bool = True

    # Level for the library's own structlog diagnostics
    diagnostics_level: str = "WARNING"
    # JSON lines (true), console lines (false), or detect from stderr (unset)
    diagnostics_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return Level.parse(v).label

    @field_validator("diagnostics_level")
    @classmethod
    def validate_diagnostics_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(
                f"Invalid diagnostics_level '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return upper

    @property
    def level(self) -> Level:
        return Level.parse(self.log_level)

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            "log_level": self.log_level,
            "line_width": self.line_width,
            "color": self.color,
            "timestamps": self.timestamps,
            "diagnostics_level": self.diagnostics_level,
            "diagnostics_json": self.diagnostics_json,
        }


def install_settings(settings: Settings) -> Settings:
    """
    Install the process-wide settings exactly once.

    Installing settings equal to the ones already installed is a no-op.
    Installing different settings raises ConfigurationError rather than
    silently replacing what other code has already read.
    """
    global _installed

    with _lock:
        if _installed is not None:
            if _installed != settings:
                raise ConfigurationError(
                    "Settings were already installed with different values",
                    context={
                        "installed": _installed.to_dict(),
                        "requested": settings.to_dict(),
                    },
                )
            return _installed
        _installed = settings
    logger.debug("settings_installed", **settings.to_dict())
    return settings


def get_settings() -> Settings:
    """Get the installed Settings, loading them from the environment on first use."""
    global _installed

    with _lock:
        if _installed is None:
            _installed = Settings()
        return _installed
