# src/config/settings.py — v1
"""Typed configuration loaded from environment / .env via pydantic-settings.

Single source of truth for watcher, copier, demo and logging settings.
Variables use the FORKWATCH_ prefix (e.g. FORKWATCH_POLL_INTERVAL_SECONDS),
except ``home`` and ``user`` which read the standard HOME / USER variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="FORKWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === Watcher ===
    script_suffix: str = ".sh"
    interpreter: Path = Path("/bin/sh")
    poll_interval_seconds: float = 5.0

    # === Copier ===
    spawn_delay_seconds: float = 0.1
    dest_dir_mode: int = 0o755

    # === Filesystem backend ===
    fs_backend: Literal["pathlib", "posix"] = "pathlib"

    # === Demo ===
    home: Path = Field(
        default_factory=Path.home,
        validation_alias=AliasChoices("home", "HOME"),
    )
    user: str = Field(default="", validation_alias=AliasChoices("user", "USER"))
    demo_dir_name: str = "forkwatch_demo"
    demo_watch_seconds: float = 10.0

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("poll_interval_seconds", "spawn_delay_seconds", "demo_watch_seconds")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:  # noqa: N805
        if v < 0:
            raise ValueError("durations must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.script_suffix.startswith(".") or len(self.script_suffix) < 2:
            errors.append(
                f"SCRIPT_SUFFIX must look like '.ext', got {self.script_suffix!r}"
            )

        if not self.interpreter.is_absolute():
            errors.append(
                f"INTERPRETER must be an absolute path, got {str(self.interpreter)!r}"
            )

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment / .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
