"""Settings for buildfs."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Default settings location
CONFIG_DIR = Path.home() / ".buildfs"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


class ConfigError(Exception):
    """Error loading settings or fixtures."""

    pass


def _default_search_paths() -> list[str]:
    return [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]


class Settings(BaseModel):
    """User settings.

    Attributes:
        native_copy: Use native bulk copies in the real filesystem.
        search_paths: Directories scanned by find/which lookups.
        log_level: Logging level name for the command line.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    native_copy: bool = Field(default=True, alias="nativeCopy")
    search_paths: list[str] = Field(default_factory=_default_search_paths, alias="searchPaths")
    log_level: str = Field(default="WARNING", alias="logLevel")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_file(cls, path: Path) -> Settings:
        """Load settings from a YAML file.

        Args:
            path: Path to the settings file.

        Returns:
            Validated Settings.

        Raises:
            ConfigError: If the file cannot be read or is invalid.
        """
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load settings {path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings {path}: {e}") from e


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a file, falling back to defaults.

    Args:
        path: Explicit settings file. Defaults to ~/.buildfs/config.yaml when
            that file exists.

    Returns:
        Loaded or default Settings.

    Raises:
        ConfigError: If an explicit or existing settings file is invalid.
    """
    if path is not None:
        return Settings.from_file(path)
    if CONFIG_FILE.exists():
        return Settings.from_file(CONFIG_FILE)
    return Settings()
