"""User settings loaded from YAML."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = ["CONFIG_ENV", "CONFIG_FILE", "Settings", "load_settings"]

logger = logging.getLogger(__name__)

# Environment variable pointing at an alternative settings file
CONFIG_ENV = "IOFS_CONFIG"

# Default settings location
CONFIG_FILE = Path.home() / ".iofs" / "config.yaml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    """Tunable defaults for the command line front end."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    compare_chunk_size: int = Field(default=131_072, gt=0, alias="compareChunkSize")
    show_hidden: bool = Field(default=False, alias="showHidden")
    log_level: LogLevel = Field(default="WARNING", alias="logLevel")
    color: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def _settings_path(path: Path | None) -> Path:
    if path is not None:
        return path
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override)
    return CONFIG_FILE


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Settings file. Defaults to ``$IOFS_CONFIG`` or
            ``~/.iofs/config.yaml``.

    Returns:
        Parsed settings, or defaults when the file does not exist.

    Raises:
        ValueError: If the file is not valid YAML or fails validation.
    """
    config_path = _settings_path(path)
    if not config_path.exists():
        logger.debug("No settings file at %s, using defaults", config_path)
        return Settings()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid settings file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings file {config_path}: expected a mapping")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings file {config_path}: {e}") from e
