"""User configuration and settings.

This module provides the configuration model and I/O functions for
recyclectl defaults: whether directories are recursed without asking
and how many overwrite passes a shred performs.

Configuration is stored in ~/.config/recyclectl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recyclectl.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_PASSES = 3
DEFAULT_BLOCK_SIZE = 1024 * 1024


class ShredSettings(BaseModel):
    """Overwrite settings for the shred command.

    Attributes:
        passes: Number of overwrite passes per file.
        block_size: Size in bytes of each write chunk.
    """

    model_config = ConfigDict(extra="forbid")

    passes: Annotated[
        int,
        Field(ge=1, le=35, description="Overwrite passes per file (1-35)"),
    ] = DEFAULT_PASSES
    block_size: Annotated[
        int,
        Field(ge=512, le=64 * 1024 * 1024, description="Write chunk size in bytes"),
    ] = DEFAULT_BLOCK_SIZE


class Settings(BaseModel):
    """Top-level recyclectl configuration.

    Attributes:
        recurse: Recurse into directories without prompting by default.
        shred: Overwrite settings for shred.
    """

    model_config = ConfigDict(extra="forbid")

    recurse: Annotated[
        bool,
        Field(description="Recurse into directories without asking"),
    ] = False
    shred: Annotated[
        ShredSettings,
        Field(default_factory=ShredSettings, description="Shred settings"),
    ]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated Settings object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file can't be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return Settings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = settings.model_dump()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def render_settings(settings: Settings) -> str:
    """Render settings as TOML text.

    Args:
        settings: The Settings object to render.

    Returns:
        TOML document as a string.
    """
    return tomli_w.dumps(settings.model_dump())
