"""Color theme for recyclectl output.

The bundled data/theme.toml holds the default palette. A theme.toml in
the config directory may override any subset of its [colors] keys.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from recyclectl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

# Style used for each operation in result tables and success messages
OPERATION_STYLES: dict[str, str] = {
    "trash": "trashed",
    "restore": "restored",
    "delete": "removed",
    "purge": "removed",
    "shred": "shredded",
}


class ThemeColors(BaseModel):
    """Palette used by the CLI. Every value is a #RGB or #RRGGBB code."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # One per operation
    trashed: str = "#f5b332"
    restored: str = "#c1ff62"
    removed: str = "#f53263"
    shredded: str = "#d44ebc"

    # Fuzzy match score bands
    match_high: str = "#03b971"
    match_medium: str = "#faf870"
    match_low: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: Any) -> str:
        if not isinstance(value, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)

        color = value.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        if len(color) not in (4, 7):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if not _HEX_DIGITS.fullmatch(color[1:]):
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


def get_bundled_theme_path() -> Path:
    """Return the path of the theme.toml shipped with the package."""
    return Path(str(resources.files("recyclectl.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Non-string values are dropped.

    Returns:
        The colors, or None if the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user's overrides onto the bundled palette.

    An invalid merged palette falls back to the built-in defaults.
    """
    colors = _load_toml_colors(get_bundled_theme_path()) or {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors.update(overrides)

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme, using default colors: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme: one style per color plus a few composites."""
    colors = colors or load_theme()

    styles: dict[str, str] = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["shredded"] = f"bold {colors.shredded}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["entry.name"] = f"bold {colors.text}"
    styles["entry.path"] = colors.muted

    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Return the Rich theme, loaded on first use."""
    return get_rich_theme()


def operation_style(action: str) -> str:
    """Return the style name for an operation, or "text" for unknown ones."""
    return OPERATION_STYLES.get(action, "text")
