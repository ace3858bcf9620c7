"""Locations of recyclectl's files and of the user's home trash.

Both follow the XDG Base Directory Specification:

- config.toml and theme.toml live in $XDG_CONFIG_HOME/recyclectl/
  (~/.config/recyclectl/);
- the home trash is $XDG_DATA_HOME/Trash (~/.local/share/Trash). It is
  shared with file managers, so no application directory is added.
"""

import os
from pathlib import Path

APP_NAME = "recyclectl"


def _xdg_home(env_var: str, fallback: str) -> Path:
    """Return an XDG base directory; unset or empty variables use the fallback."""
    value = os.environ.get(env_var)
    return Path(value) if value else Path.home() / fallback


def get_config_dir() -> Path:
    """Directory holding recyclectl's configuration files."""
    return _xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_config_path() -> Path:
    """Default location of config.toml."""
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Location of the optional theme.toml with color overrides."""
    return get_config_dir() / "theme.toml"


def get_home_trash_dir() -> Path:
    """The freedesktop.org home trash directory."""
    return _xdg_home("XDG_DATA_HOME", ".local/share") / "Trash"
