"""Shared types and helpers for CLI commands.

This module provides the enums and context accessors used by several
command modules: settings and flags stored by the main callback, the
path walker built from them and the trash provider lookup.
"""

from enum import Enum

import typer

from recyclectl.core.config import Settings
from recyclectl.core.errors import ProviderUnavailableError
from recyclectl.filesystem.confirm import ConfirmationPolicy
from recyclectl.filesystem.walker import PathWalker
from recyclectl.trash import TrashProvider, get_provider
from recyclectl.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


class SearchOperation(str, Enum):
    """Operations the search command can apply to a match."""

    TRASH = "trash"
    DELETE = "delete"
    SHRED = "shred"


def _options(ctx: typer.Context) -> dict[str, object]:
    return ctx.obj if isinstance(ctx.obj, dict) else {}


def is_verbose(ctx: typer.Context) -> bool:
    """Check if --verbose was given."""
    return bool(_options(ctx).get("verbose"))


def is_quiet(ctx: typer.Context) -> bool:
    """Check if --quiet was given."""
    return bool(_options(ctx).get("quiet"))


def get_settings(ctx: typer.Context) -> Settings:
    """Return the settings loaded by the main callback.

    Falls back to defaults when a command runs without the main callback
    (for example when invoked directly in tests).
    """
    settings = _options(ctx).get("settings")
    return settings if isinstance(settings, Settings) else Settings()


def build_walker(ctx: typer.Context) -> PathWalker:
    """Create a path walker honoring --recurse and the configured default.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        A fresh PathWalker for one command invocation.
    """
    always_recurse = bool(_options(ctx).get("recurse")) or get_settings(ctx).recurse
    return PathWalker(ConfirmationPolicy(always_recurse=always_recurse))


def require_provider() -> TrashProvider:
    """Return the platform trash provider or exit with an error.

    Raises:
        typer.Exit: If no trash provider is available.
    """
    try:
        return get_provider()
    except ProviderUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
