"""CLI commands for recyclectl.

This package contains all command implementations.
"""

from recyclectl.cli.commands import (
    config,
    delete,
    list_cmd,
    purge,
    restore,
    search,
    shred,
    trash,
)

__all__ = ["config", "delete", "list_cmd", "purge", "restore", "search", "shred", "trash"]
