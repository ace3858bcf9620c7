"""CLI package for recyclectl.

This package contains the Typer application and all commands.
"""

from recyclectl.cli.main import app

__all__ = ["app"]
