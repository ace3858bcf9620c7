"""Trash command implementation.

Moves files and directories into the recycle bin, where they can be
restored later.
"""

from pathlib import Path
from typing import Annotated

import typer

from recyclectl.cli.display import report_batch
from recyclectl.cli.types import build_walker, is_quiet, is_verbose, require_provider
from recyclectl.filesystem.operator import FilesystemOperator

app = typer.Typer()


@app.command("trash")
def trash_paths(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to move to the trash.", show_default=False),
    ],
) -> None:
    """Move files and directories to the trash.

    Directories are moved as a whole after confirmation (or with --recurse)
    and come back as one item on restore.

    Examples:
        recyclectl trash notes.txt          # Trash one file
        recyclectl -r trash build/ dist/    # Trash directories without asking
    """
    provider = require_provider()
    walker = build_walker(ctx)

    operator = FilesystemOperator()
    results = operator.trash(walker.top_level(paths), provider)

    failed = report_batch(
        results,
        walker.issues,
        action="trash",
        past_tense="moved to the trash",
        verbose=is_verbose(ctx),
        quiet=is_quiet(ctx),
    )
    if failed:
        raise typer.Exit(code=1)
