"""Delete command implementation.

Permanently removes files without going through the trash.
"""

from pathlib import Path
from typing import Annotated

import typer

from recyclectl.cli.display import report_batch
from recyclectl.cli.types import build_walker, is_quiet, is_verbose
from recyclectl.filesystem.operator import FilesystemOperator
from recyclectl.utils.formatting import print_info

app = typer.Typer()


@app.command("delete")
def delete_paths(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to delete permanently.", show_default=False),
    ],
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show what would be deleted without deleting anything.",
        ),
    ] = False,
) -> None:
    """Permanently delete files (no trash, no overwrite).

    Directories are expanded after confirmation (or with --recurse); every
    regular file inside is unlinked and directories left empty are removed.
    Symbolic links given on the command line are not followed.

    Examples:
        recyclectl delete old.log
        recyclectl -r delete cache/ --dry-run
    """
    walker = build_walker(ctx)
    operator = FilesystemOperator(dry_run=dry_run)

    results = operator.delete(walker.walk(paths))
    pruned = operator.prune_empty_directories(walker.expanded_directories, walker.followed_links)
    if pruned and is_verbose(ctx):
        print_info(f"Removed {len(pruned)} empty director{'y' if len(pruned) == 1 else 'ies'}.")

    failed = report_batch(
        results,
        walker.issues,
        action="delete",
        past_tense="deleted",
        verbose=is_verbose(ctx),
        quiet=is_quiet(ctx),
    )
    if failed:
        raise typer.Exit(code=1)
