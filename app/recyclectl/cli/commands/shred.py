"""Shred command implementation.

Overwrites file content with pseudorandom data over several passes and
then deletes the file.
"""

from pathlib import Path
from typing import Annotated

import typer

from recyclectl.cli.display import report_batch
from recyclectl.cli.types import build_walker, get_settings, is_quiet, is_verbose
from recyclectl.filesystem.models import TargetPath
from recyclectl.filesystem.operator import FilesystemOperator
from recyclectl.filesystem.shredder import ShredConfig, ShredEngine
from recyclectl.utils.formatting import console, print_info

app = typer.Typer()


@app.command("shred")
def shred_paths(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to shred.", show_default=False),
    ],
    passes: Annotated[
        int | None,
        typer.Option(
            "--passes",
            "-n",
            min=1,
            help="Number of overwrite passes (default from config, 3).",
        ),
    ] = None,
    block_size: Annotated[
        int | None,
        typer.Option(
            "--block-size",
            min=1,
            help="Bytes written per write call (default from config, 1 MiB).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show what would be shredded without touching anything.",
        ),
    ] = False,
) -> None:
    """Overwrite files with random data, then delete them.

    This defeats standard undelete tools. It is no guarantee against
    recovery on SSDs, copy-on-write or journaling filesystems, or from
    backups and snapshots.

    Examples:
        recyclectl shred secrets.txt
        recyclectl shred -n 7 keys/ --recurse
    """
    settings = get_settings(ctx).shred
    config = ShredConfig(
        passes=passes if passes is not None else settings.passes,
        block_size=block_size if block_size is not None else settings.block_size,
    )
    verbose = is_verbose(ctx)

    def show_pass(target: TargetPath, pass_number: int) -> None:
        console.print(f"[muted]{target.path}: pass {pass_number}/{config.passes}[/muted]")

    walker = build_walker(ctx)
    operator = FilesystemOperator(dry_run=dry_run)

    results = operator.shred(
        walker.walk(paths),
        ShredEngine(config),
        config,
        on_pass=show_pass if verbose else None,
    )
    pruned = operator.prune_empty_directories(walker.expanded_directories, walker.followed_links)
    if pruned and verbose:
        print_info(f"Removed {len(pruned)} empty director{'y' if len(pruned) == 1 else 'ies'}.")

    failed = report_batch(
        results,
        walker.issues,
        action="shred",
        past_tense="shredded",
        verbose=verbose,
        quiet=is_quiet(ctx),
    )
    if failed:
        raise typer.Exit(code=1)
