"""Search command implementation.

Walks a directory tree looking for files and directories whose name
resembles a given name, and offers to trash, delete or shred each match.
"""

import logging
import os
from pathlib import Path
from typing import Annotated

import typer

from recyclectl.cli.display import report_batch
from recyclectl.cli.prompts import confirm_match
from recyclectl.cli.types import (
    SearchOperation,
    get_settings,
    is_quiet,
    is_verbose,
    require_provider,
)
from recyclectl.core.errors import RecycleError, map_os_error
from recyclectl.filesystem.confirm import ConfirmationPolicy
from recyclectl.filesystem.models import FilesystemActionResult
from recyclectl.filesystem.operator import FilesystemOperator
from recyclectl.filesystem.shredder import ShredConfig, ShredEngine
from recyclectl.filesystem.walker import PathWalker
from recyclectl.trash import TrashProvider
from recyclectl.trash.resolver import score_name
from recyclectl.utils.formatting import print_error, print_info

logger = logging.getLogger(__name__)

# Minimum name score for a path to be offered; stricter than trash lookups
SEARCH_THRESHOLD = 0.8

_PAST_TENSE = {
    SearchOperation.TRASH: "moved to the trash",
    SearchOperation.DELETE: "deleted",
    SearchOperation.SHRED: "shredded",
}

app = typer.Typer()


class _MatchHandler:
    """Applies one operation to confirmed matches."""

    def __init__(
        self,
        operation: SearchOperation,
        provider: TrashProvider | None,
        config: ShredConfig,
    ) -> None:
        self._operation = operation
        self._provider = provider
        self._engine = ShredEngine(config)
        self._operator = FilesystemOperator()
        # Confirmed directories are taken whole, without a second prompt
        self.walker = PathWalker(ConfirmationPolicy(always_recurse=True))
        self.results: list[FilesystemActionResult] = []

    def apply(self, path: Path) -> None:
        if self._operation == SearchOperation.TRASH:
            if self._provider is None:
                msg = "Trashing needs a trash provider"
                raise ValueError(msg)
            self.results.extend(self._operator.trash(self.walker.top_level([path]), self._provider))
            return

        if self._operation == SearchOperation.DELETE:
            self.results.extend(self._operator.delete(self.walker.walk([path])))
        else:
            self.results.extend(self._operator.shred(self.walker.walk([path]), self._engine))

        self._operator.prune_empty_directories(
            self.walker.expanded_directories, self.walker.followed_links
        )
        self.walker.expanded_directories.clear()
        self.walker.followed_links.clear()


@app.command("search")
def search_paths(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Name to look for (small typos are tolerated).", show_default=False),
    ],
    directory: Annotated[
        Path,
        typer.Option(
            "--dir",
            "-d",
            help="Directory to search in.",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = Path("."),
    operation: Annotated[
        SearchOperation,
        typer.Option(
            "--op",
            help="What to do with confirmed matches: trash, delete or shred.",
            case_sensitive=False,
        ),
    ] = SearchOperation.TRASH,
) -> None:
    """Find files by name and trash, delete or shred them one by one.

    Every match is confirmed separately. A confirmed directory is handled
    as a whole and not searched further.

    Examples:
        recyclectl search notes.txt
        recyclectl search id_rsa --dir ~/backup --op shred
    """
    provider = require_provider() if operation == SearchOperation.TRASH else None
    shred_settings = get_settings(ctx).shred
    config = ShredConfig(passes=shred_settings.passes, block_size=shred_settings.block_size)
    handler = _MatchHandler(operation, provider, config)

    walk_errors: list[RecycleError] = []

    def on_walk_error(error: OSError) -> None:
        walk_errors.append(map_os_error(error, error.filename or directory))

    matched = 0
    root = directory.expanduser().absolute()
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
        dirnames.sort()
        for entry_name in sorted(dirnames + filenames):
            if score_name(name, entry_name) < SEARCH_THRESHOLD:
                continue

            matched += 1
            path = Path(dirpath) / entry_name
            if not confirm_match(path, operation.value):
                continue

            logger.debug("Applying %s to search match %s", operation.value, path)
            handler.apply(path)
            if entry_name in dirnames:
                dirnames.remove(entry_name)

    for error in walk_errors:
        print_error(str(error))

    if matched == 0:
        print_info(f"Nothing under {root} matches '{name}'.")
        if walk_errors:
            raise typer.Exit(code=1)
        return

    failed = report_batch(
        handler.results,
        handler.walker.issues,
        action=operation.value,
        past_tense=_PAST_TENSE[operation],
        verbose=is_verbose(ctx),
        quiet=is_quiet(ctx),
    )
    if failed or walk_errors:
        raise typer.Exit(code=1)
