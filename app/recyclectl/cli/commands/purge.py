"""Purge command implementation.

Permanently removes items from the trash, by (fuzzy) name or all at once.
"""

from typing import Annotated

import typer

from recyclectl.cli.prompts import get_chooser
from recyclectl.cli.types import is_quiet, require_provider
from recyclectl.core.errors import AmbiguousMatchError, ProviderUnavailableError, RecycleError
from recyclectl.trash.recycle import PURGE_ALL, RecycleOperations
from recyclectl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer()


def _purge_all(operations: RecycleOperations, yes: bool, quiet: bool) -> bool:
    """Purge the whole trash after confirmation.

    Returns:
        True if any entry failed to purge.
    """
    count = len(operations.entries)
    if count == 0:
        print_info("The trash is already empty.")
        return False

    if not yes:
        confirmed = typer.confirm(
            f"Permanently delete all {count} item(s) in the trash?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    removed = operations.purge(PURGE_ALL)
    for error in operations.failures:
        print_error(str(error))

    if not quiet:
        if operations.failures:
            console.print(
                f"\n[success]{removed} purged[/success], "
                f"[error]{len(operations.failures)} failed[/error]"
            )
        else:
            print_success(f"Purged {removed} item(s) from the trash.")

    return bool(operations.failures)


@app.command("purge")
def purge_entries(
    ctx: typer.Context,
    names: Annotated[
        list[str] | None,
        typer.Argument(
            help=f"Names of trashed items, or '{PURGE_ALL}' for everything.",
            show_default=False,
        ),
    ] = None,
    purge_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Purge every item in the trash.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Do not ask for confirmation before purging everything.",
        ),
    ] = False,
) -> None:
    """Permanently delete items from the trash.

    Purged items cannot be restored. Their content is not overwritten;
    use shred for that before trashing.

    Examples:
        recyclectl purge old-report         # Purge one item
        recyclectl purge --all              # Empty the trash (asks first)
        recyclectl purge all --yes          # Empty the trash without asking
    """
    fragments = list(names or [])
    if not fragments and not purge_all:
        print_error(f"Give the names of items to purge, or use --all / '{PURGE_ALL}'.")
        raise typer.Exit(code=1)

    operations = RecycleOperations(require_provider())
    quiet = is_quiet(ctx)
    failed = False

    try:
        if purge_all or PURGE_ALL in fragments:
            failed = _purge_all(operations, yes, quiet)
            fragments = []

        chooser = get_chooser()
        for name in fragments:
            try:
                operations.purge(name, choose=chooser)
            except ProviderUnavailableError:
                raise
            except AmbiguousMatchError as e:
                print_error(str(e))
                print_info("Use a more specific name, or run interactively to choose.")
                failed = True
                continue
            except RecycleError as e:
                print_error(str(e))
                failed = True
                continue

            if not quiet:
                console.print(f"[removed]Purged[/] the item matching '{name}'.")
    except ProviderUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if failed:
        raise typer.Exit(code=1)
