"""Restore command implementation.

Moves trashed items back to where they were deleted from, addressed by
(fuzzy) name.
"""

from typing import Annotated

import typer

from recyclectl.cli.prompts import get_chooser
from recyclectl.cli.types import is_quiet, require_provider
from recyclectl.core.errors import AmbiguousMatchError, ProviderUnavailableError, RecycleError
from recyclectl.trash.recycle import RecycleOperations
from recyclectl.utils.formatting import console, print_error, print_info

app = typer.Typer()


@app.command("restore")
def restore_entries(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="Names (or parts of names) of trashed items.", show_default=False),
    ],
) -> None:
    """Restore items from the trash to their original location.

    Names are matched fuzzily against the trash. When a name matches
    several items you are asked to pick one; without a terminal the
    command fails and lists the candidates instead.

    Examples:
        recyclectl restore report.txt
        recyclectl restore reprot           # Typos are tolerated
    """
    operations = RecycleOperations(require_provider())
    chooser = get_chooser()
    quiet = is_quiet(ctx)
    failed = False

    for name in names:
        try:
            entry = operations.restore(name, choose=chooser)
        except ProviderUnavailableError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
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
            console.print(
                f"[restored]Restored[/] {entry.display_name} to {entry.original_path}"
            )

    if failed:
        raise typer.Exit(code=1)
