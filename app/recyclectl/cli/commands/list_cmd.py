"""List command implementation.

Shows the contents of the trash, optionally filtered by a fuzzy search.
"""

from typing import Annotated

import typer

from recyclectl.cli.display import (
    create_entries_table,
    create_matches_table,
    print_entries_json,
    print_matches_json,
)
from recyclectl.cli.types import OutputFormat, require_provider
from recyclectl.core.errors import ProviderUnavailableError
from recyclectl.trash.index import TrashIndex
from recyclectl.trash.resolver import ItemResolver
from recyclectl.utils.formatting import console, print_error, print_info

app = typer.Typer()


@app.command("list")
def list_entries(
    search: Annotated[
        str | None,
        typer.Argument(help="Only show items whose name resembles this.", show_default=False),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List items in the trash, most recently deleted first.

    Examples:
        recyclectl list
        recyclectl list report              # Fuzzy search by name
        recyclectl list --format json
    """
    try:
        entries = TrashIndex(require_provider()).snapshot()
    except ProviderUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if search is not None:
        matches = ItemResolver().search(search, entries)
        if output_format == OutputFormat.JSON:
            print_matches_json(matches)
        elif not matches:
            print_info(f"No items in the trash match '{search}'.")
        else:
            console.print(create_matches_table(matches, title=f"Trash items matching '{search}'"))
        return

    ordered = sorted(entries, key=lambda e: (-e.deleted_at.timestamp(), e.identifier))
    if output_format == OutputFormat.JSON:
        print_entries_json(ordered)
    elif not ordered:
        print_info("The trash is empty.")
    else:
        console.print(create_entries_table(ordered))
        console.print(f"\n[muted]{len(ordered)} item(s)[/muted]")
