"""Interactive prompts for the CLI.

Picking one trash entry among several candidates and confirming single
search matches. Prompts need a terminal; without one the callers get no
chooser and ambiguity is reported as an error.
"""

import sys
from collections.abc import Sequence
from pathlib import Path

import typer

from recyclectl.cli.display import create_candidates_table
from recyclectl.trash.models import TrashEntry
from recyclectl.trash.recycle import Chooser
from recyclectl.utils.formatting import console, print_warning


def choose_entry(fragment: str, candidates: Sequence[TrashEntry]) -> TrashEntry | None:
    """Let the user pick one of several ranked candidates.

    Shows a numbered table and asks for a number until a valid one is
    entered. 0 (or end-of-input) cancels.

    Args:
        fragment: The ambiguous name fragment.
        candidates: Ranked candidates.

    Returns:
        The chosen entry, or None if the user cancelled.
    """
    console.print(create_candidates_table(fragment, candidates))

    while True:
        try:
            choice = typer.prompt(
                f"Select an item (1-{len(candidates)}, 0 to cancel)",
                type=int,
                default=0,
            )
        except (typer.Abort, EOFError):
            return None

        if choice == 0:
            return None
        if 1 <= choice <= len(candidates):
            return candidates[choice - 1]
        print_warning(f"Please enter a number between 0 and {len(candidates)}.")


def get_chooser() -> Chooser | None:
    """Return the interactive chooser, or None when stdin is not a terminal."""
    if sys.stdin.isatty():
        return choose_entry
    return None


def confirm_match(path: Path, operation: str) -> bool:
    """Ask whether to apply an operation to one search match.

    Args:
        path: Matching path.
        operation: Operation name shown to the user.

    Returns:
        True only for an affirmative answer.
    """
    try:
        return typer.confirm(f"{operation.capitalize()} {path}?", default=False)
    except (typer.Abort, EOFError):
        return False
