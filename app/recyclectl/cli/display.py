"""Shared Rich display functions for trash entries and batch results.

Provides reusable table builders and summary printers used across the
CLI commands (list, restore, purge, delete, shred, trash, search).
"""

import json
from collections.abc import Sequence

from rich.table import Table

from recyclectl.core.theme import operation_style
from recyclectl.filesystem.models import FilesystemActionResult, WalkIssue
from recyclectl.trash.models import ScoredEntry, TrashEntry
from recyclectl.utils.formatting import (
    console,
    format_score,
    format_timestamp,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def create_entries_table(entries: Sequence[TrashEntry], title: str = "Trash Contents") -> Table:
    """Create a Rich table listing trash entries.

    Args:
        entries: Entries to display, in display order.
        title: Table title.

    Returns:
        Rich Table with Deleted, Name and Original Location columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Deleted", no_wrap=True)
    table.add_column("Name", style="entry.name", no_wrap=True)
    table.add_column("Original Location", style="entry.path")

    for entry in entries:
        table.add_row(
            f"[muted]{format_timestamp(entry.deleted_at)}[/muted]",
            entry.display_name,
            str(entry.original_path.parent),
        )

    return table


def create_matches_table(matches: Sequence[ScoredEntry], title: str) -> Table:
    """Create a Rich table of fuzzy search results with their scores.

    Args:
        matches: Scored entries, best first.
        title: Table title.

    Returns:
        Rich Table with a Match column in front of the entry columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Match", justify="right", width=6)
    table.add_column("Deleted", no_wrap=True)
    table.add_column("Name", style="entry.name", no_wrap=True)
    table.add_column("Original Location", style="entry.path")

    for scored in matches:
        table.add_row(
            format_score(scored.score),
            f"[muted]{format_timestamp(scored.entry.deleted_at)}[/muted]",
            scored.entry.display_name,
            str(scored.entry.original_path.parent),
        )

    return table


def create_candidates_table(fragment: str, candidates: Sequence[TrashEntry]) -> Table:
    """Create a numbered table of candidates for interactive selection.

    Numbering starts at 1; 0 is reserved for cancelling.

    Args:
        fragment: The ambiguous name fragment.
        candidates: Ranked candidates.

    Returns:
        Rich Table with a selection number per candidate.
    """
    table = Table(
        title=f"Several items match '{fragment}'",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", width=3)
    table.add_column("Name", style="entry.name", no_wrap=True)
    table.add_column("Original Location", style="entry.path")
    table.add_column("Deleted", no_wrap=True)

    for number, entry in enumerate(candidates, start=1):
        table.add_row(
            str(number),
            entry.display_name,
            str(entry.original_path.parent),
            f"[muted]{format_timestamp(entry.deleted_at)}[/muted]",
        )

    return table


def create_results_table(results: Sequence[FilesystemActionResult], action: str) -> Table:
    """Create a Rich table displaying batch results.

    Args:
        results: Results of one delete, shred or trash batch.
        action: Verb shown in the title ("delete", "shred", "trash").

    Returns:
        Rich Table with Status, Path and Message columns.
    """
    table = Table(
        title=f"Results ({action})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", style=operation_style(action))
    table.add_column("Message")

    for result in results:
        if result.dry_run:
            status = "[info]DRY-RUN[/info]"
            message = f"would {action}"
        elif result.success:
            status = "[success]OK[/success]"
            message = ""
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"

        table.add_row(status, result.path, f"[muted]{message}[/muted]")

    return table


def print_walk_issues(issues: Sequence[WalkIssue]) -> None:
    """Report problems the path walker recorded.

    Errors are printed as errors; informational skips as warnings.

    Args:
        issues: Issues in encounter order.
    """
    for issue in issues:
        if issue.is_error:
            print_error(issue.message)
        else:
            print_warning(issue.message)


def print_results_summary(results: Sequence[FilesystemActionResult], past_tense: str) -> None:
    """Print a summary of batch results.

    Shows a success message when every item succeeded, or counts of
    succeeded and failed items otherwise.

    Args:
        results: Results of one batch.
        past_tense: Verb for the message ("deleted", "shredded", "trashed").
    """
    success_count = sum(1 for r in results if r.success)
    fail_count = len(results) - success_count

    if any(r.dry_run for r in results):
        console.print(f"\n[info]Dry run: {success_count} item(s) would be {past_tense}.[/info]")
    elif fail_count == 0:
        print_success(f"{success_count} item(s) {past_tense}.")
    else:
        console.print(
            f"\n[success]{success_count} {past_tense}[/success], [error]{fail_count} failed[/error]"
        )


def entry_to_dict(entry: TrashEntry, score: float | None = None) -> dict[str, object]:
    """Convert a trash entry to a JSON-serializable dictionary."""
    data: dict[str, object] = {
        "id": entry.identifier,
        "name": entry.display_name,
        "original_path": str(entry.original_path),
        "deleted_at": entry.deleted_at.isoformat(),
    }
    if score is not None:
        data["score"] = round(score, 3)
    return data


def print_entries_json(entries: Sequence[TrashEntry]) -> None:
    """Print trash entries as a JSON array."""
    console.print_json(json.dumps([entry_to_dict(e) for e in entries]))


def print_matches_json(matches: Sequence[ScoredEntry]) -> None:
    """Print scored search results as a JSON array."""
    console.print_json(json.dumps([entry_to_dict(s.entry, s.score) for s in matches]))


def report_batch(
    results: Sequence[FilesystemActionResult],
    issues: Sequence[WalkIssue],
    action: str,
    past_tense: str,
    verbose: bool = False,
    quiet: bool = False,
) -> bool:
    """Report a finished batch: walk issues, failures and a summary.

    Args:
        results: Results of the batch.
        issues: Issues recorded by the path walker.
        action: Verb for the results table title.
        past_tense: Verb for the summary line.
        verbose: Also show the per-item results table.
        quiet: Suppress the summary line.

    Returns:
        True if any item failed or any path could not be resolved.
    """
    print_walk_issues(issues)
    for result in results:
        if not result.success:
            print_error(result.error or f"Failed to {action} {result.path}")

    if verbose and results:
        console.print(create_results_table(results, action))

    if not quiet:
        if results:
            print_results_summary(results, past_tense)
        elif not issues:
            print_info(f"Nothing to {action}.")

    return any(not r.success for r in results) or any(i.is_error for i in issues)
