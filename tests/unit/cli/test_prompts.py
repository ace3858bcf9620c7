"""Unit tests for interactive prompts."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from recyclectl.cli.prompts import choose_entry, confirm_match, get_chooser
from recyclectl.trash.models import TrashEntry


@pytest.fixture
def candidates(make_entry: Callable[..., TrashEntry]) -> list[TrashEntry]:
    return [
        make_entry("1", "/d/report.txt"),
        make_entry("2", "/d/report_final.txt"),
    ]


class TestChooseEntry:
    """Tests for choose_entry function."""

    def test_pick_by_number(self, candidates: list[TrashEntry]) -> None:
        """The number selects the candidate, counting from 1."""
        with patch("recyclectl.cli.prompts.typer.prompt", return_value=2):
            assert choose_entry("report", candidates) is candidates[1]

    def test_zero_cancels(self, candidates: list[TrashEntry]) -> None:
        """0 cancels the selection."""
        with patch("recyclectl.cli.prompts.typer.prompt", return_value=0):
            assert choose_entry("report", candidates) is None

    def test_retries_until_valid(self, candidates: list[TrashEntry]) -> None:
        """Out-of-range numbers ask again."""
        with patch("recyclectl.cli.prompts.typer.prompt", side_effect=[5, -1, 1]) as prompt:
            assert choose_entry("report", candidates) is candidates[0]

        assert prompt.call_count == 3

    def test_abort_cancels(self, candidates: list[TrashEntry]) -> None:
        """Ctrl+C or end of input cancels."""
        with patch("recyclectl.cli.prompts.typer.prompt", side_effect=typer.Abort()):
            assert choose_entry("report", candidates) is None


class TestGetChooser:
    """Tests for get_chooser function."""

    def test_terminal(self) -> None:
        """On a terminal the interactive chooser is used."""
        with patch("recyclectl.cli.prompts.sys.stdin") as stdin:
            stdin.isatty.return_value = True
            assert get_chooser() is choose_entry

    def test_no_terminal(self) -> None:
        """Without a terminal there is no chooser."""
        with patch("recyclectl.cli.prompts.sys.stdin") as stdin:
            stdin.isatty.return_value = False
            assert get_chooser() is None


class TestConfirmMatch:
    """Tests for confirm_match function."""

    def test_question_names_operation_and_path(self) -> None:
        """The prompt shows the capitalized operation and the path."""
        with patch("recyclectl.cli.prompts.typer.confirm", return_value=True) as confirm:
            assert confirm_match(Path("/d/notes.txt"), "shred") is True

        assert confirm.call_args.args[0] == "Shred /d/notes.txt?"
        assert confirm.call_args.kwargs["default"] is False

    def test_abort_is_no(self) -> None:
        """Ctrl+C at the prompt counts as no."""
        with patch("recyclectl.cli.prompts.typer.confirm", side_effect=typer.Abort()):
            assert confirm_match(Path("/d/notes.txt"), "delete") is False
