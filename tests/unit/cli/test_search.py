"""Unit tests for the search command.

Search walks a directory tree for names resembling the given one and
asks before acting on each match.
"""

from pathlib import Path

import pytest
from recyclectl.cli.main import app
from recyclectl.trash.memory import InMemoryTrashProvider
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def search_root(tmp_path: Path) -> Path:
    """root/{notes.txt, other.md, sub/notes.txt, cache/{a.bin, b.bin}}."""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "cache").mkdir()
    (root / "notes.txt").write_text("one")
    (root / "other.md").write_text("keep")
    (root / "sub" / "notes.txt").write_text("two")
    (root / "cache" / "a.bin").write_bytes(b"a")
    (root / "cache" / "b.bin").write_bytes(b"b")
    return root


class TestSearchCommand:
    """Tests for recyclectl search."""

    def test_delete_confirmed_matches(self, search_root: Path) -> None:
        """Each match is confirmed separately, in walk order."""
        result = runner.invoke(
            app,
            ["search", "notes.txt", "--dir", str(search_root), "--op", "delete"],
            input="y\nn\n",
        )

        assert result.exit_code == 0
        assert f"Delete {search_root / 'notes.txt'}?" in result.stdout
        assert f"Delete {search_root / 'sub' / 'notes.txt'}?" in result.stdout
        assert not (search_root / "notes.txt").exists()
        assert (search_root / "sub" / "notes.txt").exists()
        assert (search_root / "other.md").exists()
        assert "1 item(s) deleted." in result.stdout

    def test_typo_tolerated(self, search_root: Path) -> None:
        """A misspelled name still finds the file."""
        result = runner.invoke(
            app,
            ["search", "notse.txt", "--dir", str(search_root), "--op", "delete"],
            input="y\ny\n",
        )

        assert result.exit_code == 0
        assert not (search_root / "notes.txt").exists()
        assert not (search_root / "sub" / "notes.txt").exists()

    def test_confirmed_directory_taken_whole(self, search_root: Path) -> None:
        """A confirmed directory is handled as a whole and not searched further."""
        result = runner.invoke(
            app,
            ["search", "cache", "--dir", str(search_root), "--op", "delete"],
            input="y\n",
        )

        assert result.exit_code == 0
        assert "recursively" not in result.stdout
        assert "2 item(s) deleted." in result.stdout
        assert not (search_root / "cache").exists()

    def test_declined_match(self, search_root: Path) -> None:
        """Declining every match changes nothing."""
        result = runner.invoke(
            app,
            ["search", "other.md", "--dir", str(search_root), "--op", "delete"],
            input="n\n",
        )

        assert result.exit_code == 0
        assert (search_root / "other.md").exists()
        assert "Nothing to delete." in result.stdout

    def test_no_match(self, search_root: Path) -> None:
        """Names resembling nothing are reported."""
        result = runner.invoke(app, ["search", "zebra", "--dir", str(search_root)])

        assert result.exit_code == 0
        assert "matches 'zebra'" in result.stdout

    def test_trash_is_default(
        self, search_root: Path, empty_provider: InMemoryTrashProvider
    ) -> None:
        """Without --op matches go to the trash."""
        target = search_root / "other.md"
        empty_provider.occupied.add(target)

        result = runner.invoke(app, ["search", "other.md", "--dir", str(search_root)], input="y\n")

        assert result.exit_code == 0
        assert f"Trash {target}?" in result.stdout
        assert [r.original_path for r in empty_provider.list_entries()] == [target]

    def test_shred_match(self, search_root: Path) -> None:
        """--op shred overwrites and removes the match."""
        result = runner.invoke(
            app,
            ["search", "other.md", "--dir", str(search_root), "--op", "shred"],
            input="y\n",
        )

        assert result.exit_code == 0
        assert "1 item(s) shredded." in result.stdout
        assert not (search_root / "other.md").exists()

    def test_missing_directory(self, tmp_path: Path) -> None:
        """--dir must exist."""
        result = runner.invoke(app, ["search", "x", "--dir", str(tmp_path / "ghost")])

        assert result.exit_code == 2
