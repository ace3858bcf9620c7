"""Unit tests for PathWalker.

Tests directory expansion under the confirmation policy, deduplication,
symlink handling and per-path error collection.
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from recyclectl.core.errors import NotFoundError, PermissionDeniedError
from recyclectl.filesystem.confirm import ConfirmationPolicy
from recyclectl.filesystem.models import PathKind
from recyclectl.filesystem.walker import PathWalker


def _walker(answer: bool = True) -> PathWalker:
    return PathWalker(ConfirmationPolicy(prompter=lambda _: answer))


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """A small tree: root/{a.txt, b.txt, sub/{c.txt, deeper/d.txt}}."""
    root = tmp_path / "root"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "b.txt").write_text("b")
    (root / "sub" / "c.txt").write_text("c")
    (root / "sub" / "deeper" / "d.txt").write_text("d")
    return root


class TestWalk:
    """Tests for PathWalker.walk."""

    def test_single_file(self, tmp_path: Path) -> None:
        """A file argument is yielded as is."""
        f = tmp_path / "f.txt"
        f.write_text("x")

        targets = list(_walker().walk([f]))

        assert [t.path for t in targets] == [f]
        assert targets[0].kind == PathKind.FILE

    def test_accepted_directory_sorted_order(self, tree: Path) -> None:
        """An accepted directory yields every file, sorted, files before subdirectories."""
        walker = _walker(True)

        names = [t.path.relative_to(tree).as_posix() for t in walker.walk([tree])]

        assert names == ["a.txt", "b.txt", "sub/c.txt", "sub/deeper/d.txt"]
        assert walker.issues == []
        assert walker.expanded_directories == [tree, tree / "sub", tree / "sub" / "deeper"]

    def test_declined_directory_yields_nothing(self, tree: Path) -> None:
        """Declining the prompt skips the directory without an error."""
        walker = _walker(False)

        assert list(walker.walk([tree])) == []
        assert walker.issues == []
        assert not walker.has_errors
        assert walker.skipped_directories == [tree]
        assert walker.expanded_directories == []

    def test_prompt_once_per_top_level_directory(self, tree: Path) -> None:
        """Nested directories inherit the top-level decision."""
        prompter = MagicMock(return_value=True)
        walker = PathWalker(ConfirmationPolicy(prompter=prompter))

        list(walker.walk([tree]))

        prompter.assert_called_once_with(tree)

    def test_missing_path_recorded_and_walk_continues(self, tmp_path: Path) -> None:
        """A missing path is a NotFound issue; later paths are still walked."""
        f = tmp_path / "real.txt"
        f.write_text("x")
        walker = _walker()

        targets = list(walker.walk([tmp_path / "ghost.txt", f]))

        assert [t.path for t in targets] == [f]
        assert walker.has_errors
        assert isinstance(walker.issues[0].error, NotFoundError)

    def test_duplicates_yielded_once(self, tree: Path) -> None:
        """A file reachable twice is yielded once, at its first occurrence."""
        walker = _walker()

        targets = list(walker.walk([tree / "a.txt", tree, tree / "sub" / "c.txt"]))

        paths = [t.path for t in targets]
        assert paths.count(tree / "a.txt") == 1
        assert paths.count(tree / "sub" / "c.txt") == 1
        assert paths[0] == tree / "a.txt"

    def test_top_level_symlink_not_followed(self, tmp_path: Path) -> None:
        """A symlink argument produces a notice, not a target and not an error."""
        real = tmp_path / "real.txt"
        real.write_text("x")
        link = tmp_path / "link"
        link.symlink_to(real)
        walker = _walker()

        assert list(walker.walk([link])) == []
        assert len(walker.issues) == 1
        assert not walker.has_errors
        assert "symbolic link" in walker.issues[0].message

    def test_symlink_to_file_inside_root_followed_once(self, tree: Path) -> None:
        """A link to a file inside the root resolves to that file, deduplicated."""
        (tree / "z-link").symlink_to(tree / "a.txt")
        walker = _walker()

        paths = [t.path for t in walker.walk([tree])]

        assert paths.count(tree / "a.txt") == 1
        assert tree / "z-link" not in paths
        assert walker.followed_links == [tree / "z-link"]

    def test_symlink_leaving_root_skipped(self, tree: Path, tmp_path: Path) -> None:
        """Links pointing outside the traversal root are skipped."""
        outside = tmp_path / "outside.txt"
        outside.write_text("keep me")
        (tree / "escape").symlink_to(outside)

        walker = _walker()

        paths = [t.path for t in walker.walk([tree])]

        assert outside not in paths
        assert tree / "escape" not in paths
        assert walker.followed_links == []

    def test_symlink_to_directory_skipped(self, tree: Path) -> None:
        """Links to directories are never traversed (no cycles)."""
        (tree / "sub" / "loop").symlink_to(tree)

        names = [t.path.relative_to(tree).as_posix() for t in _walker().walk([tree])]

        assert names == ["a.txt", "b.txt", "sub/c.txt", "sub/deeper/d.txt"]

    def test_special_files_skipped(self, tree: Path) -> None:
        """FIFOs inside a tree are not yielded."""
        os.mkfifo(tree / "pipe")

        paths = [t.path for t in _walker().walk([tree])]

        assert tree / "pipe" not in paths

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
    def test_unreadable_subdirectory_is_an_issue(self, tree: Path) -> None:
        """An unreadable directory is reported and the rest is still walked."""
        locked = tree / "sub" / "deeper"
        locked.chmod(0)
        try:
            walker = _walker()
            names = [t.path.relative_to(tree).as_posix() for t in walker.walk([tree])]
        finally:
            locked.chmod(0o755)

        assert names == ["a.txt", "b.txt", "sub/c.txt"]
        assert isinstance(walker.issues[0].error, PermissionDeniedError)


class TestTopLevel:
    """Tests for PathWalker.top_level."""

    def test_directory_yielded_whole(self, tree: Path) -> None:
        """An accepted directory is yielded as one DIRECTORY target."""
        targets = list(_walker(True).top_level([tree]))

        assert len(targets) == 1
        assert targets[0].kind == PathKind.DIRECTORY
        assert targets[0].path == tree

    def test_declined_directory(self, tree: Path) -> None:
        """A declined directory is skipped without an error."""
        walker = _walker(False)

        assert list(walker.top_level([tree])) == []
        assert walker.skipped_directories == [tree]
        assert not walker.has_errors

    def test_symlink_yielded_as_link(self, tmp_path: Path) -> None:
        """Symlinks are yielded themselves so the link (not its target) is trashed."""
        real = tmp_path / "real.txt"
        real.write_text("x")
        link = tmp_path / "link"
        link.symlink_to(real)

        targets = list(_walker().top_level([real, link]))

        assert [(t.path, t.kind) for t in targets] == [
            (real, PathKind.FILE),
            (link, PathKind.SYMLINK),
        ]

    def test_missing_path(self, tmp_path: Path) -> None:
        """Missing paths are recorded as errors."""
        walker = _walker()

        assert list(walker.top_level([tmp_path / "ghost"])) == []
        assert walker.has_errors
