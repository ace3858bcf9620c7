"""Path walker turning command line arguments into file targets.

Resolves user-supplied paths into a flat, deduplicated stream of regular
files, expanding directories only when the confirmation policy allows
it. Problems with individual paths are recorded and never stop the walk.
"""

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from recyclectl.core.errors import NotFoundError, RecycleError, map_os_error
from recyclectl.filesystem.confirm import ConfirmationPolicy
from recyclectl.filesystem.models import PathKind, TargetPath, WalkIssue

logger = logging.getLogger(__name__)


class PathWalker:
    """Resolves user paths into regular-file targets.

    The walker is single use per command: issues, skipped directories and
    expanded directories accumulate across calls for later reporting.

    Attributes:
        issues: Per-path problems found while walking, in encounter order.
        skipped_directories: Top-level directories whose recursion was declined.
        expanded_directories: Directories that were traversed, parents first.
        followed_links: Links inside a traversal that were followed to a file.
    """

    def __init__(self, policy: ConfirmationPolicy) -> None:
        """Initialize the walker.

        Args:
            policy: Decides whether top-level directories are expanded.
        """
        self._policy = policy
        self._seen: set[Path] = set()
        self.issues: list[WalkIssue] = []
        self.skipped_directories: list[Path] = []
        self.expanded_directories: list[Path] = []
        self.followed_links: list[Path] = []

    @property
    def has_errors(self) -> bool:
        """Check if any recorded issue is an error."""
        return any(issue.is_error for issue in self.issues)

    def walk(self, paths: Iterable[str | Path]) -> Iterator[TargetPath]:
        """Lazily yield every regular file reachable from the given paths.

        Files are yielded at most once (by canonical path), in first-seen
        order. Directories are traversed in sorted order after the policy
        accepts them.

        Args:
            paths: Paths as supplied by the user.

        Yields:
            TargetPath instances of kind FILE.
        """
        for raw in paths:
            target = self._inspect(raw)
            if target is None:
                continue

            if target.kind == PathKind.FILE:
                if self._claim(target.canonical):
                    yield target
            elif target.kind == PathKind.DIRECTORY:
                if self._accept_directory(target.path):
                    yield from self._walk_directory(target.path)

    def top_level(self, paths: Iterable[str | Path]) -> Iterator[TargetPath]:
        """Yield the user's paths themselves without expanding directories.

        Used when an operation acts on whole trees at once (moving to the
        trash). Directories still need the policy's consent; files and
        symbolic links are yielded as they are.

        Args:
            paths: Paths as supplied by the user.

        Yields:
            TargetPath instances of kind FILE, DIRECTORY or SYMLINK.
        """
        for raw in paths:
            target = self._inspect(raw, follow_notice=False)
            if target is None:
                continue

            if target.kind == PathKind.DIRECTORY and not self._accept_directory(target.path):
                continue

            # Symlinks are deduplicated by their own location, not their target
            key = target.path if target.kind == PathKind.SYMLINK else target.canonical
            if self._claim(key):
                yield target

    def _inspect(self, raw: str | Path, follow_notice: bool = True) -> TargetPath | None:
        """Inspect one user path, recording issues for unusable ones.

        Args:
            raw: Path as supplied by the user.
            follow_notice: Record a notice for symbolic links (which walk()
                does not follow) instead of returning them.

        Returns:
            The inspected target, or None if it cannot be used.
        """
        try:
            target = TargetPath.inspect(raw)
        except OSError as e:
            self._record_error(str(raw), map_os_error(e, raw))
            return None

        if target.kind == PathKind.MISSING:
            self._record_error(
                str(target.path),
                NotFoundError(f"No such file or directory: {raw}", path=target.path),
            )
            return None

        if target.kind == PathKind.SPECIAL:
            self._record_notice(str(target.path), "not a regular file; skipped")
            return None

        if target.kind == PathKind.SYMLINK and follow_notice:
            self._record_notice(str(target.path), "is a symbolic link; not followed")
            return None

        return target

    def _accept_directory(self, directory: Path) -> bool:
        """Ask the policy about a top-level directory and record a refusal."""
        if self._policy.should_recurse(directory):
            return True

        logger.info("Skipping directory %s (recursion declined)", directory)
        self.skipped_directories.append(directory)
        return False

    def _walk_directory(self, root: Path) -> Iterator[TargetPath]:
        """Traverse a directory tree depth-first in sorted order.

        Args:
            root: Accepted top-level directory.

        Yields:
            TargetPath for each regular file below root.
        """
        real_root = Path(os.path.realpath(root))
        stack: list[Path] = [root]

        while stack:
            directory = stack.pop()
            self.expanded_directories.append(directory)

            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                self._record_error(str(directory), map_os_error(e, directory))
                continue

            subdirectories: list[Path] = []
            for entry in entries:
                entry_path = Path(entry.path)
                try:
                    st = entry.stat(follow_symlinks=False)
                except FileNotFoundError as e:
                    # Already yielded through a link and removed by the consumer
                    if Path(os.path.realpath(entry_path)) not in self._seen:
                        self._record_error(entry.path, map_os_error(e, entry_path))
                    continue
                except OSError as e:
                    self._record_error(entry.path, map_os_error(e, entry_path))
                    continue

                if stat.S_ISDIR(st.st_mode):
                    subdirectories.append(entry_path)
                elif stat.S_ISREG(st.st_mode):
                    canonical = Path(os.path.realpath(entry_path))
                    if self._claim(canonical):
                        yield TargetPath(path=entry_path, kind=PathKind.FILE, canonical=canonical)
                elif stat.S_ISLNK(st.st_mode):
                    linked = self._resolve_link(entry_path, real_root)
                    if linked is None:
                        continue
                    self.followed_links.append(entry_path)
                    if self._claim(linked.canonical):
                        yield linked
                else:
                    logger.debug("Skipping special file %s", entry_path)

            # Reverse so the stack pops subdirectories in sorted order
            stack.extend(reversed(subdirectories))

    def _resolve_link(self, link: Path, real_root: Path) -> TargetPath | None:
        """Resolve a symbolic link found inside a traversal.

        Links to regular files inside the traversal root are followed to
        their target; links leaving the root, links to directories and
        dangling links are skipped.

        Args:
            link: The symbolic link.
            real_root: Canonical traversal root.

        Returns:
            A FILE target for the link's destination, or None to skip it.
        """
        canonical = Path(os.path.realpath(link))

        if not canonical.is_relative_to(real_root):
            logger.debug("Skipping symlink %s pointing outside %s", link, real_root)
            return None

        if canonical in self._seen:
            return TargetPath(path=canonical, kind=PathKind.FILE, canonical=canonical)

        try:
            st = canonical.stat()
        except OSError:
            logger.debug("Skipping dangling symlink %s", link)
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug("Skipping symlink %s to non-regular file", link)
            return None

        return TargetPath(path=canonical, kind=PathKind.FILE, canonical=canonical)

    def _claim(self, canonical: Path) -> bool:
        """Mark a canonical path as seen; return False if it already was."""
        if canonical in self._seen:
            return False
        self._seen.add(canonical)
        return True

    def _record_error(self, path: str, error: RecycleError) -> None:
        logger.debug("Walk issue: %s", error)
        self.issues.append(WalkIssue(path=path, message=str(error), error=error))

    def _record_notice(self, path: str, message: str) -> None:
        logger.info("%s %s", path, message)
        self.issues.append(WalkIssue(path=path, message=f"{path} {message}"))
