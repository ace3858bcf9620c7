"""Filesystem batch operator.

Runs delete, shred and move-to-trash over a stream of targets with
dry-run support. Failures are isolated per path: one file that cannot be
processed never stops the rest of the batch.
"""

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from recyclectl.core.errors import RecycleError, map_os_error
from recyclectl.filesystem.models import FilesystemActionResult, TargetPath
from recyclectl.filesystem.shredder import PassCallback, ShredConfig, ShredEngine
from recyclectl.trash.base import TrashProvider

logger = logging.getLogger(__name__)

ResultCallback = Callable[[FilesystemActionResult], None]


class FilesystemOperator:
    """Applies destructive operations to resolved targets.

    Attributes:
        _dry_run: If True, report what would happen without touching anything.
    """

    def __init__(
        self,
        dry_run: bool = False,
        on_result: ResultCallback | None = None,
    ) -> None:
        """Initialize the FilesystemOperator.

        Args:
            dry_run: If True, report what would be done without doing it.
            on_result: Called with each result as soon as it is known.
        """
        self._dry_run = dry_run
        self._on_result = on_result

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    def delete(self, targets: Iterable[TargetPath]) -> list[FilesystemActionResult]:
        """Permanently delete regular files (no trash, no overwrite).

        Args:
            targets: Regular-file targets, usually from PathWalker.walk().

        Returns:
            List of FilesystemActionResult, one per target.
        """
        return self._run(targets, self._delete_single, verb="delete")

    def shred(
        self,
        targets: Iterable[TargetPath],
        engine: ShredEngine,
        config: ShredConfig | None = None,
        on_pass: PassCallback | None = None,
    ) -> list[FilesystemActionResult]:
        """Overwrite and delete regular files.

        Args:
            targets: Regular-file targets, usually from PathWalker.walk().
            engine: Engine performing the overwrite passes.
            config: Shred parameters for every file of this batch.
            on_pass: Forwarded to ShredEngine.shred().

        Returns:
            List of FilesystemActionResult, one per target.
        """

        def shred_single(target: TargetPath) -> None:
            engine.shred(target, config, on_pass)

        return self._run(targets, shred_single, verb="shred")

    def trash(
        self,
        targets: Iterable[TargetPath],
        provider: TrashProvider,
    ) -> list[FilesystemActionResult]:
        """Move targets (files, directories or links) into the trash.

        Args:
            targets: Targets from PathWalker.top_level().
            provider: Trash provider receiving the paths.

        Returns:
            List of FilesystemActionResult, one per target.
        """

        def trash_single(target: TargetPath) -> None:
            provider.trash_path(target.path)

        return self._run(targets, trash_single, verb="trash")

    def prune_empty_directories(
        self,
        directories: Sequence[Path],
        links: Sequence[Path] = (),
    ) -> list[Path]:
        """Remove directories left empty by a batch, deepest first.

        Followed links whose target the batch removed are unlinked first, so
        they do not keep their directory alive. Only empty directories are
        removed (rmdir); a directory that still has content (declined,
        failed or foreign files) is kept.

        Args:
            directories: Directories expanded by the walker, parents first.
            links: Links the walker followed to their target file.

        Returns:
            Directories that were removed.
        """
        if self._dry_run:
            return []

        for link in links:
            if os.path.islink(link) and not os.path.exists(link):
                try:
                    os.unlink(link)
                except OSError as e:
                    logger.debug("Keeping dangling link %s: %s", link, e.strerror or e)
                    continue
                logger.debug("Removed dangling link %s", link)

        removed: list[Path] = []
        for directory in sorted(set(directories), key=lambda d: len(d.parts), reverse=True):
            try:
                os.rmdir(directory)
            except OSError as e:
                logger.debug("Keeping directory %s: %s", directory, e.strerror or e)
                continue
            removed.append(directory)

        return removed

    def _run(
        self,
        targets: Iterable[TargetPath],
        action: Callable[[TargetPath], None],
        verb: str,
    ) -> list[FilesystemActionResult]:
        """Apply an action to every target, isolating failures per target."""
        results: list[FilesystemActionResult] = []

        for target in targets:
            path = str(target.path)
            if self._dry_run:
                logger.info("Dry-run: would %s %s", verb, path)
                result = FilesystemActionResult(path=path, success=True, dry_run=True)
            else:
                try:
                    action(target)
                    result = FilesystemActionResult(path=path, success=True)
                except RecycleError as e:
                    logger.debug("Failed to %s %s: %s", verb, path, e)
                    result = FilesystemActionResult(path=path, success=False, error=str(e))

            results.append(result)
            if self._on_result is not None:
                self._on_result(result)

        return results

    def _delete_single(self, target: TargetPath) -> None:
        """Unlink one regular file.

        Raises:
            ValueError: If the target is not a regular file.
            RecycleError: If the file could not be removed.
        """
        if not target.is_file:
            msg = f"Only regular files can be deleted, got {target.kind.value}: {target.path}"
            raise ValueError(msg)

        try:
            os.unlink(target.path)
        except OSError as e:
            raise map_os_error(e, target.path) from e
