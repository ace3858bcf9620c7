"""Filesystem domain models for traversal and batch operations.

This module defines the data structures for paths resolved from user
arguments, issues recorded while walking them, and the per-path results
of delete, shred and trash batches.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from recyclectl.core.errors import RecycleError


class PathKind(str, Enum):
    """Kind of a filesystem target.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory (always expanded, never acted on directly).
        SYMLINK: Symbolic link (not followed at the top level).
        MISSING: Path that does not exist.
        SPECIAL: Device node, FIFO or socket (never acted on).
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    MISSING = "missing"
    SPECIAL = "special"


@dataclass(frozen=True, slots=True)
class TargetPath:
    """A filesystem path supplied by the user or found during traversal.

    Attributes:
        path: Absolute path (symlinks in parent directories not resolved).
        kind: Kind of the entry at the time it was inspected.
        canonical: Fully resolved path used for deduplication.
    """

    path: Path
    kind: PathKind
    canonical: Path

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.path.is_absolute():
            msg = f"Target path must be absolute, got {self.path}"
            raise ValueError(msg)

    @property
    def is_file(self) -> bool:
        """Check if this target is a regular file."""
        return self.kind == PathKind.FILE

    @classmethod
    def inspect(cls, raw: str | Path) -> TargetPath:
        """Build a target by inspecting a path without following a final symlink.

        Args:
            raw: Path as typed by the user (may be relative or use ~).

        Returns:
            TargetPath with kind MISSING if nothing exists at the path.

        Raises:
            OSError: If the path exists but cannot be inspected.
        """
        path = Path(os.path.abspath(Path(raw).expanduser()))
        try:
            st = path.lstat()
        except (FileNotFoundError, NotADirectoryError):
            return cls(path=path, kind=PathKind.MISSING, canonical=path)

        if stat.S_ISLNK(st.st_mode):
            kind = PathKind.SYMLINK
        elif stat.S_ISDIR(st.st_mode):
            kind = PathKind.DIRECTORY
        elif stat.S_ISREG(st.st_mode):
            kind = PathKind.FILE
        else:
            kind = PathKind.SPECIAL

        return cls(path=path, kind=kind, canonical=Path(os.path.realpath(path)))


@dataclass(frozen=True, slots=True)
class WalkIssue:
    """Something the walker could not process.

    Attributes:
        path: Path the issue refers to.
        message: Human-readable description.
        error: The error for failures; None for informational skips
            (such as a symbolic link that was not followed).
    """

    path: str
    message: str
    error: RecycleError | None = None

    @property
    def is_error(self) -> bool:
        """Check if this issue should fail the command."""
        return self.error is not None


@dataclass(frozen=True, slots=True)
class FilesystemActionResult:
    """Result of a single filesystem operation in a batch.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (nothing modified).
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False
