"""Error taxonomy for recyclectl operations.

Every failure a command can report derives from RecycleError. Per-item
errors (a missing path, a denied unlink, an interrupted shred) are
collected and reported after a batch completes; ProviderUnavailableError
is fatal for any command that needs the trash.
"""

from __future__ import annotations

import errno
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recyclectl.trash.models import TrashEntry


class RecycleError(Exception):
    """Base exception for all recyclectl errors.

    Attributes:
        path: Filesystem path or trash name the error refers to, if any.
    """

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class NotFoundError(RecycleError):
    """Raised when a path or trash entry does not exist."""


class PermissionDeniedError(RecycleError):
    """Raised when the OS or the trash provider rejects an operation."""


class ProviderUnavailableError(RecycleError):
    """Raised when no usable trash provider exists for this platform or session."""


class AmbiguousMatchError(RecycleError):
    """Raised when a name fragment matches several trash entries.

    This is a state that needs disambiguation rather than a hard failure.
    It is raised only when nobody can pick a candidate (non-interactive use).

    Attributes:
        fragment: The name fragment that was resolved.
        candidates: Matching entries, ranked best first.
    """

    def __init__(self, fragment: str, candidates: Sequence[TrashEntry]) -> None:
        names = ", ".join(c.display_name for c in candidates)
        super().__init__(
            f"'{fragment}' matches {len(candidates)} items in the trash: {names}",
            path=fragment,
        )
        self.fragment = fragment
        self.candidates = tuple(candidates)


class ShredError(RecycleError):
    """Base exception for shred failures."""


class PartialShredError(ShredError):
    """Raised when an overwrite pass is interrupted before the delete step.

    The file keeps its length, its content is partially overwritten and
    its directory entry still exists.

    Attributes:
        pass_number: 1-based number of the pass that failed.
    """

    def __init__(self, path: str | Path, pass_number: int, cause: OSError) -> None:
        super().__init__(
            f"Overwrite pass {pass_number} failed for {path}: {cause.strerror or cause}",
            path=path,
        )
        self.pass_number = pass_number


class StaleEntryError(RecycleError):
    """Raised when a trash entry changed between snapshot and action."""


class RestoreCollisionError(RecycleError):
    """Raised when a restore target path is already occupied."""


def map_os_error(exc: OSError, path: str | Path) -> RecycleError:
    """Convert an OSError into the recyclectl error taxonomy.

    Args:
        exc: The original OS error.
        path: Path the failed operation was working on.

    Returns:
        NotFoundError, PermissionDeniedError or a generic RecycleError.
    """
    reason = exc.strerror or str(exc)

    if isinstance(exc, FileNotFoundError):
        return NotFoundError(f"No such file or directory: {path}", path=path)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM, errno.EROFS):
        return PermissionDeniedError(f"Permission denied: {path} ({reason})", path=path)

    return RecycleError(f"{path}: {reason}", path=path)
