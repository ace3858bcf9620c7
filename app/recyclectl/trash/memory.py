"""In-memory trash provider.

Keeps trash entries in a dictionary instead of touching the filesystem.
Used by tests and as a stand-in wherever a real bin is not wanted.
"""

import itertools
from datetime import UTC, datetime
from pathlib import Path

from recyclectl.core.errors import (
    NotFoundError,
    PermissionDeniedError,
    RestoreCollisionError,
)
from recyclectl.trash.base import TrashProvider
from recyclectl.trash.models import TrashRecord


class InMemoryTrashProvider(TrashProvider):
    """Trash provider backed by a dictionary.

    Attributes:
        occupied: Paths considered to exist outside the trash. Trashing a
            path removes it; restoring onto a member fails.
        fail_on: Identifiers whose restore or purge raises
            PermissionDeniedError.
        available: Value returned by is_available().
    """

    def __init__(
        self,
        records: list[TrashRecord] | None = None,
        occupied: set[Path] | None = None,
        available: bool = True,
    ) -> None:
        self._records: dict[str, TrashRecord] = {r.identifier: r for r in records or []}
        self._ids = itertools.count(len(self._records) + 1)
        self.occupied: set[Path] = set(occupied or ())
        self.fail_on: set[str] = set()
        self.available = available
        self.restored: list[str] = []
        self.purged: list[str] = []

    @property
    def name(self) -> str:
        return "memory"

    def is_available(self) -> bool:
        return self.available

    def trash_path(self, path: Path) -> None:
        if path not in self.occupied:
            raise NotFoundError(f"No such file or directory: {path}", path=path)

        identifier = f"mem-{next(self._ids)}"
        self._records[identifier] = TrashRecord(
            identifier=identifier,
            original_path=path,
            display_name=path.name,
            deleted_at=datetime.now(tz=UTC),
        )
        self.occupied.discard(path)

    def list_entries(self) -> list[TrashRecord]:
        return list(self._records.values())

    def restore_entry(self, identifier: str) -> None:
        record = self._take(identifier, peek=True)
        if record.original_path in self.occupied:
            raise RestoreCollisionError(
                f"Cannot restore {record.display_name}: {record.original_path} already exists",
                path=record.original_path,
            )
        self._take(identifier)
        self.occupied.add(record.original_path)
        self.restored.append(identifier)

    def purge_entry(self, identifier: str) -> None:
        self._take(identifier)
        self.purged.append(identifier)

    def _take(self, identifier: str, peek: bool = False) -> TrashRecord:
        """Look up (and unless peeking, remove) a record, applying failure injection."""
        if identifier not in self._records:
            raise NotFoundError(f"Trash entry {identifier} not found", path=identifier)
        if identifier in self.fail_on:
            raise PermissionDeniedError(f"Permission denied for {identifier}", path=identifier)
        if peek:
            return self._records[identifier]
        return self._records.pop(identifier)
