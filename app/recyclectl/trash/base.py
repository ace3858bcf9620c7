"""Abstract base class for trash providers.

This module defines the TrashProvider interface: the narrow boundary
between recyclectl and whatever service stores the user's recycle bin.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from recyclectl.trash.models import TrashRecord


class TrashProvider(ABC):
    """Abstract base class for all trash providers.

    Providers move paths into the bin, enumerate what it holds, and
    restore or permanently remove single entries by identifier. All
    failures are raised as RecycleError subclasses.

    Example:
        >>> provider = FreedesktopTrashProvider()
        >>> if provider.is_available():
        ...     for record in provider.list_entries():
        ...         print(f"{record.display_name}: {record.original_path}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short human-readable provider name."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider can be used on the current system.

        Returns:
            True if the provider can be used, False otherwise.
        """

    @abstractmethod
    def trash_path(self, path: Path) -> None:
        """Move a file, directory or link into the trash.

        Args:
            path: Absolute path to move.

        Raises:
            NotFoundError: If the path does not exist.
            PermissionDeniedError: If the move is rejected.
        """

    @abstractmethod
    def list_entries(self) -> list[TrashRecord]:
        """Enumerate every entry currently in the trash.

        Returns:
            Raw records in provider order.

        Raises:
            ProviderUnavailableError: If the trash cannot be queried.
        """

    @abstractmethod
    def restore_entry(self, identifier: str) -> None:
        """Move an entry back to its original path.

        Args:
            identifier: Provider identifier of the entry.

        Raises:
            NotFoundError: If the entry is no longer in the trash.
            RestoreCollisionError: If the original path is occupied.
            PermissionDeniedError: If the move is rejected.
        """

    @abstractmethod
    def purge_entry(self, identifier: str) -> None:
        """Permanently remove an entry from the trash.

        Args:
            identifier: Provider identifier of the entry.

        Raises:
            NotFoundError: If the entry is no longer in the trash.
            PermissionDeniedError: If the removal is rejected.
        """
