"""Point-in-time index of the trash contents."""

import logging

from recyclectl.core.errors import ProviderUnavailableError, RecycleError
from recyclectl.trash.base import TrashProvider
from recyclectl.trash.models import TrashEntry

logger = logging.getLogger(__name__)


class TrashIndex:
    """Takes immutable snapshots of a trash provider's entries."""

    def __init__(self, provider: TrashProvider) -> None:
        self._provider = provider

    def snapshot(self) -> tuple[TrashEntry, ...]:
        """Enumerate the trash once and wrap every record as a TrashEntry.

        Entries keep the order the provider reported them in; sorting
        for display is left to the caller.

        Returns:
            Tuple of entries, possibly empty.

        Raises:
            ProviderUnavailableError: If the provider cannot be queried.
        """
        if not self._provider.is_available():
            raise ProviderUnavailableError(
                f"Trash provider '{self._provider.name}' is not available on this system"
            )

        try:
            records = self._provider.list_entries()
        except ProviderUnavailableError:
            raise
        except (RecycleError, OSError) as e:
            raise ProviderUnavailableError(f"Cannot list trash contents: {e}") from e

        entries = tuple(TrashEntry.from_record(record) for record in records)
        logger.debug("Trash snapshot holds %d entries", len(entries))
        return entries
