"""Restore and purge of trash entries addressed by name.

A RecycleOperations object serves one command invocation. It takes a
single snapshot of the trash on first use and resolves every fragment
against it; the provider is never re-queried mid-command. Entries that
are restored or purged are dropped from the working snapshot by
identifier. If the trash changed behind our back, the provider's
complaint at act time is reported as StaleEntryError.
"""

import logging
from collections.abc import Callable, Sequence

from recyclectl.core.errors import (
    AmbiguousMatchError,
    NotFoundError,
    RecycleError,
    StaleEntryError,
)
from recyclectl.trash.base import TrashProvider
from recyclectl.trash.index import TrashIndex
from recyclectl.trash.models import TrashEntry
from recyclectl.trash.resolver import ItemResolver

logger = logging.getLogger(__name__)

# Purge argument that selects every entry instead of fuzzy matching
PURGE_ALL = "all"

# Picks one entry among ranked candidates, or None to cancel
Chooser = Callable[[str, Sequence[TrashEntry]], TrashEntry | None]


class RecycleOperations:
    """Resolve-then-act workflows over one trash snapshot.

    Attributes:
        failures: Per-entry errors collected while purging everything.
    """

    def __init__(
        self,
        provider: TrashProvider,
        resolver: ItemResolver | None = None,
    ) -> None:
        """Initialize the operations.

        Args:
            provider: Trash provider performing restore and purge.
            resolver: Fragment resolver (default threshold if None).
        """
        self._provider = provider
        self._index = TrashIndex(provider)
        self._resolver = resolver or ItemResolver()
        self._entries: list[TrashEntry] | None = None
        self.failures: list[RecycleError] = []

    @property
    def entries(self) -> tuple[TrashEntry, ...]:
        """Entries of the snapshot that have not been acted on yet.

        The snapshot is taken on first access.

        Raises:
            ProviderUnavailableError: If the trash cannot be enumerated.
        """
        if self._entries is None:
            self._entries = list(self._index.snapshot())
        return tuple(self._entries)

    def restore(self, fragment: str, choose: Chooser | None = None) -> TrashEntry:
        """Restore the entry a fragment resolves to.

        Args:
            fragment: Name fragment typed by the user.
            choose: Picks among ambiguous candidates. Without it an
                ambiguous fragment fails instead of guessing.

        Returns:
            The restored entry (now stale).

        Raises:
            NotFoundError: If nothing matches, or the choice was cancelled.
            AmbiguousMatchError: If several entries match and no chooser decided.
            RestoreCollisionError: If the original path is occupied; the
                entry stays in the trash.
            StaleEntryError: If the entry vanished from the trash since the snapshot.
        """
        entry = self._select(fragment, choose)
        self._act(entry, self._provider.restore_entry, "restore")
        logger.info("Restored %s to %s", entry.display_name, entry.original_path)
        return entry

    def purge(self, fragment: str, choose: Chooser | None = None) -> int:
        """Permanently remove matching entries from the trash.

        The literal PURGE_ALL bypasses matching and purges the whole
        snapshot; failures for single entries are collected in
        ``failures`` and do not stop the others.

        Purging only drops the trash's hold on the data. Content is not
        overwritten and may still be recoverable by undelete tools.

        Args:
            fragment: Name fragment, or PURGE_ALL.
            choose: Picks among ambiguous candidates.

        Returns:
            Number of entries removed.

        Raises:
            NotFoundError: If nothing matches, or the choice was cancelled.
            AmbiguousMatchError: If several entries match and no chooser decided.
            StaleEntryError: If the entry vanished from the trash since the snapshot.
        """
        if fragment == PURGE_ALL:
            return self._purge_all()

        entry = self._select(fragment, choose)
        self._act(entry, self._provider.purge_entry, "purge")
        logger.info("Purged %s", entry.display_name)
        return 1

    def _purge_all(self) -> int:
        removed = 0
        for entry in self.entries:
            try:
                self._act(entry, self._provider.purge_entry, "purge")
            except RecycleError as e:
                logger.debug("Failed to purge %s: %s", entry.identifier, e)
                self.failures.append(e)
                continue
            removed += 1
        return removed

    def _select(self, fragment: str, choose: Chooser | None) -> TrashEntry:
        """Resolve a fragment against the snapshot, disambiguating if possible."""
        result = self._resolver.resolve(fragment, self.entries)

        if result.entry is not None:
            return result.entry

        if not result.is_ambiguous:
            raise NotFoundError(f"No item in the trash matches '{fragment}'", path=fragment)

        if choose is None:
            raise AmbiguousMatchError(fragment, result.candidates)

        chosen = choose(fragment, result.candidates)
        if chosen is None:
            raise NotFoundError(f"No item selected for '{fragment}'", path=fragment)
        if chosen not in result.candidates:
            msg = f"Chosen entry {chosen.identifier} is not a candidate for '{fragment}'"
            raise ValueError(msg)
        return chosen

    def _act(self, entry: TrashEntry, action: Callable[[str], None], verb: str) -> None:
        """Run a provider action on an entry and drop the entry on success."""
        try:
            action(entry.identifier)
        except NotFoundError as e:
            self._discard(entry)
            raise StaleEntryError(
                f"Cannot {verb} {entry.display_name}: it is no longer in the trash",
                path=entry.original_path,
            ) from e

        self._discard(entry)

    def _discard(self, entry: TrashEntry) -> None:
        if self._entries is not None:
            self._entries = [e for e in self._entries if e.identifier != entry.identifier]
