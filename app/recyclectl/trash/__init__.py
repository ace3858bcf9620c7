"""Recycle bin access.

This module provides the trash provider port and its adapters, the
snapshot index, fuzzy name resolution and the restore/purge workflows.
"""

from recyclectl.core.errors import ProviderUnavailableError
from recyclectl.trash.base import TrashProvider
from recyclectl.trash.freedesktop import FreedesktopTrashProvider
from recyclectl.trash.index import TrashIndex
from recyclectl.trash.memory import InMemoryTrashProvider
from recyclectl.trash.models import MatchKind, MatchResult, ScoredEntry, TrashEntry, TrashRecord
from recyclectl.trash.recycle import PURGE_ALL, RecycleOperations
from recyclectl.trash.resolver import MATCH_THRESHOLD, ItemResolver, score_name


def get_provider() -> TrashProvider:
    """Return the trash provider for this platform.

    Raises:
        ProviderUnavailableError: If the platform has no supported trash.
    """
    provider = FreedesktopTrashProvider()
    if not provider.is_available():
        raise ProviderUnavailableError(
            "No supported trash on this platform (the freedesktop.org trash is required)"
        )
    return provider


__all__ = [
    "MATCH_THRESHOLD",
    "PURGE_ALL",
    "FreedesktopTrashProvider",
    "InMemoryTrashProvider",
    "ItemResolver",
    "MatchKind",
    "MatchResult",
    "RecycleOperations",
    "ScoredEntry",
    "TrashEntry",
    "TrashIndex",
    "TrashProvider",
    "TrashRecord",
    "get_provider",
    "score_name",
]
