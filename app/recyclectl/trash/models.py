"""Trash domain models.

This module defines the raw records reported by trash providers, the
immutable snapshot entries built from them, and the outcome of resolving
a name fragment against a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import NamedTuple

# Stand-in deletion time for providers that do not record one
UNKNOWN_DELETION_TIME = datetime.fromtimestamp(0, tz=UTC)


class TrashRecord(NamedTuple):
    """Raw enumeration record as reported by a trash provider.

    Attributes:
        identifier: Opaque identifier owned by the provider.
        original_path: Path the item had before it was trashed.
        display_name: Base name shown to the user (may be empty).
        deleted_at: Deletion time, None if the provider does not know it.
    """

    identifier: str
    original_path: Path
    display_name: str
    deleted_at: datetime | None


@dataclass(frozen=True, slots=True)
class TrashEntry:
    """One item held by the trash, as seen in a snapshot.

    Entries are immutable. Once an entry is restored or purged it is
    stale and must be dropped (by identifier) by whoever holds it.

    Attributes:
        identifier: Opaque identifier owned by the provider.
        original_path: Path the item had before it was trashed.
        display_name: Base name used for matching and display.
        deleted_at: Timezone-aware deletion time.
    """

    identifier: str
    original_path: Path
    display_name: str
    deleted_at: datetime

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.identifier:
            msg = "Trash entry identifier cannot be empty"
            raise ValueError(msg)
        if self.deleted_at.tzinfo is None:
            msg = "Trash entry deletion time must be timezone-aware"
            raise ValueError(msg)

    @classmethod
    def from_record(cls, record: TrashRecord) -> TrashEntry:
        """Wrap a raw provider record.

        Naive deletion times are taken as local time; a missing display
        name falls back to the base name of the original path.

        Args:
            record: Record reported by the provider.

        Returns:
            Snapshot entry for the record.
        """
        deleted_at = record.deleted_at or UNKNOWN_DELETION_TIME
        if deleted_at.tzinfo is None:
            deleted_at = deleted_at.astimezone()

        return cls(
            identifier=record.identifier,
            original_path=Path(record.original_path),
            display_name=record.display_name or Path(record.original_path).name,
            deleted_at=deleted_at,
        )


class MatchKind(str, Enum):
    """Outcome category of resolving a name fragment.

    Attributes:
        UNIQUE: Exactly one entry matched.
        AMBIGUOUS: Several entries matched; disambiguation is needed.
        NONE: Nothing matched.
    """

    UNIQUE = "unique"
    AMBIGUOUS = "ambiguous"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ScoredEntry:
    """A trash entry with its similarity score for one fragment."""

    entry: TrashEntry
    score: float


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of resolving a name fragment against a set of entries.

    Attributes:
        fragment: The name fragment that was resolved.
        kind: Unique, ambiguous or none.
        matches: Candidates ranked best first (empty for NONE).
    """

    fragment: str
    kind: MatchKind
    matches: tuple[ScoredEntry, ...] = ()

    def __post_init__(self) -> None:
        """Validate that the candidate count fits the kind."""
        expected = {MatchKind.UNIQUE: 1, MatchKind.NONE: 0}.get(self.kind)
        if expected is not None and len(self.matches) != expected:
            msg = f"{self.kind.value} match needs {expected} candidate(s), got {len(self.matches)}"
            raise ValueError(msg)
        if self.kind == MatchKind.AMBIGUOUS and len(self.matches) < 2:
            msg = f"Ambiguous match needs at least 2 candidates, got {len(self.matches)}"
            raise ValueError(msg)

    @property
    def candidates(self) -> tuple[TrashEntry, ...]:
        """Matched entries, ranked best first."""
        return tuple(m.entry for m in self.matches)

    @property
    def entry(self) -> TrashEntry | None:
        """The matched entry for a unique result, None otherwise."""
        if self.kind == MatchKind.UNIQUE:
            return self.matches[0].entry
        return None

    @property
    def is_unique(self) -> bool:
        """Check if exactly one entry matched."""
        return self.kind == MatchKind.UNIQUE

    @property
    def is_ambiguous(self) -> bool:
        """Check if several entries matched."""
        return self.kind == MatchKind.AMBIGUOUS
