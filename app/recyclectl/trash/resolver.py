"""Fuzzy resolution of name fragments to trash entries.

Users name trashed items the way they remember them ("report", "reprot",
"holiday.jpg") rather than by provider identifier. The resolver scores
every entry's display name against the fragment and decides whether the
fragment picks out one entry, several, or none.

Scoring is a pure function of two strings so it can be tested on its own.
"""

from collections.abc import Sequence
from pathlib import PurePath

from rapidfuzz import fuzz

from recyclectl.trash.models import MatchKind, MatchResult, ScoredEntry, TrashEntry

# Minimum score for an entry to count as a candidate
MATCH_THRESHOLD = 0.6

EXACT_SCORE = 1.0
STEM_SCORE = 0.95
SUBSTRING_BASE = 0.75
SUBSTRING_SPAN = 0.2


def score_name(fragment: str, name: str) -> float:
    """Score how well a fragment matches a display name.

    Comparison is case-insensitive:

    - identical names score 1.0;
    - a fragment equal to the name without its extension scores 0.95;
    - a fragment contained in the name scores between 0.75 and 0.95,
      higher when it covers more of the name;
    - anything else scores the rapidfuzz similarity ratio against the
      name or its stem, whichever is higher (tolerates typos).

    Args:
        fragment: Text typed by the user.
        name: Display name of a trash entry.

    Returns:
        Score between 0.0 and 1.0.
    """
    needle = fragment.strip().casefold()
    haystack = name.casefold()
    if not needle or not haystack:
        return 0.0

    if needle == haystack:
        return EXACT_SCORE

    stem = PurePath(haystack).stem
    if needle == stem:
        return STEM_SCORE

    if needle in haystack:
        return SUBSTRING_BASE + SUBSTRING_SPAN * len(needle) / len(haystack)

    best = fuzz.ratio(needle, haystack)
    if stem and stem != haystack:
        best = max(best, fuzz.ratio(needle, stem))
    return best / 100.0


def _rank(scored: list[ScoredEntry]) -> tuple[ScoredEntry, ...]:
    """Order candidates by score, then newest deletion, then identifier."""
    return tuple(
        sorted(
            scored,
            key=lambda s: (-s.score, -s.entry.deleted_at.timestamp(), s.entry.identifier),
        )
    )


class ItemResolver:
    """Resolves name fragments against a snapshot of trash entries.

    Attributes:
        threshold: Minimum score for an entry to be a candidate.
    """

    def __init__(self, threshold: float = MATCH_THRESHOLD) -> None:
        if not 0.0 < threshold <= 1.0:
            msg = f"Threshold must be in (0, 1], got {threshold}"
            raise ValueError(msg)
        self.threshold = threshold

    def search(self, fragment: str, entries: Sequence[TrashEntry]) -> tuple[ScoredEntry, ...]:
        """Return every entry scoring at or above the threshold, ranked.

        Args:
            fragment: Text typed by the user.
            entries: Snapshot entries to search.

        Returns:
            Scored candidates, best first.
        """
        scored = [ScoredEntry(entry=e, score=score_name(fragment, e.display_name)) for e in entries]
        return _rank([s for s in scored if s.score >= self.threshold])

    def resolve(self, fragment: str, entries: Sequence[TrashEntry]) -> MatchResult:
        """Resolve a fragment to a unique, ambiguous or empty match.

        Entries whose display name equals the fragment exactly take
        precedence over fuzzy candidates, so naming an item precisely is
        never ambiguous unless several items share that exact name.

        Args:
            fragment: Text typed by the user.
            entries: Snapshot entries to resolve against.

        Returns:
            MatchResult ranked by score, then newest deletion first.
        """
        exact = [
            ScoredEntry(entry=e, score=EXACT_SCORE) for e in entries if e.display_name == fragment
        ]
        candidates = _rank(exact) if exact else self.search(fragment, entries)

        if not candidates:
            return MatchResult(fragment=fragment, kind=MatchKind.NONE)
        if len(candidates) == 1:
            return MatchResult(fragment=fragment, kind=MatchKind.UNIQUE, matches=candidates)
        return MatchResult(fragment=fragment, kind=MatchKind.AMBIGUOUS, matches=candidates)
