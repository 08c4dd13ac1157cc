"""Summary statistics over the saved-word list."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from src.vocabulary.models import SavedWord

NEW_WORD_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class VocabularyStats:
    total: int = 0
    parts_of_speech: dict[str, int] = field(default_factory=dict)
    categorized: int = 0
    uncategorized: int = 0
    new_words: int = 0
    oldest: SavedWord | None = None
    newest: SavedWord | None = None

    def top_parts_of_speech(self, limit: int = 3) -> list[tuple[str, int]]:
        return Counter(self.parts_of_speech).most_common(limit)


def vocabulary_stats(
    saved_words: Sequence[SavedWord], now: datetime | None = None
) -> VocabularyStats:
    """Count words by part of speech and category, and find recent additions.

    A word counts as new when it was saved within the last seven days. Words
    without a dictionary entry contribute no part of speech.
    """
    if not saved_words:
        return VocabularyStats()

    now = now or datetime.now(timezone.utc)
    cutoff = now - NEW_WORD_WINDOW

    parts = Counter(
        s.entry.part_of_speech for s in saved_words if s.entry and s.entry.part_of_speech
    )
    categorized = sum(1 for s in saved_words if s.categories)

    return VocabularyStats(
        total=len(saved_words),
        parts_of_speech=dict(parts),
        categorized=categorized,
        uncategorized=len(saved_words) - categorized,
        new_words=sum(1 for s in saved_words if s.saved_at > cutoff),
        oldest=min(saved_words, key=lambda s: s.saved_at),
        newest=max(saved_words, key=lambda s: s.saved_at),
    )
