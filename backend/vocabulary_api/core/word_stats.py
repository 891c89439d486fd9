"""Word Stats - pure computation of cache statistics from raw counts.

Invariants:
    - No IO, no DB: inputs are plain counts fetched by the repository
    - Never raises on empty input - every count defaults to 0
    - most_looked_up ordered by lookup_count desc, then word asc; zero-count words excluded

Design Decisions:
    - Pure function, not a repository method: aggregation is presentation,
      the repository only knows how to count rows
"""

from datetime import datetime, timezone

from vocabulary_api.schemas.word import WordCount, WordStatistics

MOST_LOOKED_UP_LIMIT = 10


def compute_word_statistics(
    definition_counts: dict[str, int],
    word_lookup_counts: list[tuple[str, int]],
    top_n: int = MOST_LOOKED_UP_LIMIT,
) -> WordStatistics:
    """Build WordStatistics from per-part-of-speech and per-word counts."""
    ranked = sorted(
        (wc for wc in word_lookup_counts if wc[1] > 0),
        key=lambda wc: (-wc[1], wc[0]),
    )
    breakdown = dict(sorted(definition_counts.items()))
    return WordStatistics(
        total_words=len(word_lookup_counts),
        total_definitions=sum(breakdown.values()),
        total_lookups=sum(count for _, count in word_lookup_counts),
        part_of_speech_breakdown=breakdown,
        most_looked_up=[
            WordCount(word=word, lookup_count=count)
            for word, count in ranked[:top_n]
        ],
        generated_at=datetime.now(timezone.utc),
    )
