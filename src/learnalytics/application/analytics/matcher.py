"""Approximate (edit-distance) search over topic names."""

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from learnalytics.domain.analytics.models import TopicMatch
from learnalytics.domain.constants import MAX_MATCH_DISTANCE


def _fold(s: str) -> list[str]:
    # Per character, so multi-char lowercase expansions can't shift the alignment.
    return [c.lower() for c in s]


def levenshtein_distance(s1: str, s2: str) -> int:
    """Case-insensitive Levenshtein distance between two strings."""
    return Levenshtein.distance(s1, s2, processor=_fold)


def search_topics(
    query: str | None,
    topics: Sequence[str] | None,
    max_distance: int = MAX_MATCH_DISTANCE,
) -> list[TopicMatch]:
    """
    Find topics within ``max_distance`` edits of ``query``.

    Results are sorted by ascending distance; equal distances keep input order.
    Duplicate topics each produce their own match.
    """
    if not query or not topics:
        return []

    matches = [TopicMatch(item=topic, distance=levenshtein_distance(query, topic)) for topic in topics]
    matches = [m for m in matches if m.distance <= max_distance]
    matches.sort(key=lambda m: m.distance)
    return matches
