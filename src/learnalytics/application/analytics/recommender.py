"""
"What to study next" recommendation over a quiz attempt history.

Topics with low average scores and topics not practiced recently are
weighted up. Stateless and side-effect free.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from learnalytics.domain.analytics.models import AttemptRecord, Recommendation
from learnalytics.domain.constants import (
    DEFAULT_TOPIC,
    REASON_FALLBACK,
    REASON_FIRST_QUIZ,
    REASON_RANKED,
    RECENCY_WEIGHT_FACTOR,
    SCORE_WEIGHT_FACTOR,
)

logger = logging.getLogger(__name__)


@dataclass
class _TopicTally:
    total_percentage: float = 0.0
    count: int = 0
    last_seen_index: int = 0


def _tally(history: Sequence[AttemptRecord]) -> dict[str, _TopicTally]:
    tallies: dict[str, _TopicTally] = {}
    for index, attempt in enumerate(history):
        tally = tallies.setdefault(attempt.topic, _TopicTally())
        tally.total_percentage += attempt.percentage * 100.0
        tally.count += 1
        tally.last_seen_index = index  # higher index = more recent
    return tallies


def topic_weights(history: Sequence[AttemptRecord]) -> dict[str, float]:
    """
    Compute the study weight of every topic, in first-seen order.

    weight = (100 - average score) * 0.7 + (attempts - last seen index) * 2.0
    """
    total_attempts = len(history)
    weights: dict[str, float] = {}

    for topic, tally in _tally(history).items():
        avg_score = tally.total_percentage / tally.count
        score_weight = 100.0 - avg_score
        recency_weight = total_attempts - tally.last_seen_index
        weights[topic] = score_weight * SCORE_WEIGHT_FACTOR + recency_weight * RECENCY_WEIGHT_FACTOR

    return weights


def recommend(history: Sequence[AttemptRecord]) -> Recommendation:
    """
    Pick the single topic the learner should study next.

    Ties keep the topic seen first in the history.
    """
    if not history:
        return Recommendation(recommendation=DEFAULT_TOPIC, reason=REASON_FIRST_QUIZ)

    best_topic: str | None = None
    max_weight: float | None = None

    for topic, weight in topic_weights(history).items():
        if max_weight is None or weight > max_weight:
            max_weight = weight
            best_topic = topic

    if best_topic is None:
        return Recommendation(recommendation=DEFAULT_TOPIC, reason=REASON_FALLBACK)

    logger.debug(f"Recommending {best_topic!r} (weight={max_weight:.2f})")
    return Recommendation(recommendation=best_topic, reason=REASON_RANKED)
