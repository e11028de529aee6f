"""
Spaced-repetition scheduler (SM-2 variant) over a quiz attempt history.

This is a pure computation module with no I/O. All topic state is rebuilt
from the history on every call.
"""

import logging
import time
from collections.abc import Iterable

from learnalytics.application.utils.common import round_half_up
from learnalytics.domain.analytics.models import AttemptRecord, DueReview, TopicState
from learnalytics.domain.constants import (
    MAX_QUALITY,
    MIN_EF,
    PASSING_QUALITY,
    SECONDS_PER_DAY,
)

logger = logging.getLogger(__name__)


def quality_from_attempt(attempt: AttemptRecord) -> int:
    """
    Map an attempt's percentage correct onto the SM-2 quality scale (0-5).
    """
    return round_half_up(attempt.percentage * MAX_QUALITY)


def review(state: TopicState, quality: int, reviewed_at: int) -> TopicState:
    """
    Apply one review of the given quality to a topic's state, in place.

    Success (quality >= 3) grows the interval 1 -> 6 -> interval * EF and
    adjusts the easiness factor. Failure resets the repetition count and
    sets a one-day interval, leaving the easiness factor untouched.
    """
    state.last_review_epoch = reviewed_at

    if quality >= PASSING_QUALITY:
        state.repetitions += 1
        if state.repetitions == 1:
            state.interval = 1
        elif state.repetitions == 2:
            state.interval = 6
        else:
            state.interval = round_half_up(state.interval * state.easiness_factor)

        q_diff = MAX_QUALITY - quality
        state.easiness_factor += 0.1 - q_diff * (0.08 + q_diff * 0.02)
        if state.easiness_factor < MIN_EF:
            state.easiness_factor = MIN_EF
    else:
        state.repetitions = 0
        state.interval = 1

    return state


def build_topic_states(history: Iterable[AttemptRecord]) -> dict[str, TopicState]:
    """
    Fold an ascending attempt history into per-topic SM-2 state.

    The returned dict preserves first-seen topic order.
    """
    states: dict[str, TopicState] = {}
    for attempt in history:
        state = states.get(attempt.topic)
        if state is None:
            state = states[attempt.topic] = TopicState(topic=attempt.topic)
        review(state, quality_from_attempt(attempt), attempt.epoch)
    return states


def due_reviews(history: Iterable[AttemptRecord], now: int | None = None) -> list[DueReview]:
    """
    List the topics whose next review is at or before ``now``.

    Args:
        history: Attempts in ascending timestamp order. Not sorted here.
        now: Evaluation instant as epoch seconds. Defaults to the current time.

    Returns:
        Due topics in first-seen order, each with its current interval and
        ``due_in_days`` (0 for due today, negative when overdue).
    """
    if now is None:
        now = int(time.time())

    states = build_topic_states(history)
    due: list[DueReview] = []

    for state in states.values():
        next_due = state.last_review_epoch + state.interval * SECONDS_PER_DAY
        if next_due <= now:
            due.append(
                DueReview(
                    topic=state.topic,
                    interval=state.interval,
                    due_in_days=(next_due - now) // SECONDS_PER_DAY,
                )
            )

    logger.debug(f"{len(due)}/{len(states)} topics due at {now}")
    return due
