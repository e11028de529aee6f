"""
Quiz grading and historical performance aggregation.

Pure computation, no I/O. Every denominator is guarded so empty input
yields zeros instead of errors.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from learnalytics.application.utils.common import safe_ratio
from learnalytics.domain.analytics.models import (
    AggregateStats,
    GlobalStats,
    GradeResult,
    Question,
    XpAward,
)
from learnalytics.domain.constants import (
    BADGE_THRESHOLDS,
    SUMMARY_GOOD,
    SUMMARY_NEEDS_WORK,
    SUMMARY_PERFECT,
    XP_PER_CORRECT,
    XP_PER_QUESTION,
)


class ScoredAttempt(Protocol):
    score: int
    total_questions: int
    time_taken_seconds: int


def grade_quiz(
    questions: Sequence[Question],
    answers: Mapping[str, str],
    time_taken_seconds: int,
) -> GradeResult:
    """
    Score submitted answers against each question's expected answer.

    Args:
        questions: The quiz as served.
        answers: Submitted answers keyed by question id. Missing ids count as wrong.
        time_taken_seconds: Time spent; used for the efficiency metric.

    Returns:
        GradeResult with the score, correct answers per second (4 places) and
        a one-line summary.
    """
    score = sum(1 for q in questions if q.id in answers and answers[q.id] == q.answer)
    total_questions = len(questions)

    efficiency = round(safe_ratio(score, time_taken_seconds), 4)

    if score == total_questions:
        summary = SUMMARY_PERFECT
    elif score > total_questions / 2:
        summary = SUMMARY_GOOD
    else:
        summary = SUMMARY_NEEDS_WORK

    return GradeResult(score=score, efficiency=efficiency, summary=summary)


def aggregate_attempts(attempts: Iterable[ScoredAttempt]) -> AggregateStats:
    """
    Summarize a learner's attempts: count, total time and overall accuracy (0-100).
    """
    count = 0
    total_score = 0
    total_questions = 0
    total_time = 0

    for a in attempts:
        count += 1
        total_score += a.score
        total_questions += a.total_questions
        total_time += a.time_taken_seconds or 0

    average_score = round(safe_ratio(total_score, total_questions) * 100.0, 2)

    return AggregateStats(
        total_quizzes=count,
        total_time_spent=total_time,
        average_score=average_score,
    )


def award_xp(score: int, total_questions: int) -> XpAward:
    """
    XP for a finished quiz plus the accuracy badge it earns, if any.

    xp = 10 per question + 2 per correct answer.
    """
    xp = total_questions * XP_PER_QUESTION + score * XP_PER_CORRECT
    accuracy = safe_ratio(score, total_questions) * 100.0

    badge = None
    for threshold, name in BADGE_THRESHOLDS:
        if accuracy >= threshold:
            badge = name
            break

    return XpAward(xp_gained=xp, badge=badge)


def merge_badges(existing: Iterable[str], badge: str | None) -> list[str]:
    badges = list(existing)
    if badge and badge not in badges:
        badges.append(badge)
    return badges


def global_stats(user_count: int, attempts: Iterable[ScoredAttempt]) -> GlobalStats:
    """Site-wide counters: registered users and total questions answered."""
    return GlobalStats(
        users=user_count,
        questions_solved=sum(a.total_questions for a in attempts),
    )
