from datetime import datetime, timezone

import pytest

from learnalytics.domain.analytics.models import (
    AggregateStats,
    AttemptRecord,
    DueReview,
    GlobalStats,
    StudyOperation,
    TopicState,
    XpAward,
)


def test_attempt_epoch_and_percentage():
    a = AttemptRecord(
        topic="Algebra",
        score=3,
        total_questions=4,
        time_taken_seconds=30,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    assert a.epoch == 1704067200
    assert a.percentage == 0.75


def test_naive_timestamp_epoch_is_utc():
    a = AttemptRecord(
        topic="Algebra",
        score=1,
        total_questions=1,
        time_taken_seconds=5,
        timestamp=datetime(2024, 1, 1),
    )
    assert a.epoch == 1704067200


def test_attempt_is_immutable(attempt):
    a = attempt("A", 1, 2)
    with pytest.raises(AttributeError):
        a.score = 2  # type: ignore[misc]


def test_topic_state_defaults():
    state = TopicState(topic="A")
    assert (state.easiness_factor, state.interval, state.repetitions) == (2.5, 0, 0)
    assert state.last_review_epoch == 0


def test_result_dicts_use_public_keys():
    assert DueReview("A", 6, -1).to_dict() == {"topic": "A", "interval": 6, "dueInDays": -1}
    assert AggregateStats(2, 90, 55.5).to_dict() == {
        "totalQuizzes": 2,
        "totalTimeSpent": 90,
        "averageScore": 55.5,
    }
    assert XpAward(40).to_dict() == {"xpGained": 40, "newBadge": None}
    assert GlobalStats(2, 30).to_dict() == {"users": 2, "questionsSolved": 30}


def test_study_operation_values():
    assert StudyOperation("remove") is StudyOperation.REMOVE
    assert [op.value for op in StudyOperation] == ["enqueue", "dequeue", "remove"]
