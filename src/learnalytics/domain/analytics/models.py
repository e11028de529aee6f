"""
Domain models for learner analytics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from learnalytics.domain.constants import INITIAL_EF


@dataclass(frozen=True)
class AttemptRecord:
    """
    One completed quiz.

    Attributes:
        topic: Topic the quiz covered (non-empty).
        score: Number of correct answers.
        total_questions: Number of questions asked.
        time_taken_seconds: Wall time spent on the quiz.
        timestamp: When the attempt was submitted.
    """

    topic: str
    score: int
    total_questions: int
    time_taken_seconds: int
    timestamp: datetime

    @property
    def epoch(self) -> int:
        """Submission time as integer epoch seconds. Naive timestamps are read as UTC."""
        ts = self.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return int(ts.timestamp())

    @property
    def percentage(self) -> float:
        """Fraction correct in 0.0-1.0, or 0.0 when no questions were asked."""
        if self.total_questions <= 0:
            return 0.0
        return self.score / self.total_questions


@dataclass
class TopicState:
    """
    SM-2 review state for a single topic.

    Rebuilt from the attempt history on every call and never persisted.
    """

    topic: str
    easiness_factor: float = INITIAL_EF
    interval: int = 0  # days
    repetitions: int = 0
    last_review_epoch: int = 0


@dataclass(frozen=True)
class DueReview:
    topic: str
    interval: int
    due_in_days: int  # <= 0: due today or overdue

    def to_dict(self) -> dict:
        return {"topic": self.topic, "interval": self.interval, "dueInDays": self.due_in_days}


@dataclass(frozen=True)
class Recommendation:
    recommendation: str
    reason: str

    def to_dict(self) -> dict:
        return {"recommendation": self.recommendation, "reason": self.reason}


@dataclass(frozen=True)
class TopicMatch:
    item: str
    distance: int

    def to_dict(self) -> dict:
        return {"item": self.item, "distance": self.distance}


@dataclass(frozen=True)
class Question:
    """A graded question: its id and the expected answer text."""

    id: str
    answer: str


@dataclass(frozen=True)
class GradeResult:
    score: int
    efficiency: float  # correct answers per second
    summary: str

    def to_dict(self) -> dict:
        return {"score": self.score, "efficiency": self.efficiency, "summary": self.summary}


@dataclass(frozen=True)
class AggregateStats:
    total_quizzes: int
    total_time_spent: int
    average_score: float  # 0-100

    def to_dict(self) -> dict:
        return {
            "totalQuizzes": self.total_quizzes,
            "totalTimeSpent": self.total_time_spent,
            "averageScore": self.average_score,
        }


@dataclass(frozen=True)
class XpAward:
    xp_gained: int
    badge: str | None = None

    def to_dict(self) -> dict:
        return {"xpGained": self.xp_gained, "newBadge": self.badge}


@dataclass(frozen=True)
class GlobalStats:
    users: int
    questions_solved: int

    def to_dict(self) -> dict:
        return {"users": self.users, "questionsSolved": self.questions_solved}


class StudyOperation(str, Enum):
    ENQUEUE = "enqueue"
    DEQUEUE = "dequeue"
    REMOVE = "remove"
