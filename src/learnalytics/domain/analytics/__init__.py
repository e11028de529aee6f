# Domain Analytics Package
from .models import (
    AggregateStats,
    AttemptRecord,
    DueReview,
    GlobalStats,
    GradeResult,
    Question,
    Recommendation,
    StudyOperation,
    TopicMatch,
    TopicState,
    XpAward,
)

__all__ = [
    "AttemptRecord",
    "TopicState",
    "DueReview",
    "Recommendation",
    "TopicMatch",
    "Question",
    "GradeResult",
    "AggregateStats",
    "GlobalStats",
    "XpAward",
    "StudyOperation",
]
