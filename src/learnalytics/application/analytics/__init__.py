# Application Analytics Package
from .grading import aggregate_attempts, award_xp, global_stats, grade_quiz, merge_badges
from .matcher import levenshtein_distance, search_topics
from .recommender import recommend, topic_weights
from .scheduler import build_topic_states, due_reviews, quality_from_attempt, review
from .study_queue import apply_queue_operation

__all__ = [
    "due_reviews",
    "build_topic_states",
    "quality_from_attempt",
    "review",
    "recommend",
    "topic_weights",
    "search_topics",
    "levenshtein_distance",
    "apply_queue_operation",
    "grade_quiz",
    "aggregate_attempts",
    "award_xp",
    "merge_badges",
    "global_stats",
]
