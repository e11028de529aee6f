"""Centralized constants for the learnalytics engine.

All magic numbers and user-facing strings live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
SECONDS_PER_DAY = 86400

# ---------- SM-2 ----------
INITIAL_EF = 2.5
MIN_EF = 1.3
PASSING_QUALITY = 3
MAX_QUALITY = 5

# ---------- Recommendation ----------
SCORE_WEIGHT_FACTOR = 0.7
RECENCY_WEIGHT_FACTOR = 2.0
DEFAULT_TOPIC = "General Knowledge"
REASON_FIRST_QUIZ = "Start your first quiz!"
REASON_FALLBACK = "Start your journey!"
REASON_RANKED = "Based on your performance and recency."

# ---------- Fuzzy Search ----------
MAX_MATCH_DISTANCE = 3

# ---------- Study Queue ----------
MAX_QUEUE_SIZE = 100

# ---------- Grading ----------
SUMMARY_PERFECT = "Perfect Score! Outstanding performance."
SUMMARY_GOOD = "Good job! Keep practicing."
SUMMARY_NEEDS_WORK = "Needs improvement. Don't give up!"

# ---------- Gamification ----------
XP_PER_QUESTION = 10
XP_PER_CORRECT = 2
BADGE_THRESHOLDS = [(100.0, "Gold Aim"), (80.0, "Silver Aim"), (60.0, "Bronze Aim")]
