"""
Parsing of caller-supplied attempt histories.

Histories arrive as plain JSON objects from the document store, either with
the store's snake_case field names or the camelCase names of the public API.
"""

from datetime import datetime, timezone
from typing import Any

from learnalytics.domain.analytics.models import AttemptRecord

_ALIASES = {
    "total_questions": ("total_questions", "totalQuestions"),
    "time_taken_seconds": ("time_taken_seconds", "timeTakenSeconds", "time_taken"),
}


class HistoryError(ValueError):
    """Raised when an attempt entry cannot be turned into an AttemptRecord."""


def _pick(entry: dict[str, Any], field: str, default: Any = None) -> Any:
    for key in _ALIASES.get(field, (field,)):
        if key in entry and entry[key] is not None:
            return entry[key]
    return default


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise HistoryError(f"Invalid timestamp: {value!r}")
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise HistoryError(f"Invalid timestamp: {value!r}") from e
        # Naive timestamps are stored as UTC.
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise HistoryError(f"Invalid timestamp: {value!r}")


def _non_negative_int(entry: dict[str, Any], field: str, index: int) -> int:
    value = _pick(entry, field, 0)
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise HistoryError(f"Attempt #{index}: {field} must be an integer, got {value!r}") from e
    if number < 0:
        raise HistoryError(f"Attempt #{index}: {field} must be >= 0, got {number}")
    return number


def parse_attempt(entry: dict[str, Any], index: int = 0) -> AttemptRecord:
    if not isinstance(entry, dict):
        raise HistoryError(f"Attempt #{index}: expected an object, got {type(entry).__name__}")

    topic = entry.get("topic")
    if not isinstance(topic, str) or not topic:
        raise HistoryError(f"Attempt #{index}: missing topic")

    if "timestamp" not in entry:
        raise HistoryError(f"Attempt #{index}: missing timestamp")

    return AttemptRecord(
        topic=topic,
        score=_non_negative_int(entry, "score", index),
        total_questions=_non_negative_int(entry, "total_questions", index),
        time_taken_seconds=_non_negative_int(entry, "time_taken_seconds", index),
        timestamp=_parse_timestamp(entry["timestamp"]),
    )


def parse_attempts(entries: list[dict[str, Any]]) -> list[AttemptRecord]:
    """
    Convert raw attempt objects into AttemptRecords, preserving order.

    Raises:
        HistoryError: If any entry is malformed.
    """
    if not isinstance(entries, list):
        raise HistoryError("Attempt history must be a JSON array")
    return [parse_attempt(entry, i) for i, entry in enumerate(entries)]
