import logging
from datetime import datetime, timezone

import pytest

from learnalytics.domain.analytics.models import AttemptRecord

T0 = 1_700_000_000  # 2023-11-14T22:13:20Z


def make_attempt(
    topic: str,
    score: int,
    total: int = 5,
    at: int = T0,
    time_taken: int = 60,
) -> AttemptRecord:
    """Build an AttemptRecord from an epoch timestamp."""
    return AttemptRecord(
        topic=topic,
        score=score,
        total_questions=total,
        time_taken_seconds=time_taken,
        timestamp=datetime.fromtimestamp(at, tz=timezone.utc),
    )


@pytest.fixture
def attempt():
    return make_attempt


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Points HOME at a temp dir so no real config file or env leaks into tests."""
    home = tmp_path / "home"
    home.mkdir()

    monkeypatch.setenv("HOME", str(home))
    for var in ("HOST", "PORT", "LOG_LEVEL", "QUEUE_CAPACITY", "MATCH_MAX_DISTANCE", "NOW_EPOCH"):
        monkeypatch.delenv(f"LEARNALYTICS_{var}", raising=False)
    return home


@pytest.fixture(autouse=True)
def restore_log_level():
    """The CLI callback and server startup set the package logger level; undo it."""
    package_logger = logging.getLogger("learnalytics")
    level = package_logger.level
    yield
    package_logger.setLevel(level)
