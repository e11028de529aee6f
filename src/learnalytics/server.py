import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import AliasChoices, BaseModel, Field

from learnalytics.application.analytics import (
    aggregate_attempts,
    apply_queue_operation,
    award_xp,
    due_reviews,
    global_stats,
    grade_quiz,
    merge_badges,
    recommend,
    search_topics,
)
from learnalytics.application.config import resolve_config
from learnalytics.application.history import HistoryError, parse_attempts
from learnalytics.consts import VERSION
from learnalytics.domain.analytics.models import AttemptRecord, Question

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("learnalytics.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    config = resolve_config()
    logging.getLogger("learnalytics").setLevel(config.log_level)
    logger.info(f"Learnalytics Server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("Learnalytics Server shutting down...")


app = FastAPI(
    title="Learnalytics Server",
    description="Learner analytics: spaced repetition, recommendations, search and study queues.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class HistoryRequest(BaseModel):
    # Raw attempt objects, ascending by timestamp. Parsed by application.history.
    attempts: list[dict[str, Any]] = []


class DueRequest(HistoryRequest):
    now: int | None = None


class SearchRequest(BaseModel):
    query: str | None = None
    topics: list[str] = []


class QueueRequest(BaseModel):
    queue: list[str] | None = None
    operation: str
    topic: str | None = None


class QuestionIn(BaseModel):
    id: str | int
    answer: str


class GradeRequest(BaseModel):
    questions: list[QuestionIn]
    answers: dict[str, str] = {}
    time_taken_seconds: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("timeTakenSeconds", "time_taken_seconds")
    )


class ScoredAttemptIn(BaseModel):
    score: int = Field(ge=0)
    total_questions: int = Field(
        ge=0, validation_alias=AliasChoices("totalQuestions", "total_questions")
    )
    time_taken_seconds: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("timeTakenSeconds", "time_taken_seconds", "time_taken"),
    )


class StatsRequest(BaseModel):
    attempts: list[ScoredAttemptIn] = []


class GlobalStatsRequest(StatsRequest):
    user_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("userCount", "user_count"))


class XpRequest(BaseModel):
    score: int = Field(ge=0)
    total_questions: int = Field(
        ge=0, validation_alias=AliasChoices("totalQuestions", "total_questions")
    )
    badges: list[str] = []


def _parse_history(entries: list[dict[str, Any]]) -> list[AttemptRecord]:
    try:
        return parse_attempts(entries)
    except HistoryError as e:
        logger.warning(f"Rejected attempt history: {e}")
        raise HTTPException(status_code=400, detail=f"Invalid attempts: {e}") from None


# ---------------------------------------------------------------------------
# Analytics endpoints
# ---------------------------------------------------------------------------


@app.post("/reviews/due")
def get_due_reviews(req: DueRequest):
    """
    Topics due for review at ``now`` (defaults to the configured or current clock).
    """
    history = _parse_history(req.attempts)
    try:
        config = resolve_config()
        now = req.now if req.now is not None else config.now_epoch
        return [r.to_dict() for r in due_reviews(history, now=now)]
    except Exception as e:
        logger.error(f"Due review computation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/recommendation")
def get_recommendation(req: HistoryRequest):
    history = _parse_history(req.attempts)
    try:
        return recommend(history).to_dict()
    except Exception as e:
        logger.error(f"Recommendation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/topics/search")
def search(req: SearchRequest):
    """Fuzzy topic search; distances above the configured maximum are dropped."""
    try:
        config = resolve_config()
        matches = search_topics(req.query, req.topics, max_distance=config.match_max_distance)
        return [m.to_dict() for m in matches]
    except Exception as e:
        logger.error(f"Topic search failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/queue")
def manage_queue(req: QueueRequest):
    """
    Apply one operation to the caller's study queue and echo the new queue back.
    The server keeps nothing; callers store the returned list.
    """
    try:
        config = resolve_config()
        queue = apply_queue_operation(
            req.queue, req.operation, req.topic, capacity=config.queue_capacity
        )
        return {"queue": queue}
    except Exception as e:
        logger.error(f"Queue operation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/quiz/grade")
def grade(req: GradeRequest):
    questions = [Question(id=str(q.id), answer=q.answer) for q in req.questions]
    try:
        return grade_quiz(questions, req.answers, req.time_taken_seconds).to_dict()
    except Exception as e:
        logger.error(f"Grading failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/stats")
def get_stats(req: StatsRequest):
    try:
        return aggregate_attempts(req.attempts).to_dict()
    except Exception as e:
        logger.error(f"Stats aggregation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/stats/global")
def get_global_stats(req: GlobalStatsRequest):
    return global_stats(req.user_count, req.attempts).to_dict()


@app.post("/xp")
def get_xp_award(req: XpRequest):
    """XP and accuracy badge for one finished quiz, merged into the caller's badge list."""
    award = award_xp(req.score, req.total_questions)
    badges = merge_badges(req.badges, award.badge)
    return {**award.to_dict(), "badges": badges}
