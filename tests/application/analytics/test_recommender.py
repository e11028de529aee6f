import pytest

from learnalytics.application.analytics import recommender
from learnalytics.application.analytics.recommender import recommend, topic_weights


def test_empty_history_recommends_general_knowledge():
    result = recommend([])
    assert result.to_dict() == {
        "recommendation": "General Knowledge",
        "reason": "Start your first quiz!",
    }


def test_single_topic_is_recommended(attempt):
    result = recommend([attempt("A", 5, 5)])
    assert result.recommendation == "A"
    assert result.reason == "Based on your performance and recency."


def test_weights_follow_literal_formula(attempt):
    history = [attempt("A", 5, 5), attempt("B", 0, 5)]
    weights = topic_weights(history)

    # A: (100 - 100) * 0.7 + (2 - 0) * 2.0
    # B: (100 - 0) * 0.7 + (2 - 1) * 2.0
    assert list(weights) == ["A", "B"]
    assert weights["A"] == pytest.approx(4.0)
    assert weights["B"] == pytest.approx(72.0)


def test_weak_topic_beats_strong_topic(attempt):
    history = [attempt("Strong", 5, 5), attempt("Weak", 1, 5), attempt("Strong", 5, 5)]
    assert recommend(history).recommendation == "Weak"


def test_stale_topic_beats_recent_topic_with_equal_scores(attempt):
    history = [attempt("Old", 5, 5), attempt("New", 5, 5)]
    assert recommend(history).recommendation == "Old"


def test_average_uses_all_attempts(attempt):
    history = [attempt("A", 0, 5), attempt("A", 5, 5)]
    # avg 50 -> 35.0, last seen index 1 -> recency 1
    assert topic_weights(history)["A"] == pytest.approx(37.0)


def test_zero_question_attempt_counts_as_zero_percent(attempt):
    weights = topic_weights([attempt("A", 0, 0)])
    assert weights["A"] == pytest.approx(72.0)
    assert recommend([attempt("A", 0, 0)]).recommendation == "A"


def _tied_history(attempt, first, last):
    # first: 0 * 0.7 + 8 * 2.0 = 16; last: 20 * 0.7 + 1 * 2.0 = 16
    fillers = [attempt(f"F{i}", 5, 5) for i in range(6)]
    return [attempt(first, 5, 5), *fillers, attempt(last, 4, 5)]


@pytest.mark.parametrize("first, last", [("A", "B"), ("B", "A")])
def test_tie_keeps_first_topic(attempt, first, last):
    history = _tied_history(attempt, first, last)
    weights = topic_weights(history)

    assert weights[first] == weights[last] == pytest.approx(16.0)
    assert recommend(history).recommendation == first


def test_no_selectable_topic_falls_back(attempt, monkeypatch):
    monkeypatch.setattr(recommender, "topic_weights", lambda history: {})
    result = recommend([attempt("A", 1, 5)])
    assert result.to_dict() == {
        "recommendation": "General Knowledge",
        "reason": "Start your journey!",
    }
