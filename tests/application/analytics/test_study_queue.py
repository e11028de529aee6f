from learnalytics.application.analytics.study_queue import apply_queue_operation
from learnalytics.domain.analytics.models import StudyOperation


def test_enqueue_appends_to_back():
    assert apply_queue_operation(["a"], "enqueue", "b") == ["a", "b"]


def test_enqueue_allows_duplicates():
    assert apply_queue_operation(["a"], "enqueue", "a") == ["a", "a"]


def test_enqueue_on_full_queue_is_noop():
    full = [f"topic-{i}" for i in range(100)]
    result = apply_queue_operation(full, "enqueue", "one-too-many")
    assert len(result) == 100
    assert result == full


def test_enqueue_respects_custom_capacity():
    assert apply_queue_operation(["a", "b"], "enqueue", "c", capacity=2) == ["a", "b"]


def test_dequeue_removes_front():
    assert apply_queue_operation(["a", "b", "c"], "dequeue") == ["b", "c"]


def test_dequeue_empty_is_noop():
    assert apply_queue_operation([], "dequeue") == []


def test_remove_only_first_occurrence():
    assert apply_queue_operation(["x", "y", "x"], "remove", "x") == ["y", "x"]


def test_remove_is_case_sensitive():
    assert apply_queue_operation(["X"], "remove", "x") == ["X"]


def test_remove_missing_topic_is_noop():
    assert apply_queue_operation(["a"], "remove", "b") == ["a"]


def test_unknown_operation_is_noop():
    assert apply_queue_operation(["a"], "shuffle", "b") == ["a"]


def test_missing_topic_is_noop():
    assert apply_queue_operation(["a"], "enqueue") == ["a"]
    assert apply_queue_operation(["a"], "remove", None) == ["a"]
    assert apply_queue_operation(["a"], "enqueue", "") == ["a"]


def test_none_queue_treated_as_empty():
    assert apply_queue_operation(None, "enqueue", "a") == ["a"]


def test_accepts_enum_operations():
    assert apply_queue_operation(["a", "b"], StudyOperation.DEQUEUE) == ["b"]


def test_callers_queue_not_mutated():
    queue = ["a", "b"]
    apply_queue_operation(queue, "enqueue", "c")
    apply_queue_operation(queue, "dequeue")
    apply_queue_operation(queue, "remove", "b")
    assert queue == ["a", "b"]


def test_returns_new_list_even_on_noop():
    queue = ["a"]
    result = apply_queue_operation(queue, "bogus")
    assert result == queue
    assert result is not queue
