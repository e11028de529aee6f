"""
Bounded FIFO study plan.

The caller owns the queue: each call takes the current queue and returns the
next one. Nothing is retained between calls.
"""

import logging
from collections.abc import Sequence

from learnalytics.domain.analytics.models import StudyOperation
from learnalytics.domain.constants import MAX_QUEUE_SIZE

logger = logging.getLogger(__name__)


def apply_queue_operation(
    queue: Sequence[str] | None,
    operation: StudyOperation | str,
    topic: str | None = None,
    capacity: int = MAX_QUEUE_SIZE,
) -> list[str]:
    """
    Apply one operation to a study queue and return the resulting queue.

    Args:
        queue: Current queue, front first. ``None`` is treated as empty.
        operation: ``enqueue``, ``dequeue`` or ``remove``.
        topic: Topic to enqueue or remove.
        capacity: Maximum queue length; enqueueing onto a full queue is a no-op.

    Returns:
        A new list. Unknown operations and missing topics leave it unchanged.
    """
    result = list(queue or [])

    try:
        op = StudyOperation(operation)
    except ValueError:
        logger.debug(f"Ignoring unknown queue operation {operation!r}")
        return result

    if op is StudyOperation.ENQUEUE:
        if not topic:
            return result
        if len(result) < capacity:
            result.append(topic)
        else:
            logger.debug(f"Queue at capacity ({capacity}); dropping {topic!r}")

    elif op is StudyOperation.DEQUEUE:
        if result:
            result.pop(0)

    elif op is StudyOperation.REMOVE:
        # Only the first occurrence; later duplicates stay queued.
        if topic and topic in result:
            result.remove(topic)

    return result
