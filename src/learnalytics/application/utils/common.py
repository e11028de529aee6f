import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding toward +infinity.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    which would turn a 50% attempt into a failed review.
    """
    return math.floor(value + 0.5)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator
