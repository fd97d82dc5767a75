"""
Evaluation Utilities

Score rounding and aggregation helpers.
"""

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives.

    Python's round() uses banker's rounding (round(82.5) == 82); scores
    follow the conventional rule instead.

    Example:
        >>> round_half_up(82.5)
        83
    """
    return int(math.floor(value + 0.5))


def average_confidence(confidences: Iterable[float]) -> float:
    """Mean of confidence scores, 0.0 for an empty input."""
    values = list(confidences)
    return sum(values) / len(values) if values else 0.0
