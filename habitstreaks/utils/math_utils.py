# File: utils/math_utils.py
"""Math and calculation utilities for HabitStreaks.

Functions:
    - round_half_up: Round .5 away from zero (not banker's rounding)
    - calculate_percentage: Integer percentage with division-by-zero guard
    - average: Mean of a sequence, 0 when empty
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's built-in round() uses banker's rounding (round(2.5) == 2), which
    makes completion rates such as 5/8 -> 62.5% come out inconsistently.

    Examples:
        round_half_up(62.5) → 63
        round_half_up(33.333) → 33
        round_half_up(0.5) → 1
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_percentage(current: float, target: float) -> int:
    """Calculate an integer percentage clamped to 0..100.

    Args:
        current: Achieved count
        target: Total count

    Returns:
        Percentage (0-100), or 0 if target is 0

    Examples:
        calculate_percentage(30, 30) → 100
        calculate_percentage(1, 3) → 33
        calculate_percentage(5, 0) → 0  # Division by zero protection
    """
    if target <= 0:
        return 0
    percentage = round_half_up((current / target) * 100)
    return max(0, min(100, percentage))


def average(values: Sequence[float]) -> int:
    """Return the rounded mean of ``values``, or 0 for an empty sequence."""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))
