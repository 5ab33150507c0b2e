"""Tests for math_utils."""

from __future__ import annotations

import pytest

from habitstreaks.utils.math_utils import average, calculate_percentage, round_half_up


class TestRoundHalfUp:
    """Halves round up, unlike the built-in round()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(62.5, 63), (2.5, 3), (0.5, 1), (33.333, 33), (66.666, 67), (100.0, 100)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestPercentage:
    """Integer percentages with a zero-target guard."""

    def test_basic(self) -> None:
        assert calculate_percentage(5, 8) == 63
        assert calculate_percentage(1, 3) == 33
        assert calculate_percentage(30, 30) == 100

    def test_zero_target(self) -> None:
        assert calculate_percentage(5, 0) == 0

    def test_clamped(self) -> None:
        assert calculate_percentage(12, 10) == 100


class TestAverage:
    def test_empty(self) -> None:
        assert average([]) == 0

    def test_mean(self) -> None:
        assert average([100, 50, 75]) == 75
        assert average([50, 51]) == 51
