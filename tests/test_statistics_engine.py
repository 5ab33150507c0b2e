"""Tests for StatisticsEngine.

Tests cover:
- Completion rate over trailing windows (rounding, required days, zero guard)
- Total completions
- Day-by-day progress rows
- Monthly record listing
"""

from __future__ import annotations

from datetime import date

import pytest

from habitstreaks import const
from habitstreaks.engines.statistics_engine import StatisticsEngine
from habitstreaks.frequency import CustomFrequency, DailyFrequency, WeeklyFrequency

TODAY = date(2026, 1, 21)  # Wednesday
MON_WED = WeeklyFrequency(frozenset({"mon", "wed"}))


def jan(day: int) -> date:
    return date(2026, 1, day)


class TestCompletionRate:
    """Percentage of required days completed in a trailing window."""

    def test_daily_window(self, make_ledger) -> None:
        """Window covers Jan 15..21 inclusive: 5 of 7 days."""
        ledger = make_ledger(completed=[jan(15), jan(16), jan(17), jan(19), jan(21)])
        stats = StatisticsEngine(DailyFrequency(), ledger)
        assert stats.completion_rate(7, TODAY) == 71

    def test_round_half_up(self, make_ledger) -> None:
        """5 of 8 is 62.5% and rounds to 63."""
        ledger = make_ledger(completed=[jan(d) for d in (14, 15, 16, 17, 18)])
        stats = StatisticsEngine(DailyFrequency(), ledger)
        assert stats.completion_rate(8, TODAY) == 63

    def test_weekly_counts_required_days_only(self, make_ledger) -> None:
        """Jan 8..21 holds Mon 12, Wed 14, Mon 19, Wed 21; Tuesday is ignored."""
        ledger = make_ledger(completed=[jan(12), jan(19), jan(20)])
        stats = StatisticsEngine(MON_WED, ledger)
        assert stats.completion_rate(14, TODAY) == 50

    def test_records_outside_window_ignored(self, make_ledger) -> None:
        ledger = make_ledger(completed=[jan(1), jan(2), jan(21), jan(22)])
        stats = StatisticsEngine(DailyFrequency(), ledger)
        assert stats.completion_rate(2, TODAY) == 50

    def test_missed_records_count_as_not_done(self, make_ledger) -> None:
        ledger = make_ledger(completed=[jan(20)], missed=[jan(21)])
        stats = StatisticsEngine(DailyFrequency(), ledger)
        assert stats.completion_rate(2, TODAY) == 50

    def test_custom_treats_every_day_as_required(self, make_ledger) -> None:
        ledger = make_ledger(completed=[jan(18), jan(20)])
        stats = StatisticsEngine(CustomFrequency(times=2, period="week"), ledger)
        assert stats.completion_rate(4, TODAY) == 50

    def test_no_required_days(self, make_ledger) -> None:
        """Saturday-only habit over Mon..Wed: nothing required, rate 0."""
        ledger = make_ledger(completed=[jan(19), jan(20), jan(21)])
        stats = StatisticsEngine(WeeklyFrequency(frozenset({"sat"})), ledger)
        assert stats.completion_rate(3, TODAY) == 0

    @pytest.mark.parametrize("window", [0, -5])
    def test_non_positive_window(self, make_ledger, window: int) -> None:
        stats = StatisticsEngine(DailyFrequency(), make_ledger(completed=[TODAY]))
        assert stats.completion_rate(window, TODAY) == 0

    def test_empty_ledger(self) -> None:
        assert StatisticsEngine(DailyFrequency(), {}).completion_rate(30, TODAY) == 0

    def test_window_past_date_min_is_clamped(self, make_ledger) -> None:
        """A huge window starts at date.min: Jan 1..10 of year 1, 5 of 10 done."""
        year_one = date(1, 1, 10)
        ledger = make_ledger(completed=[date(1, 1, day) for day in range(1, 6)])
        stats = StatisticsEngine(DailyFrequency(), ledger)
        assert stats.completion_rate(1_000_000, year_one) == 50
        assert len(stats.recent_progress(year_one, 1_000_000)) == 10


class TestTotals:
    def test_total_completions(self, make_ledger) -> None:
        ledger = make_ledger(completed=[jan(1), jan(5)], missed=[jan(3)])
        assert StatisticsEngine(DailyFrequency(), ledger).total_completions() == 2


class TestProgressViews:
    """Day rows and monthly listings."""

    def test_recent_progress_rows(self, make_ledger) -> None:
        ledger = make_ledger(completed=[jan(12), jan(21)])
        ledger["2026-01-21"][const.DATA_COMPLETION_VALUE] = 4.0
        rows = StatisticsEngine(MON_WED, ledger).recent_progress(TODAY, 14)

        assert len(rows) == 14
        assert rows[0][const.PROGRESS_DATE] == "2026-01-08"
        assert rows[-1] == {
            const.PROGRESS_DATE: "2026-01-21",
            const.PROGRESS_COMPLETED: True,
            const.PROGRESS_IS_TODAY: True,
            const.PROGRESS_IS_REQUIRED: True,
            const.PROGRESS_VALUE: 4.0,
        }
        monday = rows[4]
        assert monday[const.PROGRESS_DATE] == "2026-01-12"
        assert monday[const.PROGRESS_COMPLETED] is True
        assert monday[const.PROGRESS_IS_TODAY] is False
        assert rows[5][const.PROGRESS_IS_REQUIRED] is False  # Tuesday

    def test_recent_progress_empty_window(self) -> None:
        assert StatisticsEngine(DailyFrequency(), {}).recent_progress(TODAY, 0) == []

    def test_monthly_records(self, make_ledger) -> None:
        ledger = make_ledger(
            completed=[date(2025, 12, 31), jan(9), jan(2), date(2026, 2, 1)],
            missed=[jan(5)],
        )
        records = StatisticsEngine(DailyFrequency(), ledger).monthly_records(TODAY)
        assert records == [
            {"date": "2026-01-02", "completed": True},
            {"date": "2026-01-05", "completed": False},
            {"date": "2026-01-09", "completed": True},
        ]
