"""Streak Engine for HabitStreaks.

Computes current and best streaks for a habit under its active frequency:

- Daily: consecutive completed days walking back from today. Today without a
  record is skipped (not yet acted on); an explicit not-completed record,
  today included, ends the streak; any earlier day without a record ends it.
- Weekly: consecutive Sunday-Saturday weeks in which every selected weekday
  has a completed record.
- Custom: consecutive weeks or calendar months holding at least ``times``
  completed records.

For weekly and custom habits the period containing today is still open: when
it is satisfied it counts, when it is not it is skipped without ending the
streak. Only a closed period that failed its requirement stops the walk.

Walks are bounded below by the habit's earliest ledger date (nothing before
it can be satisfied) and by ``max_lookback_days``. Period boundaries are
derived from the reference date on every call.

IMPORTANT: This module must NOT import from coordinator.py or managers.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..frequency import CustomFrequency, DailyFrequency, WeeklyFrequency
from ..utils.dt_utils import (
    days_before,
    end_of_period,
    next_period_start,
    previous_period_start,
    start_of_period,
    weekday_token,
)
from .ledger_engine import LedgerView

if TYPE_CHECKING:
    from ..frequency import FrequencyConfig
    from ..type_defs import CompletionRecordData, StreakValue


class StreakEngine:
    """Streak calculation for one habit's configuration and ledger.

    The engine is a read-only view: it never mutates the ledger it was given.

    Example:
        engine = StreakEngine(WeeklyFrequency(frozenset({"mon", "wed"})), ledger)
        engine.current_streak(date(2026, 1, 21))   # -> 4
        engine.best_streak(date(2026, 1, 21))      # -> 9
    """

    def __init__(
        self,
        frequency: FrequencyConfig,
        ledger: Mapping[str, CompletionRecordData] | LedgerView,
        max_lookback_days: int = const.DEFAULT_MAX_LOOKBACK_DAYS,
    ) -> None:
        """Initialize the engine.

        Args:
            frequency: Active frequency configuration of the habit
            ledger: ISO date -> record mapping, or an already built LedgerView
            max_lookback_days: Hard bound on how far back walks may go
        """
        self.frequency = frequency
        self.view = ledger if isinstance(ledger, LedgerView) else LedgerView(ledger)
        self.max_lookback_days = max(1, int(max_lookback_days))

    # ────────────────────────────────────────────────────────────────
    # Required days and periods
    # ────────────────────────────────────────────────────────────────

    def is_required_day(self, day: date) -> bool:
        """Return True when the frequency expects an action on ``day``.

        Custom habits treat every day as eligible; their requirement is
        evaluated per period, so this only feeds completion-rate counts.
        """
        if isinstance(self.frequency, WeeklyFrequency):
            return weekday_token(day) in self.frequency.selected_days
        return True

    @property
    def period(self) -> str | None:
        """Evaluation period ("week"/"month"), or None for daily habits."""
        if isinstance(self.frequency, WeeklyFrequency):
            return const.PERIOD_WEEK
        if isinstance(self.frequency, CustomFrequency):
            return self.frequency.period
        return None

    def is_period_satisfied(self, period_start: date) -> bool:
        """Return True when the period starting at ``period_start`` met its target.

        Weekly: every selected weekday of the week has a completed record.
        Custom: completed records inside the period reach ``times``.
        Daily: the single day is completed.
        """
        frequency = self.frequency
        if isinstance(frequency, WeeklyFrequency):
            return all(
                self.view.is_completed(period_start + timedelta(days=offset))
                for offset in frequency.weekday_offsets
            )
        if isinstance(frequency, CustomFrequency):
            period_end = end_of_period(period_start, frequency.period)
            return self.view.count_completed(period_start, period_end) >= frequency.times
        return self.view.is_completed(period_start)

    def _walk_floor(self, today: date) -> date | None:
        """Earliest date a backward walk may inspect, or None for an empty ledger."""
        if self.view.earliest is None:
            return None
        horizon = days_before(today, self.max_lookback_days)
        return max(self.view.earliest, horizon)

    # ────────────────────────────────────────────────────────────────
    # Current streak
    # ────────────────────────────────────────────────────────────────

    def current_streak(self, today: date) -> int:
        """Return the current streak count as of ``today``."""
        if isinstance(self.frequency, DailyFrequency):
            return self._current_daily_streak(today)
        return self._current_period_streak(today)

    def current_streak_value(self, today: date) -> StreakValue:
        """Return the current streak with its unit and label."""
        return self.streak_value(self.current_streak(today))

    def streak_value(self, value: int) -> StreakValue:
        """Wrap a count with the unit of this engine's frequency."""
        unit = self.frequency.unit
        return {
            const.DATA_STREAK_VALUE: value,  # type: ignore[typeddict-item]
            const.DATA_STREAK_UNIT: unit,
            const.DATA_STREAK_LABEL: f"{value} {unit}",
        }

    def _current_daily_streak(self, today: date) -> int:
        floor = self._walk_floor(today)
        if floor is None:
            return 0

        streak = 0
        day = today
        while day >= floor:
            state = self.view.state(day)
            if state is True:
                streak += 1
            elif state is False:
                break
            elif day != today:
                # Closed day with no record is a miss
                break
            if day == date.min:
                break
            day -= timedelta(days=1)
        return streak

    def _current_period_streak(self, today: date) -> int:
        period = self.period
        floor = self._walk_floor(today)
        if period is None or floor is None:
            return 0

        current_start = start_of_period(today, period)
        start = current_start
        streak = 0
        while end_of_period(start, period) >= floor:
            if self.is_period_satisfied(start):
                streak += 1
            elif start != current_start:
                break
            start = previous_period_start(start, period)
        return streak

    # ────────────────────────────────────────────────────────────────
    # Best streak
    # ────────────────────────────────────────────────────────────────

    def best_streak(self, today: date) -> int:
        """Return the longest streak in the ledger under the current frequency."""
        if isinstance(self.frequency, DailyFrequency):
            return self._best_daily_streak()
        return self._best_period_streak(today)

    def _best_daily_streak(self) -> int:
        best = 0
        run = 0
        previous: date | None = None
        for day in self.view.completed_dates:
            if previous is not None and day - previous == timedelta(days=1):
                run += 1
            else:
                run = 1
            best = max(best, run)
            previous = day
        return best

    def _best_period_streak(self, today: date) -> int:
        period = self.period
        floor = self._walk_floor(today)
        if period is None or floor is None:
            return 0

        current_start = start_of_period(today, period)
        start = start_of_period(floor, period)
        best = 0
        run = 0
        while start <= current_start:
            if self.is_period_satisfied(start):
                run += 1
                best = max(best, run)
            elif start != current_start:
                run = 0
            start = next_period_start(start, period)
        return best
