"""Statistics Manager - Read-only streak, rate and progress queries.

Every query is derived from the ledger on demand; nothing computed here is
cached or persisted, so a toggle or a frequency change is reflected on the
very next call.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..engines.statistics_engine import StatisticsEngine
from ..frequency import frequency_from_habit
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import (
        CompletionRecordData,
        DayCompletion,
        StreakContext,
        StreakValue,
    )


class StatisticsManager(BaseManager):
    """Queries over one habit's ledger under its current frequency."""

    def _engine(self, habit_id: str) -> StatisticsEngine:
        # Caller holds the lock
        habit = self.coordinator.get_habit_data(habit_id)
        return StatisticsEngine(
            frequency_from_habit(habit),
            self.coordinator.ledger_for(habit_id),
            self.coordinator.config.engine.max_lookback_days,
        )

    # =========================================================================
    # Streaks
    # =========================================================================

    def current_streak(self, habit_id: str, today: date) -> StreakValue:
        """Current streak with unit and label."""
        with self.coordinator.lock:
            return self._engine(habit_id).streaks.current_streak_value(today)

    def best_streak(self, habit_id: str, today: date) -> int:
        """Longest streak in the ledger under the current frequency."""
        with self.coordinator.lock:
            return self._engine(habit_id).streaks.best_streak(today)

    def total_streak_context(self, habit_id: str, today: date) -> StreakContext:
        """Current streak plus the streaks recorded at each frequency change.

        Historical values are shown for context only; they may mix units
        when the habit changed between daily and period-based rules.
        """
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            current = self._engine(habit_id).streaks.current_streak_value(today)
            historical = 0
            for change in habit.get(const.DATA_HABIT_FREQUENCY_HISTORY) or []:
                streak = change.get(const.DATA_FREQUENCY_CHANGE_STREAK) or {}
                historical += int(streak.get(const.DATA_STREAK_VALUE) or 0)

        label = current[const.DATA_STREAK_LABEL]
        if historical > 0:
            label = f"{label} ({historical} total)"
        return {
            const.DATA_STREAK_CONTEXT_CURRENT: current[const.DATA_STREAK_VALUE],  # type: ignore[typeddict-item]
            const.DATA_STREAK_CONTEXT_HISTORICAL: historical,
            const.DATA_STREAK_LABEL: label,
        }

    # =========================================================================
    # Rates and Counts
    # =========================================================================

    def completion_rate(self, habit_id: str, window_days: int, today: date) -> int:
        with self.coordinator.lock:
            return self._engine(habit_id).completion_rate(window_days, today)

    def is_required_day(self, habit_id: str, day: date) -> bool:
        with self.coordinator.lock:
            return self._engine(habit_id).streaks.is_required_day(day)

    def total_completions(self, habit_id: str) -> int:
        with self.coordinator.lock:
            return self._engine(habit_id).total_completions()

    # =========================================================================
    # Ledger Views
    # =========================================================================

    def completions(self, habit_id: str) -> list[CompletionRecordData]:
        """All records of the habit, date-ordered, as copies."""
        with self.coordinator.lock:
            self.coordinator.get_habit_data(habit_id)
            ledger = self.coordinator.ledger_for(habit_id)
            return [dict(record) for _, record in sorted(ledger.items())]  # type: ignore[misc]

    def is_completed_on(self, habit_id: str, day: date) -> bool:
        with self.coordinator.lock:
            self.coordinator.get_habit_data(habit_id)
            record = self.coordinator.ledger_for(habit_id).get(day.isoformat())
            return bool(record and record.get(const.DATA_COMPLETION_COMPLETED))

    def monthly_progress(self, habit_id: str, today: date) -> list[dict[str, object]]:
        with self.coordinator.lock:
            return self._engine(habit_id).monthly_records(today)

    def recent_progress(
        self, habit_id: str, today: date, days: int
    ) -> list[DayCompletion]:
        with self.coordinator.lock:
            return self._engine(habit_id).recent_progress(today, days)
