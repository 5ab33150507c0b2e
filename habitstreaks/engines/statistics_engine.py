"""Statistics Engine - Completion rates and day-by-day progress views.

Design Principles:
    - Stateless: operates on the frequency and ledger passed in
    - Total: empty ledgers and windows without required days yield 0, never
      an exception or NaN
    - Reference date is always an argument; nothing here reads the clock
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import days_before, end_of_period, iter_dates, start_of_period
from ..utils.math_utils import calculate_percentage
from .ledger_engine import LedgerView
from .streak_engine import StreakEngine

if TYPE_CHECKING:
    from ..frequency import FrequencyConfig
    from ..type_defs import CompletionRecordData, DayCompletion


class StatisticsEngine:
    """Completion statistics for one habit."""

    def __init__(
        self,
        frequency: FrequencyConfig,
        ledger: Mapping[str, CompletionRecordData],
        max_lookback_days: int = const.DEFAULT_MAX_LOOKBACK_DAYS,
    ) -> None:
        self._ledger = ledger
        self._view = LedgerView(ledger)
        self.streaks = StreakEngine(frequency, self._view, max_lookback_days)

    def completion_rate(self, window_days: int, today: date) -> int:
        """Percentage of required days completed in the trailing window.

        The window is the ``window_days`` dates ending at ``today`` inclusive.
        A window reaching past ``date.min`` starts at ``date.min``.

        Returns:
            Integer 0..100; 0 when the window holds no required day.
        """
        if window_days <= 0:
            return 0
        start = days_before(today, window_days - 1)
        required = 0
        completed = 0
        for day in iter_dates(start, today):
            if not self.streaks.is_required_day(day):
                continue
            required += 1
            if self._view.is_completed(day):
                completed += 1
        return calculate_percentage(completed, required)

    def total_completions(self) -> int:
        """Number of completed records in the whole ledger."""
        return len(self._view.completed_dates)

    def day_progress(self, start: date, end: date, today: date) -> list[DayCompletion]:
        """Build one DayCompletion row per date from ``start`` to ``end``."""
        rows: list[DayCompletion] = []
        for day in iter_dates(start, end):
            record = self._ledger.get(day.isoformat())
            rows.append(
                {
                    const.PROGRESS_DATE: day.isoformat(),  # type: ignore[typeddict-item]
                    const.PROGRESS_COMPLETED: self._view.is_completed(day),
                    const.PROGRESS_IS_TODAY: day == today,
                    const.PROGRESS_IS_REQUIRED: self.streaks.is_required_day(day),
                    const.PROGRESS_VALUE: record.get(const.DATA_COMPLETION_VALUE)
                    if record
                    else None,
                }
            )
        return rows

    def recent_progress(
        self, today: date, days: int = const.DEFAULT_PROGRESS_WINDOW_DAYS
    ) -> list[DayCompletion]:
        """Progress rows for the ``days`` dates ending at ``today``."""
        if days <= 0:
            return []
        return self.day_progress(days_before(today, days - 1), today, today)

    def monthly_records(self, today: date) -> list[dict[str, object]]:
        """Records dated within today's calendar month, date-ordered."""
        first_of_month = start_of_period(today, const.PERIOD_MONTH).isoformat()
        last_of_month = end_of_period(today, const.PERIOD_MONTH).isoformat()
        return [
            {
                const.DATA_COMPLETION_DATE: iso_day,
                const.DATA_COMPLETION_COMPLETED: bool(
                    record.get(const.DATA_COMPLETION_COMPLETED, False)
                ),
            }
            for iso_day, record in sorted(self._ledger.items())
            if first_of_month <= iso_day <= last_of_month
        ]
