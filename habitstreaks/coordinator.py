# File: coordinator.py
"""Coordinator for HabitStreaks.

Owns the habit and ledger collections, the store and the event bus, and
exposes the public API. Work is delegated:

- LedgerManager: toggle / record completions
- HabitManager: habit CRUD, goal links, frequency changes
- StatisticsManager: streaks, completion rates, progress views

Every mutation runs under a single re-entrant lock so concurrent callers
serialize (last write wins). Persistence and event delivery happen after the
in-memory mutation; their failures are logged and never roll it back.

Dates are validated here, at the boundary: callers pass ``datetime.date``
objects or strict ``YYYY-MM-DD`` strings, and every query accepts an optional
``reference_date`` standing in for "today".
"""

# pylint: disable=too-many-public-methods

from __future__ import annotations

import copy
from datetime import date
import threading
from typing import TYPE_CHECKING, Any

from . import const
from .config import HabitStreaksConfig
from .event_bus import EventBus
from .exceptions import HabitNotFoundError, InvalidDateError
from .managers import HabitManager, LedgerManager, StatisticsManager
from .store import HabitStreaksStore
from .utils.dt_utils import dt_parse_date, dt_today_local, set_default_timezone

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .type_defs import (
        CompletionRecordData,
        DayCompletion,
        FrequencyChangeData,
        HabitData,
        HabitLedger,
        StreakContext,
        StreakValue,
    )

DateInput = date | str


class HabitTrackerCoordinator:
    """Service object owning habits, ledgers, store and event bus."""

    def __init__(
        self,
        store: HabitStreaksStore | None = None,
        config: HabitStreaksConfig | None = None,
        bus: EventBus | None = None,
    ) -> None:
        """Initialize the coordinator and load persisted data.

        Args:
            store: Store to use; defaults to one at ``config.storage.path``
            config: Engine settings; defaults to HabitStreaksConfig()
            bus: Event bus; a private one is created when omitted
        """
        self.config = config or HabitStreaksConfig()
        self.store = store or HabitStreaksStore(self.config.storage.path)
        self.bus = bus or EventBus()
        self.lock = threading.RLock()

        set_default_timezone(self.config.engine.tzinfo)
        self.store.load()

        self.ledger_manager = LedgerManager(self)
        self.habit_manager = HabitManager(self, self.ledger_manager)
        self.statistics_manager = StatisticsManager(self)
        self._managers = (self.ledger_manager, self.habit_manager, self.statistics_manager)
        for manager in self._managers:
            manager.setup()

        const.LOGGER.info(
            "INFO: HabitStreaks coordinator ready with %s habit(s) from %s",
            len(self.habits_data),
            self.store.path,
        )

    # -------------------------------------------------------------------------------------
    # Data Access Helpers (used by managers; callers hold the lock)
    # -------------------------------------------------------------------------------------

    @property
    def habits_data(self) -> dict[str, HabitData]:
        """Habit id -> habit, live."""
        return self.store.data.setdefault(const.DATA_HABITS, {})

    @property
    def completions_data(self) -> dict[str, HabitLedger]:
        """Habit id -> ledger, live."""
        return self.store.data.setdefault(const.DATA_COMPLETIONS, {})

    def get_habit_data(self, habit_id: str) -> HabitData:
        """Return the live habit dict.

        Raises:
            HabitNotFoundError: Unknown habit.
        """
        habit = self.habits_data.get(habit_id)
        if habit is None:
            raise HabitNotFoundError(habit_id)
        return habit

    def ledger_for(self, habit_id: str) -> HabitLedger:
        """Return the live ledger of a habit, creating an empty one if missing."""
        return self.completions_data.setdefault(habit_id, {})

    def persist(self) -> None:
        """Save the store; a failed save is logged by the store."""
        # Serialized with mutations so the JSON dump never sees a dict mid-change
        with self.lock:
            saved = self.store.save()
        if not saved:
            const.LOGGER.warning(
                "WARNING: Changes are kept in memory but were not written to %s",
                self.store.path,
            )

    @staticmethod
    def parse_date(value: DateInput) -> date:
        """Validate a date argument.

        Raises:
            InvalidDateError: Not a date or strict ISO date string.
        """
        parsed = dt_parse_date(value)  # type: ignore[arg-type]
        if parsed is None:
            raise InvalidDateError(value)
        return parsed

    def today(self, reference_date: DateInput | None = None) -> date:
        """Resolve "today": the reference date when given, else the local date."""
        if reference_date is None:
            return dt_today_local(self.config.engine.tzinfo)
        return self.parse_date(reference_date)

    def shutdown(self) -> None:
        """Drop manager subscriptions."""
        for manager in self._managers:
            manager.shutdown()

    # -------------------------------------------------------------------------------------
    # Completion Ledger
    # -------------------------------------------------------------------------------------

    def toggle_completion(self, habit_id: str, day: DateInput) -> CompletionRecordData:
        """Flip the completion state of ``habit_id`` on ``day``."""
        return self.ledger_manager.toggle(habit_id, self.parse_date(day))

    def record_completion(
        self,
        habit_id: str,
        day: DateInput,
        completed: bool = True,
        value: float | None = None,
        notes: str | None = None,
    ) -> CompletionRecordData:
        """Set the record of ``habit_id`` on ``day`` to an explicit state."""
        return self.ledger_manager.record(
            habit_id,
            self.parse_date(day),
            completed=completed,
            value=value,
            notes=notes,
        )

    # -------------------------------------------------------------------------------------
    # Habit CRUD
    # -------------------------------------------------------------------------------------

    def add_habit(
        self,
        name: str,
        frequency: str = const.FREQUENCY_DAILY,
        selected_days: Iterable[str] | None = None,
        custom_frequency: dict[str, Any] | None = None,
        **fields: Any,
    ) -> str:
        """Create a habit; returns its id."""
        return self.habit_manager.add_habit(
            name, frequency, selected_days, custom_frequency, **fields
        )

    def update_habit(self, habit_id: str, **fields: Any) -> HabitData:
        """Update non-frequency fields; frequency goes through change_frequency()."""
        return self.habit_manager.update_habit(habit_id, **fields)

    def delete_habit(self, habit_id: str) -> None:
        self.habit_manager.delete_habit(habit_id)

    def get_habit(self, habit_id: str) -> HabitData:
        """Return a copy of the habit."""
        with self.lock:
            return copy.deepcopy(self.get_habit_data(habit_id))

    def list_habits(self) -> list[HabitData]:
        """Return copies of all habits ordered by name."""
        with self.lock:
            habits = copy.deepcopy(list(self.habits_data.values()))
        return sorted(habits, key=lambda habit: habit.get(const.DATA_HABIT_NAME, ""))

    def link_habit_to_goal(self, habit_id: str, goal_id: str) -> HabitData:
        return self.habit_manager.link_to_goal(habit_id, goal_id)

    def unlink_habit_from_goal(self, habit_id: str, goal_id: str) -> HabitData:
        return self.habit_manager.unlink_from_goal(habit_id, goal_id)

    def get_habits_by_goal(self, goal_id: str) -> list[HabitData]:
        """Return copies of the habits linked to ``goal_id``."""
        with self.lock:
            return [
                copy.deepcopy(habit)
                for habit in self.habits_data.values()
                if habit.get(const.DATA_HABIT_GOAL_ID) == goal_id
            ]

    # -------------------------------------------------------------------------------------
    # Frequency Changes
    # -------------------------------------------------------------------------------------

    def change_frequency(
        self,
        habit_id: str,
        new_frequency: str,
        new_selected_days: Iterable[str] | None = None,
        new_custom_frequency: dict[str, Any] | None = None,
        reason: str | None = None,
        reference_date: DateInput | None = None,
    ) -> FrequencyChangeData:
        """Replace the habit's frequency, recording the streak it had."""
        return self.habit_manager.change_frequency(
            habit_id,
            new_frequency,
            new_selected_days,
            new_custom_frequency,
            reason=reason,
            reference_date=self.today(reference_date),
        )

    def frequency_history(self, habit_id: str) -> list[FrequencyChangeData]:
        return self.habit_manager.frequency_history(habit_id)

    # -------------------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------------------

    def current_streak(
        self, habit_id: str, reference_date: DateInput | None = None
    ) -> StreakValue:
        """Current streak as {value, unit, label}."""
        return self.statistics_manager.current_streak(
            habit_id, self.today(reference_date)
        )

    def best_streak(self, habit_id: str, reference_date: DateInput | None = None) -> int:
        return self.statistics_manager.best_streak(habit_id, self.today(reference_date))

    def completion_rate(
        self,
        habit_id: str,
        window_days: int | None = None,
        reference_date: DateInput | None = None,
    ) -> int:
        """Percentage (0..100) of required days completed in the trailing window."""
        if window_days is None:
            window_days = self.config.engine.completion_rate_window
        return self.statistics_manager.completion_rate(
            habit_id, window_days, self.today(reference_date)
        )

    def is_required_day(self, habit_id: str, day: DateInput) -> bool:
        return self.statistics_manager.is_required_day(habit_id, self.parse_date(day))

    def get_total_streak_context(
        self, habit_id: str, reference_date: DateInput | None = None
    ) -> StreakContext:
        return self.statistics_manager.total_streak_context(
            habit_id, self.today(reference_date)
        )

    def get_habit_completions(self, habit_id: str) -> list[CompletionRecordData]:
        return self.statistics_manager.completions(habit_id)

    def is_completed_on_date(self, habit_id: str, day: DateInput) -> bool:
        return self.statistics_manager.is_completed_on(habit_id, self.parse_date(day))

    def is_completed_today(
        self, habit_id: str, reference_date: DateInput | None = None
    ) -> bool:
        return self.statistics_manager.is_completed_on(
            habit_id, self.today(reference_date)
        )

    def get_total_completions(self, habit_id: str) -> int:
        return self.statistics_manager.total_completions(habit_id)

    def get_monthly_progress(
        self, habit_id: str, reference_date: DateInput | None = None
    ) -> list[dict[str, object]]:
        """Records of the reference month as [{date, completed}], date-ordered."""
        return self.statistics_manager.monthly_progress(
            habit_id, self.today(reference_date)
        )

    def get_last_two_weeks_progress(
        self, habit_id: str, reference_date: DateInput | None = None
    ) -> list[DayCompletion]:
        """Day rows for the progress window (14 days by default) ending today."""
        return self.statistics_manager.recent_progress(
            habit_id,
            self.today(reference_date),
            self.config.engine.progress_window_days,
        )
