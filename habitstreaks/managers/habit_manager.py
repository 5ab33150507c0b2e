"""Habit Manager - Habit lifecycle and frequency-change tracking.

This manager handles:
- Create / update / delete of habits
- Goal links (the habit only stores an opaque goal id)
- Frequency changes: snapshot the streak under the outgoing rule, append an
  audit record, then swap in the new rule

ARCHITECTURE:
- Frequency fields are written ONLY by change_frequency() (and add_habit()
  for the initial rule); update_habit() rejects them
- Frequency history is append-only
- Events are emitted after the mutation is committed and persisted

Event Flow:
    HabitManager.change_frequency() -> emit(FrequencyChanged)
                                              |
            GoalProgressSubscriber <----------+
"""

from __future__ import annotations

import copy
from datetime import date
from typing import TYPE_CHECKING, Any
import uuid

from .. import const
from ..engines.streak_engine import StreakEngine
from ..event_bus import FrequencyChanged, HabitAdded, HabitDeleted, HabitUpdated
from ..exceptions import HabitStreaksError, InvalidHabitUpdateError
from ..frequency import (
    apply_frequency,
    build_frequency,
    frequency_from_habit,
    frequency_to_snapshot,
)
from ..utils.dt_utils import dt_now_iso
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..coordinator import HabitTrackerCoordinator
    from ..type_defs import FrequencyChangeData, HabitData
    from .ledger_manager import LedgerManager


class HabitManager(BaseManager):
    """Manager for habit definitions and their recurrence rules.

    NOT responsible for:
    - Completion records (delegated to LedgerManager)
    - Streak or rate queries (StatisticsManager)
    """

    def __init__(
        self, coordinator: HabitTrackerCoordinator, ledger_manager: LedgerManager
    ) -> None:
        super().__init__(coordinator)
        self._ledger = ledger_manager

    # =========================================================================
    # Create / Update / Delete
    # =========================================================================

    def add_habit(
        self,
        name: str,
        frequency: str = const.FREQUENCY_DAILY,
        selected_days: Iterable[str] | None = None,
        custom_frequency: dict[str, Any] | None = None,
        **fields: Any,
    ) -> str:
        """Create a habit and return its internal id.

        Args:
            name: Display name (required, non-blank)
            frequency: "daily", "weekly" or "custom"
            selected_days: Weekday tokens for weekly habits
            custom_frequency: {"times", "period"} for custom habits
            **fields: Optional editable fields (description, icon, color,
                      measurement_type, target_amount, target_unit, goal_id,
                      start_date)

        Raises:
            InvalidFrequencyError: Invalid frequency configuration.
            InvalidHabitUpdateError: Unknown extra fields.
        """
        self._validate_fields(fields)
        clean_name = self._validate_name(name)
        config = build_frequency(frequency, selected_days, custom_frequency)

        now_iso = dt_now_iso()
        habit_id = str(uuid.uuid4())
        habit: HabitData = {
            const.DATA_HABIT_ID: habit_id,  # type: ignore[typeddict-item]
            const.DATA_HABIT_NAME: clean_name,
            const.DATA_HABIT_ICON: const.DEFAULT_HABIT_ICON,
            const.DATA_HABIT_COLOR: const.DEFAULT_HABIT_COLOR,
            const.DATA_HABIT_MEASUREMENT_TYPE: const.MEASUREMENT_SIMPLE,
            const.DATA_HABIT_FREQUENCY_HISTORY: [],
            const.DATA_HABIT_CREATED_AT: now_iso,
            const.DATA_HABIT_UPDATED_AT: now_iso,
        }
        habit.update(fields)  # type: ignore[typeddict-item]
        apply_frequency(habit, config)

        with self.coordinator.lock:
            self.coordinator.habits_data[habit_id] = habit
            self.coordinator.completions_data[habit_id] = {}

        const.LOGGER.info("INFO: Added habit '%s' (%s, %s)", clean_name, habit_id, config.kind)
        self.coordinator.persist()
        self.emit(HabitAdded(habit_id=habit_id, goal_id=habit.get(const.DATA_HABIT_GOAL_ID)))
        return habit_id

    def update_habit(self, habit_id: str, **fields: Any) -> HabitData:
        """Update editable, non-frequency fields of a habit.

        Raises:
            HabitNotFoundError: Unknown habit.
            InvalidHabitUpdateError: Frequency or unknown fields supplied.
        """
        self._validate_fields(fields)
        if const.DATA_HABIT_NAME in fields:
            fields[const.DATA_HABIT_NAME] = self._validate_name(fields[const.DATA_HABIT_NAME])

        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            previous_goal_id = habit.get(const.DATA_HABIT_GOAL_ID)
            habit.update(fields)  # type: ignore[typeddict-item]
            habit[const.DATA_HABIT_UPDATED_AT] = dt_now_iso()
            result = copy.deepcopy(habit)

        self.coordinator.persist()
        self.emit(
            HabitUpdated(
                habit_id=habit_id,
                goal_id=result.get(const.DATA_HABIT_GOAL_ID),
                previous_goal_id=previous_goal_id,
                changed_fields=tuple(sorted(fields)),
            )
        )
        return result

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit together with its ledger.

        Raises:
            HabitNotFoundError: Unknown habit.
        """
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            del self.coordinator.habits_data[habit_id]
            removed = self._ledger.drop_ledger(habit_id)

        const.LOGGER.info(
            "INFO: Deleted habit '%s' (%s) and %s completion record(s)",
            habit.get(const.DATA_HABIT_NAME),
            habit_id,
            removed,
        )
        self.coordinator.persist()
        self.emit(HabitDeleted(habit_id=habit_id, goal_id=habit.get(const.DATA_HABIT_GOAL_ID)))

    def link_to_goal(self, habit_id: str, goal_id: str) -> HabitData:
        """Attach a goal id to the habit."""
        return self.update_habit(habit_id, **{const.DATA_HABIT_GOAL_ID: goal_id})

    def unlink_from_goal(self, habit_id: str, goal_id: str) -> HabitData:
        """Detach the habit from ``goal_id``; other links are left untouched."""
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            if habit.get(const.DATA_HABIT_GOAL_ID) != goal_id:
                return copy.deepcopy(habit)
            return self.update_habit(habit_id, **{const.DATA_HABIT_GOAL_ID: None})

    # =========================================================================
    # Frequency-Change Tracker
    # =========================================================================

    def change_frequency(
        self,
        habit_id: str,
        new_frequency: str,
        new_selected_days: Iterable[str] | None = None,
        new_custom_frequency: dict[str, Any] | None = None,
        reason: str | None = None,
        reference_date: date | None = None,
    ) -> FrequencyChangeData:
        """Replace a habit's recurrence rule, recording an audit snapshot first.

        Steps:
        1. Validate the target configuration (nothing is touched on failure)
        2. Compute the current streak under the outgoing configuration
        3. Append a FrequencyChange to the habit's history
        4. Apply the new configuration

        The ledger is never rewritten or segmented: every later query runs the
        new rule over the full, unmodified ledger. streak_at_change is context
        only and never feeds back into a numeric streak.

        Raises:
            HabitNotFoundError: Unknown habit.
            InvalidFrequencyError: Invalid target configuration.

        Returns:
            Copy of the appended FrequencyChange.
        """
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            new_config = build_frequency(
                new_frequency, new_selected_days, new_custom_frequency
            )

            previous_config = frequency_from_habit(habit)
            today = self.coordinator.today(reference_date)
            streak_at_change = StreakEngine(
                previous_config,
                self.coordinator.ledger_for(habit_id),
                self.coordinator.config.engine.max_lookback_days,
            ).current_streak_value(today)

            change: FrequencyChangeData = {
                const.DATA_FREQUENCY_CHANGE_ID: str(uuid.uuid4()),  # type: ignore[typeddict-item]
                const.DATA_FREQUENCY_CHANGE_DATE: dt_now_iso(),
                const.DATA_FREQUENCY_CHANGE_PREVIOUS: frequency_to_snapshot(previous_config),
                const.DATA_FREQUENCY_CHANGE_NEW: frequency_to_snapshot(new_config),
                const.DATA_FREQUENCY_CHANGE_STREAK: streak_at_change,
                const.DATA_FREQUENCY_CHANGE_REASON: reason,
            }
            history = habit.get(const.DATA_HABIT_FREQUENCY_HISTORY)
            if history is None:
                history = habit[const.DATA_HABIT_FREQUENCY_HISTORY] = []
            history.append(change)

            apply_frequency(habit, new_config)
            habit[const.DATA_HABIT_UPDATED_AT] = dt_now_iso()
            result = copy.deepcopy(change)

        const.LOGGER.info(
            "INFO: Habit %s frequency %s -> %s (streak at change: %s)",
            habit_id,
            previous_config.kind,
            new_config.kind,
            streak_at_change[const.DATA_STREAK_LABEL],
        )
        self.coordinator.persist()
        self.emit(
            FrequencyChanged(
                habit_id=habit_id,
                goal_id=habit.get(const.DATA_HABIT_GOAL_ID),
                change_id=result[const.DATA_FREQUENCY_CHANGE_ID],
                previous_frequency=dict(result[const.DATA_FREQUENCY_CHANGE_PREVIOUS]),
                new_frequency=dict(result[const.DATA_FREQUENCY_CHANGE_NEW]),
                streak_at_change=streak_at_change[const.DATA_STREAK_VALUE],
            )
        )
        return result

    def frequency_history(self, habit_id: str) -> list[FrequencyChangeData]:
        """Return a copy of the habit's frequency-change history (oldest first)."""
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            return copy.deepcopy(habit.get(const.DATA_HABIT_FREQUENCY_HISTORY) or [])

    # =========================================================================
    # Validation Helpers
    # =========================================================================

    @staticmethod
    def _validate_fields(fields: dict[str, Any]) -> None:
        rejected = sorted(
            key for key in fields if key not in const.HABIT_EDITABLE_FIELDS
        )
        if rejected:
            if any(key in const.HABIT_FREQUENCY_FIELDS for key in rejected):
                const.LOGGER.debug(
                    "DEBUG: Frequency fields %s must go through change_frequency()",
                    rejected,
                )
            raise InvalidHabitUpdateError(rejected)

    @staticmethod
    def _validate_name(name: Any) -> str:
        clean = " ".join(str(name or "").split())
        if not clean:
            raise HabitStreaksError(
                "Habit name must not be empty",
                translation_key=const.TRANS_KEY_ERROR_INVALID_HABIT_NAME,
            )
        return clean
