"""Ledger Manager - Completion record mutations.

ARCHITECTURE:
- LedgerManager owns writes to the per-habit ledgers
- Record arithmetic via LedgerEngine (pure)
- Emits CompletionToggled after the write is committed and persisted
- Never recomputes streaks or goal progress itself; dependents react to events
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from .. import const
from ..engines.ledger_engine import LedgerEngine
from ..event_bus import CompletionToggled
from .base_manager import BaseManager

if TYPE_CHECKING:
    from datetime import date

    from ..type_defs import CompletionRecordData


class LedgerManager(BaseManager):
    """Manager for completion records.

    Responsibilities:
    - Toggle the single record of a (habit, date)
    - Explicitly set a record's state, value and notes
    - Drop a habit's ledger when the habit is deleted
    """

    def toggle(self, habit_id: str, day: date) -> CompletionRecordData:
        """Toggle completion of ``habit_id`` on ``day``.

        Raises:
            HabitNotFoundError: Unknown habit.

        Returns:
            Copy of the resulting record.
        """
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            ledger = self.coordinator.ledger_for(habit_id)
            record = LedgerEngine.toggle(ledger, habit_id, day)
            result = copy.deepcopy(record)

        const.LOGGER.debug(
            "DEBUG: Toggled habit %s on %s -> completed=%s",
            habit_id,
            day.isoformat(),
            result[const.DATA_COMPLETION_COMPLETED],
        )
        self.coordinator.persist()
        self.emit(
            CompletionToggled(
                habit_id=habit_id,
                goal_id=habit.get(const.DATA_HABIT_GOAL_ID),
                date=day.isoformat(),
                completed=result[const.DATA_COMPLETION_COMPLETED],
            )
        )
        return result

    def record(
        self,
        habit_id: str,
        day: date,
        *,
        completed: bool = True,
        value: float | None = None,
        notes: str | None = None,
    ) -> CompletionRecordData:
        """Set the record of ``habit_id`` on ``day`` to an explicit state.

        Raises:
            HabitNotFoundError: Unknown habit.
        """
        with self.coordinator.lock:
            habit = self.coordinator.get_habit_data(habit_id)
            ledger = self.coordinator.ledger_for(habit_id)
            record = LedgerEngine.upsert(
                ledger,
                habit_id,
                day,
                completed=completed,
                value=value,
                notes=notes,
            )
            result = copy.deepcopy(record)

        self.coordinator.persist()
        self.emit(
            CompletionToggled(
                habit_id=habit_id,
                goal_id=habit.get(const.DATA_HABIT_GOAL_ID),
                date=day.isoformat(),
                completed=completed,
            )
        )
        return result

    def drop_ledger(self, habit_id: str) -> int:
        """Remove every record of ``habit_id``. Caller holds the lock.

        Returns:
            Number of records removed.
        """
        removed = self.coordinator.completions_data.pop(habit_id, {})
        return len(removed)
