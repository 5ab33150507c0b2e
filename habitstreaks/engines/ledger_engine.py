"""Ledger Engine - Pure logic for completion records.

This engine provides stateless functions for:
- Creating completion records
- Toggling / upserting the single record of a (habit, date)
- Building a read-only LedgerView for the streak and statistics engines

ARCHITECTURE: This is a pure logic engine. It operates on the per-habit
ledger dict passed in (ISO date -> record) and never persists anything.
State management and event emission belong in LedgerManager.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING
import uuid

from .. import const
from ..utils.dt_utils import dt_now_iso

if TYPE_CHECKING:
    from ..type_defs import CompletionRecordData, HabitLedger


class LedgerView:
    """Read-only, date-indexed snapshot of one habit's ledger.

    Built once per query so the backward walks do O(1) date lookups instead
    of scanning the record list on every step.
    """

    __slots__ = ("_completed", "_completed_sorted", "_states", "earliest", "latest")

    def __init__(self, ledger: Mapping[str, CompletionRecordData]) -> None:
        """Index the ledger.

        Args:
            ledger: ISO date -> CompletionRecordData for a single habit.
                    Keys are assumed to be pre-validated ISO dates.
        """
        states: dict[date, bool] = {}
        for iso_day, record in ledger.items():
            states[date.fromisoformat(iso_day)] = bool(
                record.get(const.DATA_COMPLETION_COMPLETED, False)
            )
        self._states = states
        self._completed = {day for day, done in states.items() if done}
        self._completed_sorted = sorted(self._completed)
        self.earliest: date | None = min(states) if states else None
        self.latest: date | None = max(states) if states else None

    def __len__(self) -> int:
        return len(self._states)

    @property
    def is_empty(self) -> bool:
        """True when the habit has no records at all."""
        return not self._states

    @property
    def completed_dates(self) -> list[date]:
        """Dates with a completed record, ascending."""
        return list(self._completed_sorted)

    def state(self, day: date) -> bool | None:
        """Return True/False for a recorded day, None when no record exists."""
        return self._states.get(day)

    def is_completed(self, day: date) -> bool:
        """True when the day has a record with completed=True."""
        return day in self._completed

    def count_completed(self, start: date, end: date) -> int:
        """Count completed records with start <= date <= end."""
        if end < start:
            return 0
        lo = bisect_left(self._completed_sorted, start)
        hi = bisect_right(self._completed_sorted, end)
        return hi - lo


class LedgerEngine:
    """Pure logic for completion record creation and mutation.

    All methods are static - no instance state.
    """

    @staticmethod
    def create_record(
        habit_id: str,
        day: date,
        *,
        completed: bool = True,
        value: float | None = None,
        notes: str | None = None,
        now_iso: str | None = None,
    ) -> CompletionRecordData:
        """Create a new completion record.

        Args:
            habit_id: Owning habit
            day: Calendar date of the record
            completed: Initial completed flag
            value: Optional measured amount (count/time habits)
            notes: Optional free text
            now_iso: Timestamp override for deterministic tests

        Returns:
            CompletionRecordData with completed_at set only when completed.
        """
        record: CompletionRecordData = {
            const.DATA_COMPLETION_ID: str(uuid.uuid4()),
            const.DATA_COMPLETION_HABIT_ID: habit_id,
            const.DATA_COMPLETION_DATE: day.isoformat(),
            const.DATA_COMPLETION_COMPLETED: completed,
            const.DATA_COMPLETION_COMPLETED_AT: (now_iso or dt_now_iso())
            if completed
            else None,
        }
        if value is not None:
            record[const.DATA_COMPLETION_VALUE] = value
        if notes is not None:
            record[const.DATA_COMPLETION_NOTES] = notes
        return record

    @staticmethod
    def toggle(
        ledger: HabitLedger,
        habit_id: str,
        day: date,
        now_iso: str | None = None,
    ) -> CompletionRecordData:
        """Toggle the record for ``day``, creating it as completed if missing.

        Modifies ``ledger`` in place. An existing record is flipped, never
        removed, so later queries see an explicit False rather than a hole.
        completed_at is refreshed when the record becomes completed and
        cleared when it becomes not completed.

        Returns:
            The created or updated record (same object stored in ledger).
        """
        iso_day = day.isoformat()
        record = ledger.get(iso_day)
        if record is None:
            record = LedgerEngine.create_record(habit_id, day, now_iso=now_iso)
            ledger[iso_day] = record
            return record

        completed = not record.get(const.DATA_COMPLETION_COMPLETED, False)
        record[const.DATA_COMPLETION_COMPLETED] = completed
        record[const.DATA_COMPLETION_COMPLETED_AT] = (
            (now_iso or dt_now_iso()) if completed else None
        )
        return record

    @staticmethod
    def upsert(
        ledger: HabitLedger,
        habit_id: str,
        day: date,
        *,
        completed: bool = True,
        value: float | None = None,
        notes: str | None = None,
        now_iso: str | None = None,
    ) -> CompletionRecordData:
        """Set the record for ``day`` to an explicit state.

        Modifies ``ledger`` in place. The record id is kept when the record
        already exists; value/notes are only overwritten when provided.
        """
        iso_day = day.isoformat()
        record = ledger.get(iso_day)
        if record is None:
            record = LedgerEngine.create_record(
                habit_id,
                day,
                completed=completed,
                value=value,
                notes=notes,
                now_iso=now_iso,
            )
            ledger[iso_day] = record
            return record

        was_completed = bool(record.get(const.DATA_COMPLETION_COMPLETED, False))
        record[const.DATA_COMPLETION_COMPLETED] = completed
        if completed and not was_completed:
            record[const.DATA_COMPLETION_COMPLETED_AT] = now_iso or dt_now_iso()
        elif not completed:
            record[const.DATA_COMPLETION_COMPLETED_AT] = None
        if value is not None:
            record[const.DATA_COMPLETION_VALUE] = value
        if notes is not None:
            record[const.DATA_COMPLETION_NOTES] = notes
        return record

    @staticmethod
    def view(ledger: Mapping[str, CompletionRecordData]) -> LedgerView:
        """Build a LedgerView over ``ledger``."""
        return LedgerView(ledger)
