"""Tests for LedgerEngine and LedgerView - pure logic, no storage needed."""

from __future__ import annotations

from datetime import date
from typing import Any

from habitstreaks import const
from habitstreaks.engines.ledger_engine import LedgerEngine, LedgerView

NOW = "2026-01-21T08:00:00+00:00"
LATER = "2026-01-21T09:30:00+00:00"
DAY = date(2026, 1, 21)


class TestToggle:
    """Toggle semantics of the single record per (habit, date)."""

    def test_first_toggle_creates_completed_record(self) -> None:
        ledger: dict[str, Any] = {}
        record = LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=NOW)

        assert ledger == {"2026-01-21": record}
        assert record[const.DATA_COMPLETION_COMPLETED] is True
        assert record[const.DATA_COMPLETION_COMPLETED_AT] == NOW
        assert record[const.DATA_COMPLETION_HABIT_ID] == "habit-1"
        assert record[const.DATA_COMPLETION_DATE] == "2026-01-21"

    def test_second_toggle_flips_without_deleting(self) -> None:
        """The record stays, marked not completed, with completed_at cleared."""
        ledger: dict[str, Any] = {}
        first = LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=NOW)
        second = LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=LATER)

        assert second is first
        assert len(ledger) == 1
        assert second[const.DATA_COMPLETION_COMPLETED] is False
        assert second[const.DATA_COMPLETION_COMPLETED_AT] is None

    def test_toggle_twice_restores_state(self, make_ledger) -> None:
        """Toggling twice is an involution on completed."""
        ledger = make_ledger(missed=[DAY])
        LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=NOW)
        assert ledger["2026-01-21"][const.DATA_COMPLETION_COMPLETED] is True
        LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=LATER)
        assert ledger["2026-01-21"][const.DATA_COMPLETION_COMPLETED] is False

    def test_recompletion_refreshes_completed_at(self) -> None:
        ledger: dict[str, Any] = {}
        LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=NOW)
        LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=NOW)
        record = LedgerEngine.toggle(ledger, "habit-1", DAY, now_iso=LATER)
        assert record[const.DATA_COMPLETION_COMPLETED_AT] == LATER

    def test_record_id_is_stable(self) -> None:
        ledger: dict[str, Any] = {}
        record_id = LedgerEngine.toggle(ledger, "habit-1", DAY)[const.DATA_COMPLETION_ID]
        LedgerEngine.toggle(ledger, "habit-1", DAY)
        assert ledger["2026-01-21"][const.DATA_COMPLETION_ID] == record_id


class TestUpsert:
    """Explicit record state for measured habits."""

    def test_creates_with_value_and_notes(self) -> None:
        ledger: dict[str, Any] = {}
        record = LedgerEngine.upsert(
            ledger, "habit-1", DAY, completed=True, value=12.5, notes="km", now_iso=NOW
        )
        assert record[const.DATA_COMPLETION_VALUE] == 12.5
        assert record[const.DATA_COMPLETION_NOTES] == "km"

    def test_explicit_not_done(self) -> None:
        ledger: dict[str, Any] = {}
        record = LedgerEngine.upsert(ledger, "habit-1", DAY, completed=False)
        assert record[const.DATA_COMPLETION_COMPLETED] is False
        assert record[const.DATA_COMPLETION_COMPLETED_AT] is None

    def test_keeps_value_when_not_provided(self) -> None:
        ledger: dict[str, Any] = {}
        LedgerEngine.upsert(ledger, "habit-1", DAY, value=3)
        record = LedgerEngine.upsert(ledger, "habit-1", DAY, completed=True, now_iso=LATER)
        assert record[const.DATA_COMPLETION_VALUE] == 3

    def test_completed_at_kept_when_already_completed(self) -> None:
        ledger: dict[str, Any] = {}
        LedgerEngine.upsert(ledger, "habit-1", DAY, now_iso=NOW)
        record = LedgerEngine.upsert(ledger, "habit-1", DAY, value=1, now_iso=LATER)
        assert record[const.DATA_COMPLETION_COMPLETED_AT] == NOW


class TestLedgerView:
    """Date-indexed read view."""

    def test_states(self, make_ledger) -> None:
        view = LedgerView(
            make_ledger(completed=[date(2026, 1, 19)], missed=[date(2026, 1, 20)])
        )
        assert view.state(date(2026, 1, 19)) is True
        assert view.state(date(2026, 1, 20)) is False
        assert view.state(date(2026, 1, 21)) is None
        assert view.is_completed(date(2026, 1, 19))
        assert not view.is_completed(date(2026, 1, 20))

    def test_bounds_and_counts(self, make_ledger) -> None:
        view = LedgerView(
            make_ledger(
                completed=[date(2026, 1, 5), date(2026, 1, 7), date(2026, 1, 12)],
                missed=[date(2026, 1, 2)],
            )
        )
        assert view.earliest == date(2026, 1, 2)
        assert view.latest == date(2026, 1, 12)
        assert len(view) == 4
        assert view.count_completed(date(2026, 1, 4), date(2026, 1, 10)) == 2
        assert view.count_completed(date(2026, 1, 10), date(2026, 1, 4)) == 0
        assert view.completed_dates == [
            date(2026, 1, 5),
            date(2026, 1, 7),
            date(2026, 1, 12),
        ]

    def test_empty(self) -> None:
        view = LedgerEngine.view({})
        assert view.is_empty
        assert view.earliest is None
