"""Tests for the EventBus and domain events."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from habitstreaks import const
from habitstreaks.event_bus import (
    CompletionToggled,
    EventBus,
    FrequencyChanged,
    HabitEvent,
)


class TestEventBus:
    """Synchronous delivery by signal."""

    def test_delivers_to_matching_signal(self) -> None:
        bus = EventBus()
        toggles: list[HabitEvent] = []
        changes: list[HabitEvent] = []
        bus.subscribe(const.SIGNAL_COMPLETION_TOGGLED, toggles.append)
        bus.subscribe(const.SIGNAL_FREQUENCY_CHANGED, changes.append)

        event = CompletionToggled(habit_id="h1", date="2026-01-21", completed=True)
        bus.publish(event)

        assert toggles == [event]
        assert changes == []
        assert bus.events_published == 1

    def test_catch_all_runs_after_signal_handlers(self) -> None:
        bus = EventBus()
        order: list[str] = []
        bus.subscribe_all(lambda event: order.append("all"))
        bus.subscribe(const.SIGNAL_COMPLETION_TOGGLED, lambda event: order.append("signal"))

        bus.publish(CompletionToggled(habit_id="h1"))
        assert order == ["signal", "all"]

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list[HabitEvent] = []
        unsubscribe = bus.subscribe(const.SIGNAL_COMPLETION_TOGGLED, received.append)
        unsubscribe()
        unsubscribe()

        bus.publish(CompletionToggled(habit_id="h1"))
        assert received == []

    def test_failing_handler_is_logged_and_skipped(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A raising handler cannot stop delivery to the others."""
        bus = EventBus()
        received: list[HabitEvent] = []

        def _broken(event: HabitEvent) -> None:
            raise RuntimeError("boom")

        bus.subscribe(const.SIGNAL_COMPLETION_TOGGLED, _broken)
        bus.subscribe(const.SIGNAL_COMPLETION_TOGGLED, received.append)

        bus.publish(CompletionToggled(habit_id="h1"))

        assert len(received) == 1
        assert "boom" in caplog.text


class TestEvents:
    """Event payloads."""

    def test_payload_includes_signal(self) -> None:
        event = FrequencyChanged(
            habit_id="h1",
            goal_id="g1",
            change_id="c1",
            previous_frequency={"type": "daily"},
            new_frequency={"type": "weekly", "selected_days": ["mon"]},
            streak_at_change=5,
        )
        payload = event.as_payload()
        assert payload["signal"] == const.SIGNAL_FREQUENCY_CHANGED
        assert payload["streak_at_change"] == 5
        assert payload["goal_id"] == "g1"
        assert payload["occurred_at"]

    def test_events_are_frozen(self) -> None:
        event = CompletionToggled(habit_id="h1")
        with pytest.raises(FrozenInstanceError):
            event.habit_id = "h2"  # type: ignore[misc]
