"""Goal progress collaborator.

Goals are owned elsewhere; habits only carry an opaque ``goal_id``. This
subscriber keeps the goal side informed: whenever an event touches a habit
that is (or was) linked to a goal, it recomputes that goal's habit-side
progress through coordinator queries and hands the result to a callback.

It never caches streaks or rates, and never mutates habit data.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from . import const
from .event_bus import HabitEvent, HabitUpdated
from .managers.base_manager import BaseManager
from .utils.math_utils import average

if TYPE_CHECKING:
    from .coordinator import HabitTrackerCoordinator
    from .type_defs import GoalHabitProgress

GoalProgressCallback = Callable[["GoalHabitProgress"], None]

_GOAL_SIGNALS = (
    const.SIGNAL_COMPLETION_TOGGLED,
    const.SIGNAL_FREQUENCY_CHANGED,
    const.SIGNAL_HABIT_ADDED,
    const.SIGNAL_HABIT_UPDATED,
    const.SIGNAL_HABIT_DELETED,
)


class GoalProgressSubscriber(BaseManager):
    """Recomputes goal progress from habit events."""

    def __init__(
        self,
        coordinator: HabitTrackerCoordinator,
        on_update: GoalProgressCallback,
        window_days: int = const.DEFAULT_GOAL_RATE_WINDOW,
    ) -> None:
        super().__init__(coordinator)
        self._on_update = on_update
        self.window_days = window_days
        self.setup()

    def setup(self) -> None:
        """Subscribe to every habit signal."""
        for signal in _GOAL_SIGNALS:
            self.listen(signal, self._on_habit_event)

    def compute(
        self, goal_id: str, reference_date: date | str | None = None
    ) -> GoalHabitProgress:
        """Return the habit-side progress of ``goal_id``.

        habit_completion_rate is the average completion rate of the linked
        habits over ``window_days``; 0 when no habit is linked.
        """
        habits = self.coordinator.get_habits_by_goal(goal_id)
        rates = [
            self.coordinator.completion_rate(
                habit[const.DATA_HABIT_ID], self.window_days, reference_date
            )
            for habit in habits
        ]
        return {
            const.GOAL_PROGRESS_GOAL_ID: goal_id,  # type: ignore[typeddict-item]
            const.GOAL_PROGRESS_HABITS_ACTIVE: len(habits),
            const.GOAL_PROGRESS_HABIT_COMPLETION_RATE: average(rates),
        }

    def _on_habit_event(self, event: HabitEvent) -> None:
        goal_ids: list[str] = []
        if event.goal_id:
            goal_ids.append(event.goal_id)
        # A relink also changes the goal the habit left
        if isinstance(event, HabitUpdated) and event.previous_goal_id:
            if event.previous_goal_id not in goal_ids:
                goal_ids.append(event.previous_goal_id)

        for goal_id in goal_ids:
            progress = self.compute(goal_id)
            const.LOGGER.debug(
                "DEBUG: Goal %s progress after '%s': %s",
                goal_id,
                event.signal,
                progress,
            )
            self._on_update(progress)
