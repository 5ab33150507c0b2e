"""HabitStreaks: habit completion ledger, streaks and completion rates.

Typical use:

    from habitstreaks import HabitTrackerCoordinator, HabitStreaksStore

    coordinator = HabitTrackerCoordinator(HabitStreaksStore("habits.json"))
    habit_id = coordinator.add_habit("Read", "weekly", selected_days=["mon", "wed"])
    coordinator.toggle_completion(habit_id, "2026-01-19")
    coordinator.current_streak(habit_id, reference_date="2026-01-21")
"""

from .config import HabitStreaksConfig, load_config
from .coordinator import HabitTrackerCoordinator
from .event_bus import (
    CompletionToggled,
    EventBus,
    FrequencyChanged,
    HabitAdded,
    HabitDeleted,
    HabitEvent,
    HabitUpdated,
)
from .exceptions import (
    HabitNotFoundError,
    HabitStreaksError,
    InvalidDateError,
    InvalidFrequencyError,
    InvalidHabitUpdateError,
)
from .frequency import CustomFrequency, DailyFrequency, WeeklyFrequency
from .goal_progress import GoalProgressSubscriber
from .store import HabitStreaksStore

__all__ = [
    "CompletionToggled",
    "CustomFrequency",
    "DailyFrequency",
    "EventBus",
    "FrequencyChanged",
    "GoalProgressSubscriber",
    "HabitAdded",
    "HabitDeleted",
    "HabitEvent",
    "HabitNotFoundError",
    "HabitStreaksConfig",
    "HabitStreaksError",
    "HabitStreaksStore",
    "HabitTrackerCoordinator",
    "HabitUpdated",
    "InvalidDateError",
    "InvalidFrequencyError",
    "InvalidHabitUpdateError",
    "WeeklyFrequency",
    "load_config",
]
