"""Type definitions for HabitStreaks data structures.

Persisted entities are plain dictionaries keyed by the constants in const.py.
TypedDict describes their fixed shape for static analysis only; it does not
enforce anything at runtime, so loaders still normalize with ``.get()``
defaults (see store.py).

Frequency configurations are NOT described here: in memory they are the
frozen dataclasses of frequency.py, and only their serialized snapshot form
(FrequencySnapshot) is a dictionary.

IMPORTANT: This file must NOT import from coordinator.py or managers to avoid
circular dependencies.
"""

from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

HabitId = str  # UUID string
GoalId = str  # Opaque id owned by the goal module
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"

FrequencyType = Literal["daily", "weekly", "custom"]
CustomPeriod = Literal["week", "month"]
StreakUnit = Literal["days", "weeks", "periods"]


# =============================================================================
# Frequency Snapshots
# =============================================================================


class CustomFrequencyData(TypedDict):
    """N times per week or month."""

    times: int
    period: CustomPeriod


class FrequencySnapshot(TypedDict):
    """Serialized frequency configuration stored in a FrequencyChange."""

    type: FrequencyType
    selected_days: NotRequired[list[str]]
    custom_frequency: NotRequired[CustomFrequencyData]


# =============================================================================
# Streak Values
# =============================================================================


class StreakValue(TypedDict):
    """A streak count with the unit matching its frequency."""

    value: int
    unit: StreakUnit
    label: str


class StreakContext(TypedDict):
    """Current streak combined with streaks recorded at frequency changes."""

    current: int
    historical: int
    label: str


# =============================================================================
# Entities
# =============================================================================


class CompletionRecordData(TypedDict):
    """One ledger row. Exactly one exists per (habit_id, date)."""

    internal_id: str
    habit_id: HabitId
    date: ISODate
    completed: bool
    completed_at: NotRequired[ISODatetime | None]
    value: NotRequired[float | None]
    notes: NotRequired[str | None]


class FrequencyChangeData(TypedDict):
    """Audit record appended whenever a habit's recurrence rule changes."""

    internal_id: str
    change_date: ISODatetime
    previous_frequency: FrequencySnapshot
    new_frequency: FrequencySnapshot
    streak_at_change: StreakValue
    reason: NotRequired[str | None]


class HabitData(TypedDict):
    """Type definition for a habit entity."""

    internal_id: HabitId
    name: str
    description: NotRequired[str]
    icon: NotRequired[str]
    color: NotRequired[str]
    measurement_type: NotRequired[str]
    target_amount: NotRequired[float | None]
    target_unit: NotRequired[str | None]
    goal_id: NotRequired[GoalId | None]
    start_date: NotRequired[ISODate | None]
    frequency: FrequencyType
    selected_days: NotRequired[list[str]]
    custom_frequency: NotRequired[CustomFrequencyData | None]
    frequency_history: list[FrequencyChangeData]
    created_at: ISODatetime
    updated_at: ISODatetime


# =============================================================================
# Views
# =============================================================================


class DayCompletion(TypedDict):
    """One row of a day-by-day progress view."""

    date: ISODate
    completed: bool
    is_today: bool
    is_required: bool
    value: float | None


class GoalHabitProgress(TypedDict):
    """Habit-side contribution to a goal's progress."""

    goal_id: GoalId
    habits_active: int
    habit_completion_rate: int


# Ledger for a single habit: ISO date -> record
HabitLedger = dict[ISODate, CompletionRecordData]

# Whole-store layout (dynamic keys, so plain dicts)
StorageData = dict[str, Any]
