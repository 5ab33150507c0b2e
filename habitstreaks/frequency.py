"""Frequency configurations for habits.

A habit's recurrence rule is one of three frozen dataclasses:

    DailyFrequency()                          every day is required
    WeeklyFrequency(selected_days)            listed weekdays are required
    CustomFrequency(times, period)            N completions per week/month

Constructors validate their fields, so a weekly rule without days or a custom
rule with ``times < 1`` can never exist in memory. ``build_frequency()`` turns
loose caller input into one of the three; ``frequency_from_habit()`` and
``frequency_to_snapshot()`` convert to and from the persisted dict form.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from . import const
from .exceptions import InvalidFrequencyError

if TYPE_CHECKING:
    from .type_defs import FrequencySnapshot, HabitData


@dataclass(frozen=True)
class DailyFrequency:
    """Every calendar day is required."""

    kind: ClassVar[str] = const.FREQUENCY_DAILY
    unit: ClassVar[str] = const.STREAK_UNIT_DAYS


@dataclass(frozen=True)
class WeeklyFrequency:
    """The selected weekdays of every Sunday-Saturday week are required."""

    selected_days: frozenset[str]

    kind: ClassVar[str] = const.FREQUENCY_WEEKLY
    unit: ClassVar[str] = const.STREAK_UNIT_WEEKS

    def __post_init__(self) -> None:
        if not self.selected_days:
            raise InvalidFrequencyError(
                "Weekly frequency requires at least one selected day",
                translation_key=const.TRANS_KEY_ERROR_INVALID_SELECTED_DAYS,
                days="",
            )
        unknown = sorted(set(self.selected_days) - set(const.WEEKDAY_OFFSETS))
        if unknown:
            raise InvalidFrequencyError(
                f"Unknown weekday token(s): {', '.join(unknown)}",
                translation_key=const.TRANS_KEY_ERROR_INVALID_SELECTED_DAYS,
                days=", ".join(unknown),
            )

    @property
    def weekday_offsets(self) -> list[int]:
        """Offsets (0=Sunday) of the selected days, ascending."""
        return sorted(const.WEEKDAY_OFFSETS[day] for day in self.selected_days)

    def ordered_days(self) -> list[str]:
        """Selected day tokens in Sunday-first order."""
        return sorted(self.selected_days, key=const.WEEKDAY_OFFSETS.__getitem__)


@dataclass(frozen=True)
class CustomFrequency:
    """At least ``times`` completions within every week or calendar month."""

    times: int
    period: str

    kind: ClassVar[str] = const.FREQUENCY_CUSTOM
    unit: ClassVar[str] = const.STREAK_UNIT_PERIODS

    def __post_init__(self) -> None:
        if isinstance(self.times, bool) or not isinstance(self.times, int):
            raise InvalidFrequencyError(
                f"Custom frequency times must be an integer, got {self.times!r}",
                translation_key=const.TRANS_KEY_ERROR_INVALID_CUSTOM_FREQUENCY,
                times=self.times,
                period=self.period,
            )
        if self.times < 1:
            raise InvalidFrequencyError(
                f"Custom frequency times must be >= 1, got {self.times}",
                translation_key=const.TRANS_KEY_ERROR_INVALID_CUSTOM_FREQUENCY,
                times=self.times,
                period=self.period,
            )
        if self.period not in const.CUSTOM_PERIOD_OPTIONS:
            raise InvalidFrequencyError(
                f"Custom frequency period must be one of "
                f"{const.CUSTOM_PERIOD_OPTIONS}, got {self.period!r}",
                translation_key=const.TRANS_KEY_ERROR_INVALID_CUSTOM_FREQUENCY,
                times=self.times,
                period=self.period,
            )


FrequencyConfig = DailyFrequency | WeeklyFrequency | CustomFrequency


_WEEKDAY_NAMES = {
    "sunday": const.WEEKDAY_SUN,
    "monday": const.WEEKDAY_MON,
    "tuesday": const.WEEKDAY_TUE,
    "wednesday": const.WEEKDAY_WED,
    "thursday": const.WEEKDAY_THU,
    "friday": const.WEEKDAY_FRI,
    "saturday": const.WEEKDAY_SAT,
}


def _normalize_days(days: Iterable[str] | None) -> frozenset[str]:
    """Map tokens or full weekday names to tokens; unknown values pass through."""
    if days is None:
        return frozenset()
    if isinstance(days, str):
        days = [days]
    elif not isinstance(days, Iterable):
        days = [str(days)]
    tokens = (str(day).strip().lower() for day in days)
    return frozenset(_WEEKDAY_NAMES.get(token, token) for token in tokens if token)


def build_frequency(
    frequency: str,
    selected_days: Iterable[str] | None = None,
    custom_frequency: Mapping[str, Any] | None = None,
) -> FrequencyConfig:
    """Build a validated frequency configuration from loose input.

    Fields that do not belong to the chosen frequency are ignored, mirroring
    how a form submits every field regardless of the selected type.

    Args:
        frequency: "daily", "weekly" or "custom"
        selected_days: Weekday tokens such as ["mon", "wed"] (weekly only)
        custom_frequency: {"times": int, "period": "week"|"month"} (custom only)

    Returns:
        One of DailyFrequency, WeeklyFrequency, CustomFrequency.

    Raises:
        InvalidFrequencyError: Unknown type or invalid fields for the type.
    """
    if frequency == const.FREQUENCY_DAILY:
        return DailyFrequency()
    if frequency == const.FREQUENCY_WEEKLY:
        return WeeklyFrequency(_normalize_days(selected_days))
    if frequency == const.FREQUENCY_CUSTOM:
        if not isinstance(custom_frequency, Mapping) or not custom_frequency:
            raise InvalidFrequencyError(
                "Custom frequency requires times and period",
                translation_key=const.TRANS_KEY_ERROR_INVALID_CUSTOM_FREQUENCY,
                times="",
                period="",
            )
        return CustomFrequency(
            times=custom_frequency.get(const.DATA_CUSTOM_FREQUENCY_TIMES, 0),
            period=custom_frequency.get(const.DATA_CUSTOM_FREQUENCY_PERIOD, ""),
        )
    raise InvalidFrequencyError(
        f"Unknown frequency {frequency!r}; expected one of {const.FREQUENCY_OPTIONS}",
        frequency=frequency,
    )


def frequency_from_habit(habit: HabitData) -> FrequencyConfig:
    """Return the active frequency configuration stored on a habit."""
    return build_frequency(
        habit[const.DATA_HABIT_FREQUENCY],
        habit.get(const.DATA_HABIT_SELECTED_DAYS),
        habit.get(const.DATA_HABIT_CUSTOM_FREQUENCY),
    )


def frequency_to_snapshot(config: FrequencyConfig) -> FrequencySnapshot:
    """Serialize a configuration into its plain snapshot form."""
    snapshot: FrequencySnapshot = {const.DATA_FREQUENCY_SNAPSHOT_TYPE: config.kind}  # type: ignore[typeddict-item]
    if isinstance(config, WeeklyFrequency):
        snapshot[const.DATA_HABIT_SELECTED_DAYS] = config.ordered_days()  # type: ignore[literal-required]
    elif isinstance(config, CustomFrequency):
        snapshot[const.DATA_HABIT_CUSTOM_FREQUENCY] = {  # type: ignore[literal-required]
            const.DATA_CUSTOM_FREQUENCY_TIMES: config.times,
            const.DATA_CUSTOM_FREQUENCY_PERIOD: config.period,
        }
    return snapshot


def apply_frequency(habit: HabitData, config: FrequencyConfig) -> None:
    """Write a configuration onto a habit dict, clearing sibling fields."""
    habit[const.DATA_HABIT_FREQUENCY] = config.kind  # type: ignore[typeddict-item]
    if isinstance(config, WeeklyFrequency):
        habit[const.DATA_HABIT_SELECTED_DAYS] = config.ordered_days()
    else:
        habit.pop(const.DATA_HABIT_SELECTED_DAYS, None)  # type: ignore[misc]
    if isinstance(config, CustomFrequency):
        habit[const.DATA_HABIT_CUSTOM_FREQUENCY] = {
            const.DATA_CUSTOM_FREQUENCY_TIMES: config.times,  # type: ignore[misc]
            const.DATA_CUSTOM_FREQUENCY_PERIOD: config.period,
        }
    else:
        habit.pop(const.DATA_HABIT_CUSTOM_FREQUENCY, None)  # type: ignore[misc]
