"""Tests for frequency configurations - pure logic, no storage needed."""

from __future__ import annotations

import pytest

from habitstreaks import const
from habitstreaks.exceptions import InvalidFrequencyError
from habitstreaks.frequency import (
    CustomFrequency,
    DailyFrequency,
    WeeklyFrequency,
    apply_frequency,
    build_frequency,
    frequency_from_habit,
    frequency_to_snapshot,
)

# =============================================================================
# TEST: BUILD_FREQUENCY
# =============================================================================


class TestBuildFrequency:
    """Test building validated configurations from loose input."""

    def test_daily(self) -> None:
        """Daily ignores weekly and custom fields."""
        config = build_frequency("daily", ["mon"], {"times": 3, "period": "week"})
        assert config == DailyFrequency()

    def test_weekly_normalizes_tokens(self) -> None:
        """Full day names and mixed-case tokens map to lowercase tokens."""
        config = build_frequency("weekly", ["Monday", "WED", " fri "])
        assert isinstance(config, WeeklyFrequency)
        assert config.selected_days == frozenset({"mon", "wed", "fri"})

    def test_weekly_ordered_sunday_first(self) -> None:
        """ordered_days() and offsets follow Sunday=0 ordering."""
        config = build_frequency("weekly", ["sat", "mon", "sun"])
        assert config.ordered_days() == ["sun", "mon", "sat"]
        assert config.weekday_offsets == [0, 1, 6]

    def test_custom(self) -> None:
        """Custom builds from a times/period dict."""
        config = build_frequency("custom", custom_frequency={"times": 3, "period": "month"})
        assert config == CustomFrequency(times=3, period="month")

    def test_unknown_type_rejected(self) -> None:
        """Unknown frequency types raise InvalidFrequencyError."""
        with pytest.raises(InvalidFrequencyError) as err:
            build_frequency("hourly")
        assert err.value.translation_key == const.TRANS_KEY_ERROR_INVALID_FREQUENCY


class TestFrequencyValidation:
    """Test that invalid configurations cannot be constructed."""

    @pytest.mark.parametrize("days", [None, [], ["  "]])
    def test_weekly_requires_days(self, days: list[str] | None) -> None:
        """Weekly with no selected days is invalid."""
        with pytest.raises(InvalidFrequencyError) as err:
            build_frequency("weekly", days)
        assert err.value.translation_key == const.TRANS_KEY_ERROR_INVALID_SELECTED_DAYS

    def test_weekly_unknown_token(self) -> None:
        """Unknown weekday tokens are reported."""
        with pytest.raises(InvalidFrequencyError) as err:
            build_frequency("weekly", ["mon", "xyz"])
        assert err.value.translation_placeholders["days"] == "xyz"

    @pytest.mark.parametrize("day", ["wedding", "Mongolia", "tues", "s"])
    def test_weekly_prefix_words_rejected(self, day: str) -> None:
        """Only exact tokens or full weekday names are accepted."""
        with pytest.raises(InvalidFrequencyError) as err:
            build_frequency("weekly", [day])
        assert err.value.translation_placeholders["days"] == day.lower()

    def test_weekly_full_names(self) -> None:
        config = build_frequency("weekly", ["SUNDAY", "Thursday ", "sat"])
        assert config.selected_days == frozenset({"sun", "thu", "sat"})

    @pytest.mark.parametrize("days", [5, [None]])
    def test_weekly_malformed_days(self, days: object) -> None:
        with pytest.raises(InvalidFrequencyError):
            build_frequency("weekly", days)  # type: ignore[arg-type]

    @pytest.mark.parametrize("custom", [[3, "week"], "3/week"])
    def test_custom_config_must_be_a_mapping(self, custom: object) -> None:
        with pytest.raises(InvalidFrequencyError):
            build_frequency("custom", custom_frequency=custom)  # type: ignore[arg-type]

    @pytest.mark.parametrize("times", [0, -1, True, "3", 2.5])
    def test_custom_bad_times(self, times: object) -> None:
        """times must be an int >= 1."""
        with pytest.raises(InvalidFrequencyError):
            build_frequency("custom", custom_frequency={"times": times, "period": "week"})

    def test_custom_bad_period(self) -> None:
        """period must be week or month."""
        with pytest.raises(InvalidFrequencyError):
            build_frequency("custom", custom_frequency={"times": 2, "period": "year"})

    def test_custom_missing_config(self) -> None:
        """Custom without a times/period dict is invalid."""
        with pytest.raises(InvalidFrequencyError):
            build_frequency("custom")


# =============================================================================
# TEST: HABIT DICT CONVERSION
# =============================================================================


class TestHabitConversion:
    """Test conversion between configurations and persisted dicts."""

    def test_snapshot_weekly(self) -> None:
        """Weekly snapshot carries ordered days."""
        snapshot = frequency_to_snapshot(WeeklyFrequency(frozenset({"wed", "mon"})))
        assert snapshot == {"type": "weekly", "selected_days": ["mon", "wed"]}

    def test_snapshot_custom(self) -> None:
        """Custom snapshot carries times and period."""
        snapshot = frequency_to_snapshot(CustomFrequency(times=2, period="week"))
        assert snapshot == {
            "type": "custom",
            "custom_frequency": {"times": 2, "period": "week"},
        }

    def test_apply_clears_sibling_fields(self) -> None:
        """Switching weekly -> custom drops selected_days."""
        habit = {const.DATA_HABIT_NAME: "Run"}
        apply_frequency(habit, WeeklyFrequency(frozenset({"mon"})))
        assert habit[const.DATA_HABIT_SELECTED_DAYS] == ["mon"]

        apply_frequency(habit, CustomFrequency(times=2, period="month"))
        assert habit[const.DATA_HABIT_FREQUENCY] == const.FREQUENCY_CUSTOM
        assert const.DATA_HABIT_SELECTED_DAYS not in habit
        assert frequency_from_habit(habit) == CustomFrequency(times=2, period="month")

    def test_units(self) -> None:
        """Each frequency type reports its streak unit."""
        assert DailyFrequency.unit == const.STREAK_UNIT_DAYS
        assert WeeklyFrequency.unit == const.STREAK_UNIT_WEEKS
        assert CustomFrequency.unit == const.STREAK_UNIT_PERIODS
