# File: const.py
"""Constants for the HabitStreaks engine.

This file centralizes data keys, frequency identifiers, weekday tokens, event
signal names, defaults and error translation keys for consistency across the
package.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General / Package Information
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# Storage and Versioning
SCHEMA_VERSION = 1
DEFAULT_STORAGE_FILENAME = "habitstreaks.json"

# ------------------------------------------------------------------------------------------------
# Data Keys (top-level buckets)
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_META_LAST_SAVED = "last_saved"

DATA_HABITS = "habits"
DATA_COMPLETIONS = "completions"

# ------------------------------------------------------------------------------------------------
# Habit Data Keys
# ------------------------------------------------------------------------------------------------
DATA_HABIT_ID = "internal_id"
DATA_HABIT_NAME = "name"
DATA_HABIT_DESCRIPTION = "description"
DATA_HABIT_ICON = "icon"
DATA_HABIT_COLOR = "color"
DATA_HABIT_MEASUREMENT_TYPE = "measurement_type"
DATA_HABIT_TARGET_AMOUNT = "target_amount"
DATA_HABIT_TARGET_UNIT = "target_unit"
DATA_HABIT_GOAL_ID = "goal_id"
DATA_HABIT_START_DATE = "start_date"
DATA_HABIT_FREQUENCY = "frequency"
DATA_HABIT_SELECTED_DAYS = "selected_days"
DATA_HABIT_CUSTOM_FREQUENCY = "custom_frequency"
DATA_HABIT_FREQUENCY_HISTORY = "frequency_history"
DATA_HABIT_CREATED_AT = "created_at"
DATA_HABIT_UPDATED_AT = "updated_at"

DATA_CUSTOM_FREQUENCY_TIMES = "times"
DATA_CUSTOM_FREQUENCY_PERIOD = "period"

# Fields callers may edit through update_habit(); frequency keys are excluded
HABIT_EDITABLE_FIELDS = (
    DATA_HABIT_NAME,
    DATA_HABIT_DESCRIPTION,
    DATA_HABIT_ICON,
    DATA_HABIT_COLOR,
    DATA_HABIT_MEASUREMENT_TYPE,
    DATA_HABIT_TARGET_AMOUNT,
    DATA_HABIT_TARGET_UNIT,
    DATA_HABIT_GOAL_ID,
    DATA_HABIT_START_DATE,
)
HABIT_FREQUENCY_FIELDS = (
    DATA_HABIT_FREQUENCY,
    DATA_HABIT_SELECTED_DAYS,
    DATA_HABIT_CUSTOM_FREQUENCY,
    DATA_HABIT_FREQUENCY_HISTORY,
)

# ------------------------------------------------------------------------------------------------
# Completion Record Keys
# ------------------------------------------------------------------------------------------------
DATA_COMPLETION_ID = "internal_id"
DATA_COMPLETION_HABIT_ID = "habit_id"
DATA_COMPLETION_DATE = "date"
DATA_COMPLETION_COMPLETED = "completed"
DATA_COMPLETION_COMPLETED_AT = "completed_at"
DATA_COMPLETION_VALUE = "value"
DATA_COMPLETION_NOTES = "notes"

# ------------------------------------------------------------------------------------------------
# Frequency Change Keys
# ------------------------------------------------------------------------------------------------
DATA_FREQUENCY_CHANGE_ID = "internal_id"
DATA_FREQUENCY_CHANGE_DATE = "change_date"
DATA_FREQUENCY_CHANGE_PREVIOUS = "previous_frequency"
DATA_FREQUENCY_CHANGE_NEW = "new_frequency"
DATA_FREQUENCY_CHANGE_STREAK = "streak_at_change"
DATA_FREQUENCY_CHANGE_REASON = "reason"

DATA_FREQUENCY_SNAPSHOT_TYPE = "type"

DATA_STREAK_VALUE = "value"
DATA_STREAK_UNIT = "unit"
DATA_STREAK_LABEL = "label"

DATA_STREAK_CONTEXT_CURRENT = "current"
DATA_STREAK_CONTEXT_HISTORICAL = "historical"

# ------------------------------------------------------------------------------------------------
# Frequencies, Periods and Units
# ------------------------------------------------------------------------------------------------
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"
FREQUENCY_CUSTOM = "custom"

FREQUENCY_OPTIONS = [FREQUENCY_DAILY, FREQUENCY_WEEKLY, FREQUENCY_CUSTOM]

PERIOD_WEEK = "week"
PERIOD_MONTH = "month"

CUSTOM_PERIOD_OPTIONS = [PERIOD_WEEK, PERIOD_MONTH]

STREAK_UNIT_DAYS = "days"
STREAK_UNIT_WEEKS = "weeks"
STREAK_UNIT_PERIODS = "periods"

MEASUREMENT_SIMPLE = "simple"
MEASUREMENT_COUNT = "count"
MEASUREMENT_TIME = "time"
MEASUREMENT_CUSTOM = "custom"

# ------------------------------------------------------------------------------------------------
# Weekdays (weeks run Sunday..Saturday)
# ------------------------------------------------------------------------------------------------
WEEKDAY_SUN = "sun"
WEEKDAY_MON = "mon"
WEEKDAY_TUE = "tue"
WEEKDAY_WED = "wed"
WEEKDAY_THU = "thu"
WEEKDAY_FRI = "fri"
WEEKDAY_SAT = "sat"

# Token -> offset from the Sunday that starts the week
WEEKDAY_OFFSETS = {
    WEEKDAY_SUN: 0,
    WEEKDAY_MON: 1,
    WEEKDAY_TUE: 2,
    WEEKDAY_WED: 3,
    WEEKDAY_THU: 4,
    WEEKDAY_FRI: 5,
    WEEKDAY_SAT: 6,
}

# ------------------------------------------------------------------------------------------------
# Event Signals
# ------------------------------------------------------------------------------------------------
SIGNAL_COMPLETION_TOGGLED = "completion_toggled"
SIGNAL_FREQUENCY_CHANGED = "frequency_changed"
SIGNAL_HABIT_ADDED = "habit_added"
SIGNAL_HABIT_UPDATED = "habit_updated"
SIGNAL_HABIT_DELETED = "habit_deleted"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_TIMEZONE = "UTC"
DEFAULT_MAX_LOOKBACK_DAYS = 3660
DEFAULT_COMPLETION_RATE_WINDOW = 30
DEFAULT_PROGRESS_WINDOW_DAYS = 14
DEFAULT_GOAL_RATE_WINDOW = 7
DEFAULT_HABIT_ICON = "✅"
DEFAULT_HABIT_COLOR = "#10B981"

# ------------------------------------------------------------------------------------------------
# Progress View Keys
# ------------------------------------------------------------------------------------------------
PROGRESS_DATE = "date"
PROGRESS_COMPLETED = "completed"
PROGRESS_IS_TODAY = "is_today"
PROGRESS_IS_REQUIRED = "is_required"
PROGRESS_VALUE = "value"

GOAL_PROGRESS_GOAL_ID = "goal_id"
GOAL_PROGRESS_HABITS_ACTIVE = "habits_active"
GOAL_PROGRESS_HABIT_COMPLETION_RATE = "habit_completion_rate"

# ------------------------------------------------------------------------------------------------
# Labels and Translation Keys
# ------------------------------------------------------------------------------------------------
LABEL_HABIT = "Habit"

TRANS_KEY_ERROR_NOT_FOUND = "not_found"
TRANS_KEY_ERROR_INVALID_FREQUENCY = "invalid_frequency"
TRANS_KEY_ERROR_INVALID_SELECTED_DAYS = "invalid_selected_days"
TRANS_KEY_ERROR_INVALID_CUSTOM_FREQUENCY = "invalid_custom_frequency"
TRANS_KEY_ERROR_INVALID_DATE = "invalid_date"
TRANS_KEY_ERROR_INVALID_HABIT_UPDATE = "invalid_habit_update"
TRANS_KEY_ERROR_INVALID_HABIT_NAME = "invalid_habit_name"
