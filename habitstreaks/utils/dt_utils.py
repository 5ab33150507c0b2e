# File: utils/dt_utils.py
"""Date and time utilities for HabitStreaks.

Pure Python date/time functions; no engine state is touched here.

Functions:
    - set_default_timezone / get_default_timezone: Configure "local" time
    - dt_today_local: Get today's date in local timezone
    - dt_today_iso: Get today's date as ISO string
    - dt_now_local: Get current datetime in local timezone
    - dt_now_iso: Get current datetime as ISO string
    - dt_now_utc: Get current datetime in UTC
    - dt_parse_date: Strictly parse an ISO calendar date
    - weekday_token: Weekday token ("sun".."sat") for a date
    - start_of_week / end_of_week: Sunday..Saturday week bounds
    - start_of_period / end_of_period: Week or calendar-month bounds
    - previous_period_start / next_period_start: Step between periods
    - days_before: Step back a number of days, clamped at date.min
    - iter_dates: Inclusive date iteration
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta
import logging
import re
from zoneinfo import ZoneInfo

# Third-party date utilities
from dateutil.relativedelta import relativedelta

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

PERIOD_WEEK = "week"
PERIOD_MONTH = "month"

# date.weekday() is Monday=0; tokens are listed in that order
_WEEKDAY_TOKENS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz
    _LOGGER.debug("DEBUG: Default timezone set to %s", tz)


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Example:
        datetime.date(2025, 4, 7)
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_today_iso(tz: ZoneInfo | None = None) -> str:
    """Return today's date in local timezone as ISO string (YYYY-MM-DD)."""
    return dt_today_local(tz).isoformat()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


def dt_now_iso(tz: ZoneInfo | None = None) -> str:
    """Return the current local datetime as an ISO 8601 string.

    Example:
        "2025-04-07T14:30:00-05:00"
    """
    return dt_now_local(tz).isoformat()


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(value: str | date | None) -> date | None:
    """Parse a calendar date, accepting only ISO ``YYYY-MM-DD``.

    Ledger keys must be unambiguous, so the US/European fallbacks a display
    layer might accept are deliberately not tried here. ``datetime`` objects
    are rejected as well: a date-with-time has a zone-dependent calendar day.

    Args:
        value: ISO date string or `datetime.date`

    Returns:
        datetime.date, or None when the input is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


# ==============================================================================
# Week / Period Arithmetic
# ==============================================================================


def weekday_token(day: date) -> str:
    """Return the weekday token ("sun".."sat") for a date."""
    return _WEEKDAY_TOKENS[day.weekday()]


def start_of_week(day: date) -> date:
    """Return the Sunday that starts the week containing ``day``."""
    # weekday(): Mon=0..Sun=6 -> days since Sunday: Sun=0, Mon=1..Sat=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """Return the Saturday that ends the week containing ``day``."""
    return start_of_week(day) + timedelta(days=6)


def start_of_period(day: date, period: str) -> date:
    """Return the first date of the week or calendar month containing ``day``.

    Raises:
        ValueError: Unknown period.
    """
    if period == PERIOD_WEEK:
        return start_of_week(day)
    if period == PERIOD_MONTH:
        return day.replace(day=1)
    raise ValueError(f"Unknown period: {period}")


def end_of_period(day: date, period: str) -> date:
    """Return the last date of the week or calendar month containing ``day``."""
    if period == PERIOD_WEEK:
        return end_of_week(day)
    if period == PERIOD_MONTH:
        return day.replace(day=1) + relativedelta(months=1, days=-1)
    raise ValueError(f"Unknown period: {period}")


def previous_period_start(period_start: date, period: str) -> date:
    """Step from a period's first date to the previous period's first date."""
    if period == PERIOD_WEEK:
        return period_start - timedelta(days=7)
    if period == PERIOD_MONTH:
        return period_start + relativedelta(months=-1)
    raise ValueError(f"Unknown period: {period}")


def next_period_start(period_start: date, period: str) -> date:
    """Step from a period's first date to the next period's first date."""
    if period == PERIOD_WEEK:
        return period_start + timedelta(days=7)
    if period == PERIOD_MONTH:
        return period_start + relativedelta(months=1)
    raise ValueError(f"Unknown period: {period}")


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive (empty if end < start)."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_before(day: date, days: int) -> date:
    """Return ``day`` minus ``days`` days, clamped at ``date.min``.

    Window and lookback sizes come from callers and config without an upper
    bound; stepping past year 1 would otherwise raise OverflowError.
    """
    return day - timedelta(days=max(0, min(days, (day - date.min).days)))
