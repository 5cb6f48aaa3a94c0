"""Resolve a filter mode into the calendar dates to query.

Weeks run Sunday through Saturday and months run from day 1 through their
last day. The reference instant is always passed in by the caller, so the
result depends only on the two arguments.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from .models import DateRange, FilterMode
from spendtrack.utils.exceptions import InvalidFilterMode

Instant = Union[date, datetime]

FILTER_LABELS = {
    FilterMode.ALL: "All",
    FilterMode.WEEK: "This Week",
    FilterMode.MONTH: "This Month",
}


def parse_mode(mode: Union[str, FilterMode]) -> FilterMode:
    """Return the FilterMode for `mode`, raising InvalidFilterMode otherwise."""
    if isinstance(mode, FilterMode):
        return mode
    if isinstance(mode, str):
        for candidate in FilterMode:
            if candidate.value == mode:
                return candidate
    raise InvalidFilterMode(mode)


def to_calendar_date(instant: Instant) -> date:
    """Calendar date of `instant` in the local time zone."""
    if isinstance(instant, datetime):
        if instant.tzinfo is not None:
            instant = instant.astimezone()
        return instant.date()
    if isinstance(instant, date):
        return instant
    raise TypeError(f"Expected date or datetime, got {type(instant).__name__}")


def format_date_iso(instant: Instant) -> str:
    """Return the local calendar date as YYYY-MM-DD."""
    return to_calendar_date(instant).isoformat()


def day_of_week(day: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def start_of_week(instant: Instant) -> date:
    day = to_calendar_date(instant)
    return day - timedelta(days=day_of_week(day))


def end_of_week(instant: Instant) -> date:
    day = to_calendar_date(instant)
    return day + timedelta(days=6 - day_of_week(day))


def start_of_month(instant: Instant) -> date:
    return to_calendar_date(instant).replace(day=1)


def end_of_month(instant: Instant) -> date:
    # Day before the first of the next month; relativedelta rolls December into January
    return start_of_month(instant) + relativedelta(months=1) - timedelta(days=1)


def filter_label(mode: Union[str, FilterMode]) -> str:
    """Display label for a filter mode."""
    return FILTER_LABELS[parse_mode(mode)]


class DateRangeResolver:
    """Turns a filter mode plus a reference instant into a DateRange."""

    def resolve(self, mode: Union[str, FilterMode], reference: Instant) -> Optional[DateRange]:
        """
        Resolve the inclusive date range for a filter mode.

        Args:
            mode: "all", "week" or "month"
            reference: The instant treated as "now"

        Returns:
            DateRange, or None for "all" (no filtering)

        Raises:
            InvalidFilterMode: mode is not one of the three supported values
        """
        filter_mode = parse_mode(mode)

        if filter_mode is FilterMode.ALL:
            return None
        if filter_mode is FilterMode.WEEK:
            return DateRange(start_of_week(reference), end_of_week(reference))
        return DateRange(start_of_month(reference), end_of_month(reference))
