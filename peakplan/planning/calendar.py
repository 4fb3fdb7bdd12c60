"""Monday-aligned calendar helpers.

Plans are laid out in whole weeks starting on Monday. All helpers work on
calendar dates only, so there is no time-of-day or timezone drift.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Union

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    """Parse a YYYY-MM-DD string (or pass a date through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def today_utc() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def monday_of(value: DateLike) -> date:
    """Return the Monday of the week containing the date.

    Sunday belongs to the week that started six days earlier.
    """
    day = parse_date(value)
    return day - timedelta(days=day.weekday())


def add_weeks(monday: DateLike, weeks: int) -> date:
    """Shift a date by whole weeks."""
    return parse_date(monday) + timedelta(weeks=weeks)


def weeks_between(start: DateLike, end: DateLike) -> int:
    """Whole weeks needed to cover start..end, rounded up, minimum 1."""
    days = (parse_date(end) - parse_date(start)).days
    return max(1, math.ceil(days / 7))
