"""
Date utilities for calendar pricing.
Calendar days are plain dates; "today" is taken in the configured hall timezone.
"""
from datetime import datetime, timedelta, date
from typing import Iterator, Optional, Union

import pytz

from core.settings import settings


# Timezone configuration
TIMEZONE = pytz.timezone(settings.hall_timezone)

DateLike = Union[date, datetime]


def get_current_datetime(tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """Get current datetime in the hall timezone."""
    return datetime.now(tz or TIMEZONE)


def get_current_date(tz: Optional[pytz.BaseTzInfo] = None) -> date:
    """Get today's calendar date in the hall timezone."""
    return get_current_datetime(tz).date()


def to_calendar_date(value: DateLike) -> date:
    """
    Drop the time-of-day component of a date or datetime.

    Aware datetimes are converted to the hall timezone first so that a
    late-evening UTC timestamp lands on the local calendar day.

    Args:
        value: date or datetime

    Returns:
        date object
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(TIMEZONE)
        return value.date()
    return value


def weekday_index(day: date) -> int:
    """Weekday number with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def days_between(start: date, end: date) -> int:
    """Whole days from start to end; negative when end is before start."""
    return (end - start).days


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)

