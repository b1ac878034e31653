"""Date and time utilities."""

import math
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DateLike = Union[date, datetime, str]

# Monday to Friday
DEFAULT_WORKING_DAYS = [0, 1, 2, 3, 4]


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Parse a date, datetime or ISO string into a date, or None if unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def get_working_days(start_date: date, end_date: date, working_days: List[int] = None) -> List[date]:
    """Get list of working days between start and end dates (inclusive)."""
    working_days = DEFAULT_WORKING_DAYS if working_days is None else working_days
    days = []
    current = start_date

    while current <= end_date:
        if is_working_day(current, working_days):
            days.append(current)
        current += timedelta(days=1)

    return days


def count_working_days(start_date: date, end_date: date, working_days: List[int] = None) -> int:
    """Count working days between start and end dates (inclusive)."""
    return len(get_working_days(start_date, end_date, working_days))


def is_working_day(day: date, working_days: List[int] = None) -> bool:
    """Check if a date is a working day."""
    working_days = DEFAULT_WORKING_DAYS if working_days is None else working_days
    return day.weekday() in working_days


def days_between(start_date: date, end_date: date) -> int:
    """Whole days from start_date to end_date (negative when end is earlier)."""
    return (end_date - start_date).days


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as the dashboards do."""
    return int(math.floor(value + 0.5))
