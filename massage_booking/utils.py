"""Shared time-of-day helpers used across the scheduling core."""

from datetime import date, datetime, time
from typing import Union

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(value: str) -> time:
    """Parse an "HH:MM" string into a ``datetime.time``.

    Raises:
        ValueError: If the value is not a valid 24-hour HH:MM time.
    """
    return datetime.strptime(value.strip(), "%H:%M").time()


def to_minute_of_day(value: Union[str, time]) -> int:
    """Convert an "HH:MM" string or a time into minutes since midnight.

    Examples:
        >>> to_minute_of_day("09:30")
        570
        >>> to_minute_of_day("00:00")
        0
    """
    if isinstance(value, str):
        value = parse_hhmm(value)
    return value.hour * 60 + value.minute


def format_minute_of_day(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM".

    Examples:
        >>> format_minute_of_day(570)
        '09:30'
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def sunday_based_weekday(moment: date) -> int:
    """Day of week with Sunday as 0, matching stored working-hours rows."""
    return (moment.weekday() + 1) % 7
