"""
Half-open time intervals and the single overlap rule for booking collisions.

Both the booking admission check and the slot listing decide collisions
through ``overlaps`` so that the two can never disagree.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from massage_booking.schemas.booking_schema import Booking


@dataclass(frozen=True)
class Interval:
    """The half-open range [start, end), in UTC."""
    start: datetime
    end: datetime

    @classmethod
    def from_duration(cls, start: datetime, duration_minutes: int) -> "Interval":
        start = start.astimezone(timezone.utc)
        return cls(start, start + timedelta(minutes=duration_minutes))

    @classmethod
    def for_booking(cls, booking: Booking) -> "Interval":
        return cls.from_duration(booking.scheduled_at, booking.duration_minutes)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


def overlaps(a: Interval, b: Interval) -> bool:
    """Return True if the two half-open intervals share any instant.

    Back-to-back intervals (``a.end == b.start``) do not overlap, and an
    empty interval overlaps nothing.
    """
    if a.is_empty or b.is_empty:
        return False
    return a.start < b.end and b.start < a.end


def first_overlapping(candidate: Interval, bookings: list[Booking]) -> Optional[Booking]:
    """Return the first booking whose interval overlaps ``candidate``, if any."""
    for booking in bookings:
        if overlaps(candidate, Interval.for_booking(booking)):
            return booking
    return None
