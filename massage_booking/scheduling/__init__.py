from massage_booking.scheduling.availability_resolver import AvailabilityResolver
from massage_booking.scheduling.clock import Clock, FixedClock, SystemClock
from massage_booking.scheduling.conflict_guard import ConflictGuard
from massage_booking.scheduling.intervals import Interval, overlaps
from massage_booking.scheduling.lifecycle import BookingLifecycle

__all__ = [
    "AvailabilityResolver",
    "ConflictGuard",
    "Interval",
    "overlaps",
    "Clock",
    "FixedClock",
    "SystemClock",
    "BookingLifecycle",
]
