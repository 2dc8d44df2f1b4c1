"""Exceptions raised by the scheduling core.

Expected booking rejections are returned as values, not raised. These
exceptions cover the conditions that stop scheduling logic from running
at all.
"""


class SchedulingError(Exception):
    """Base class for scheduling-core errors."""


class ProviderNotFoundError(SchedulingError, LookupError):
    """Raised when a provider ID does not resolve to a bookable provider."""

    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Provider '{provider_id}' not found")
        self.provider_id = provider_id


class BookingNotFoundError(SchedulingError, LookupError):
    """Raised when a booking ID does not resolve to a booking."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking '{booking_id}' not found")
        self.booking_id = booking_id


class InvalidDurationError(SchedulingError, ValueError):
    """Raised when a requested duration is not positive or exceeds the configured maximum."""


class InvalidScheduleError(SchedulingError, ValueError):
    """Raised when a working-hours update is malformed."""


class InvalidStatusTransitionError(SchedulingError):
    """Raised when a booking status change is not allowed from its current status."""
