"""
Booking status transitions.

Every status change a booking can go through is listed explicitly. A change
that is not in the table is rejected with the list of statuses reachable
from the current one. Whether a booking occupies the provider's calendar
follows from its status alone (see ``ACTIVE_STATUSES``).

Usage:
    next_status = BookingLifecycle.transition(BookingStatus.PENDING, BookingStatus.ACCEPTED)
"""

import logging
from dataclasses import dataclass

from massage_booking.schemas.booking_schema import TERMINAL_STATUSES, BookingStatus
from massage_booking.scheduling.errors import InvalidStatusTransitionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """A single valid status change."""
    from_status: BookingStatus
    to_status: BookingStatus


class BookingLifecycle:
    """Table of allowed booking status changes."""

    TRANSITIONS: list[Transition] = [
        # --- Provider response ---
        Transition(BookingStatus.PENDING, BookingStatus.ACCEPTED),
        Transition(BookingStatus.PENDING, BookingStatus.REJECTED),

        # --- Cancellation (before the provider sets off) ---
        Transition(BookingStatus.PENDING, BookingStatus.CANCELLED),
        Transition(BookingStatus.ACCEPTED, BookingStatus.CANCELLED),

        # --- Service delivery ---
        Transition(BookingStatus.ACCEPTED, BookingStatus.PROVIDER_EN_ROUTE),
        Transition(BookingStatus.PROVIDER_EN_ROUTE, BookingStatus.PROVIDER_ARRIVED),
        Transition(BookingStatus.PROVIDER_ARRIVED, BookingStatus.IN_PROGRESS),
        Transition(BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED),
    ]

    @classmethod
    def transition(cls, current: BookingStatus, target: BookingStatus) -> BookingStatus:
        """
        Validate a status change.

        Returns:
            The target status.

        Raises:
            InvalidStatusTransitionError: If the change is not allowed.
        """
        for t in cls.TRANSITIONS:
            if t.from_status == current and t.to_status == target:
                logger.debug("Status transition: %s -> %s", current.value, target.value)
                return target

        valid = [s.value for s in cls.get_valid_targets(current)]
        raise InvalidStatusTransitionError(
            f"No valid transition from '{current.value}' to '{target.value}'. "
            f"Valid targets: {valid}"
        )

    @classmethod
    def get_valid_targets(cls, current: BookingStatus) -> list[BookingStatus]:
        """Return all statuses reachable in one step from ``current``."""
        return [t.to_status for t in cls.TRANSITIONS if t.from_status == current]

    @staticmethod
    def is_terminal(status: BookingStatus) -> bool:
        return status in TERMINAL_STATUSES
