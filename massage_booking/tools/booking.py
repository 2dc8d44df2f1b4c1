"""
Booking creation and status changes.

Creation runs the admission check and the insert under the provider's lock,
so two requests racing for the same slot can never both succeed. Status
changes go through ``BookingLifecycle``; moving a booking to a terminal
status frees its time on the provider's calendar.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from massage_booking.config import AppConfig, settings
from massage_booking.schemas.booking_schema import (
    Booking,
    BookingRequest,
    BookingResult,
    BookingStatus,
)
from massage_booking.scheduling.conflict_guard import ConflictGuard
from massage_booking.scheduling.errors import BookingNotFoundError
from massage_booking.scheduling.lifecycle import BookingLifecycle
from massage_booking.tools.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)


def _booking_number() -> str:
    return f"CM{uuid.uuid4().hex[:8].upper()}"


class BookingService:
    """Creates bookings and moves them through their lifecycle."""

    def __init__(
        self,
        store: ScheduleStore,
        guard: Optional[ConflictGuard] = None,
        config: AppConfig = settings,
    ) -> None:
        self._store = store
        self._guard = guard or ConflictGuard(store, config)

    def create_booking(self, request: BookingRequest) -> BookingResult:
        """Check the requested slot and, if free, store a PENDING booking.

        Raises:
            ProviderNotFoundError: If the provider is missing or not approved.
            InvalidDurationError: If the duration is out of range.
        """
        with self._store.provider_lock(request.provider_id):
            decision = self._guard.can_book(
                request.provider_id, request.scheduled_at, request.duration_minutes
            )
            if not decision.accepted:
                return BookingResult(
                    success=False,
                    message=decision.message,
                    reason=decision.reason.value if decision.reason else None,
                )

            booking = Booking(
                id=str(uuid.uuid4()),
                booking_number=_booking_number(),
                provider_id=request.provider_id,
                customer_id=request.customer_id,
                scheduled_at=request.scheduled_at,
                duration_minutes=request.duration_minutes,
                status=BookingStatus.PENDING,
                customer_notes=request.customer_notes,
                created_at=datetime.now(timezone.utc),
            )
            self._store.add_booking(booking)

        logger.info(
            "Booking created: %s for provider %s at %s (%d min)",
            booking.booking_number, booking.provider_id,
            booking.scheduled_at.isoformat(), booking.duration_minutes,
        )
        return BookingResult(
            success=True,
            message=f"Booking confirmed. Reference number: {booking.booking_number}.",
            booking=booking,
        )

    def get_booking(self, booking_id: str) -> Booking:
        booking = self._store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def update_status(
        self, booking_id: str, status: BookingStatus, cancel_reason: Optional[str] = None
    ) -> Booking:
        """Move a booking to ``status`` if the lifecycle allows it.

        Only the status and the cancel reason change. Time and duration are
        fixed once the booking has passed the conflict check.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            InvalidStatusTransitionError: If the change is not allowed.
        """
        booking = self.get_booking(booking_id)
        with self._store.provider_lock(booking.provider_id):
            booking = self.get_booking(booking_id)
            BookingLifecycle.transition(booking.status, status)
            changes: dict[str, object] = {"status": status}
            if cancel_reason is not None:
                changes["cancel_reason"] = cancel_reason
            updated = self._store.update_booking(booking_id, **changes)
        logger.info(
            "Booking %s: %s -> %s", booking.booking_number, booking.status.value, status.value
        )
        return updated

    def accept_booking(self, booking_id: str) -> Booking:
        return self.update_status(booking_id, BookingStatus.ACCEPTED)

    def reject_booking(self, booking_id: str, reason: Optional[str] = None) -> Booking:
        return self.update_status(booking_id, BookingStatus.REJECTED, cancel_reason=reason)

    def cancel_booking(self, booking_id: str, reason: Optional[str] = None) -> Booking:
        """Cancel a PENDING or ACCEPTED booking, freeing its slot."""
        return self.update_status(booking_id, BookingStatus.CANCELLED, cancel_reason=reason)
