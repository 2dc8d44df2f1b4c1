"""Booking data models and status sets."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    PROVIDER_EN_ROUTE = "PROVIDER_EN_ROUTE"
    PROVIDER_ARRIVED = "PROVIDER_ARRIVED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


# Statuses that occupy time on the provider's calendar.
ACTIVE_STATUSES: frozenset[BookingStatus] = frozenset({
    BookingStatus.PENDING,
    BookingStatus.ACCEPTED,
    BookingStatus.PROVIDER_EN_ROUTE,
    BookingStatus.PROVIDER_ARRIVED,
    BookingStatus.IN_PROGRESS,
})

TERMINAL_STATUSES: frozenset[BookingStatus] = frozenset({
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
    BookingStatus.REJECTED,
})


def _require_aware(value: datetime) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    return value


class Booking(BaseModel):
    """A booking as the scheduling core sees it."""
    id: str
    booking_number: str
    provider_id: str
    customer_id: str
    scheduled_at: datetime
    duration_minutes: int = Field(gt=0)
    status: BookingStatus = BookingStatus.PENDING
    customer_notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    check_scheduled_at = field_validator("scheduled_at")(_require_aware)

    @property
    def ends_at(self) -> datetime:
        return self.scheduled_at.astimezone(timezone.utc) + timedelta(minutes=self.duration_minutes)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class BookingRequest(BaseModel):
    """Validated booking creation request."""
    provider_id: str
    customer_id: str
    scheduled_at: datetime
    duration_minutes: int
    customer_notes: Optional[str] = None

    check_scheduled_at = field_validator("scheduled_at")(_require_aware)


class BookingResult(BaseModel):
    """Outcome of a booking creation attempt."""
    success: bool
    message: str
    reason: Optional[str] = None
    booking: Optional[Booking] = None
