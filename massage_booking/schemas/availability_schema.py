"""Slot listings and booking admission decisions."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RejectionReason(str, Enum):
    NOT_AVAILABLE_ON_DAY = "NOT_AVAILABLE_ON_DAY"
    BEFORE_OPENING = "BEFORE_OPENING"
    AFTER_CLOSING = "AFTER_CLOSING"
    DATE_BLOCKED = "DATE_BLOCKED"
    TIME_CONFLICT = "TIME_CONFLICT"


REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.NOT_AVAILABLE_ON_DAY: "Provider is not available on this day",
    RejectionReason.BEFORE_OPENING: "Booking starts before the provider's opening time",
    RejectionReason.AFTER_CLOSING: "Booking would end after the provider's closing time",
    RejectionReason.DATE_BLOCKED: "Provider is unavailable on this date",
    RejectionReason.TIME_CONFLICT: "Provider already has a booking at this time",
}

UNAVAILABLE_DATE_MESSAGE = "Provider is unavailable on this date"
NOT_WORKING_DAY_MESSAGE = "Provider does not work on this day"


class BookingDecision(BaseModel):
    """Accept, or reject with a reason code and a user-facing message."""
    accepted: bool
    reason: Optional[RejectionReason] = None
    message: str = ""

    @classmethod
    def accept(cls) -> "BookingDecision":
        return cls(accepted=True, message="Booking can be accepted")

    @classmethod
    def reject(cls, reason: RejectionReason) -> "BookingDecision":
        return cls(accepted=False, reason=reason, message=REJECTION_MESSAGES[reason])


class Slot(BaseModel):
    """One candidate start time within a provider's day."""
    time: str
    available: bool


class SlotListing(BaseModel):
    """All candidate slots for one provider and date, in ascending order."""
    date: date
    slots: list[Slot] = Field(default_factory=list)
    message: Optional[str] = None
