"""Provider records and their declared schedule."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from massage_booking.utils import parse_hhmm


class ProviderStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    SUSPENDED = "SUSPENDED"


class Provider(BaseModel):
    """Provider record. Only approved providers can be booked."""
    id: str
    display_name: str
    status: ProviderStatus = ProviderStatus.APPROVED

    @property
    def is_bookable(self) -> bool:
        return self.status == ProviderStatus.APPROVED


class WorkingHoursRule(BaseModel):
    """Declared open window for one day of the week (0 = Sunday)."""
    provider_id: str
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    is_available: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def check_hhmm(cls, value: str) -> str:
        parsed = parse_hhmm(value)
        return parsed.strftime("%H:%M")


class BlockedDate(BaseModel):
    """A calendar date on which the provider takes no bookings."""
    provider_id: str
    date: date
    reason: Optional[str] = None
