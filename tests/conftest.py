"""Shared test fixtures and helpers."""

import uuid
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from massage_booking.config import AppConfig, BookingConfig, SchedulingConfig
from massage_booking.schemas.booking_schema import Booking, BookingStatus
from massage_booking.schemas.provider_schema import Provider, WorkingHoursRule
from massage_booking.scheduling.availability_resolver import AvailabilityResolver
from massage_booking.scheduling.clock import FixedClock
from massage_booking.scheduling.conflict_guard import ConflictGuard
from massage_booking.tools.booking import BookingService
from massage_booking.tools.schedule_store import InMemoryScheduleStore

TZ_NAME = "Asia/Manila"
TZ = ZoneInfo(TZ_NAME)
PROVIDER_ID = "prov-1"
MONDAY = 1  # 2024-06-10 is a Monday


def make_config(business_timezone: str = TZ_NAME, **booking_overrides) -> AppConfig:
    """Config pinned to known values so environment overrides cannot leak in."""
    return AppConfig(
        scheduling=SchedulingConfig(
            business_timezone=business_timezone,
            slot_minutes=30,
            lead_time_minutes=60,
            default_open_time="09:00",
            default_close_time="21:00",
        ),
        booking=BookingConfig(
            max_booking_minutes=booking_overrides.get("max_booking_minutes", 120),
            conflict_lookback_minutes=booking_overrides.get("conflict_lookback_minutes", 120),
        ),
        log_level="DEBUG",
        app_name="test",
    )


def local(year: int, month: int, day: int, hour: int = 0, minute: int = 0,
          tz: ZoneInfo = TZ) -> datetime:
    """Aware datetime in the business timezone."""
    return datetime(year, month, day, hour, minute, tzinfo=tz)


def make_rule(
    day_of_week: int,
    start_time: str = "09:00",
    end_time: str = "17:00",
    is_available: bool = True,
    provider_id: str = PROVIDER_ID,
) -> WorkingHoursRule:
    return WorkingHoursRule(
        provider_id=provider_id,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time=end_time,
        is_available=is_available,
    )


def make_booking(
    scheduled_at: datetime,
    duration_minutes: int = 60,
    status: BookingStatus = BookingStatus.ACCEPTED,
    provider_id: str = PROVIDER_ID,
    customer_id: Optional[str] = None,
) -> Booking:
    return Booking(
        id=str(uuid.uuid4()),
        booking_number=f"CM{uuid.uuid4().hex[:8].upper()}",
        provider_id=provider_id,
        customer_id=customer_id or "cust-1",
        scheduled_at=scheduled_at,
        duration_minutes=duration_minutes,
        status=status,
    )


@pytest.fixture
def config() -> AppConfig:
    return make_config()


@pytest.fixture
def store() -> InMemoryScheduleStore:
    store = InMemoryScheduleStore()
    store.add_provider(Provider(id=PROVIDER_ID, display_name="Maria Santos"))
    return store


@pytest.fixture
def monday_9_to_5(store) -> InMemoryScheduleStore:
    """Provider works Mondays 09:00-17:00 only."""
    store.replace_working_hours_rules(PROVIDER_ID, [make_rule(MONDAY, "09:00", "17:00")])
    return store


@pytest.fixture
def guard(store, config) -> ConflictGuard:
    return ConflictGuard(store, config)


@pytest.fixture
def clock() -> FixedClock:
    """Clock set well before the dates used in tests, so no lead-time cutoff applies."""
    return FixedClock(local(2024, 6, 1, 8, 0), TZ)


@pytest.fixture
def resolver(store, clock, config) -> AvailabilityResolver:
    return AvailabilityResolver(store, clock=clock, config=config)


@pytest.fixture
def booking_service(store, guard, config) -> BookingService:
    return BookingService(store, guard=guard, config=config)
