"""
Slot listing for provider discovery.

Produces the ordered list of candidate start times for one provider and
one date, each flagged available or not. Without a requested duration each
slot is checked as a single slot-width interval, which makes the listing
advisory; ``ConflictGuard`` stays the authoritative gate. With a duration
the listing applies the same closing-time rule as ``ConflictGuard``, so an
available slot is one the guard would accept.

Usage:
    resolver = AvailabilityResolver(store, clock=FixedClock(now, tz))
    listing = resolver.slots_for("prov-1", date(2024, 6, 10), duration_minutes=90)
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from massage_booking.config import AppConfig, settings
from massage_booking.schemas.availability_schema import (
    NOT_WORKING_DAY_MESSAGE,
    UNAVAILABLE_DATE_MESSAGE,
    Slot,
    SlotListing,
)
from massage_booking.scheduling.clock import Clock, SystemClock, local_day_bounds
from massage_booking.scheduling.intervals import Interval, first_overlapping
from massage_booking.scheduling.policy import (
    find_rule,
    local_end_minute,
    require_bookable_provider,
    validate_duration,
)
from massage_booking.tools.schedule_store import ScheduleReader
from massage_booking.utils import format_minute_of_day, to_minute_of_day

logger = logging.getLogger(__name__)


class AvailabilityResolver:
    """Enumerates bookable slots for a provider's day. Read-only."""

    def __init__(
        self,
        store: ScheduleReader,
        clock: Optional[Clock] = None,
        config: AppConfig = settings,
    ) -> None:
        self._store = store
        self._tz = config.scheduling.tzinfo
        self._clock = clock or SystemClock(self._tz)
        self._slot_minutes = config.scheduling.slot_minutes
        self._lead_minutes = config.scheduling.lead_time_minutes
        self._default_open = to_minute_of_day(config.scheduling.default_open_time)
        self._default_close = to_minute_of_day(config.scheduling.default_close_time)
        self._max_minutes = config.booking.max_booking_minutes
        self._lookback = timedelta(minutes=config.booking.conflict_lookback_minutes)

    def slots_for(
        self, provider_id: str, day: date, duration_minutes: Optional[int] = None
    ) -> SlotListing:
        """
        List candidate slots for ``day`` in the business timezone.

        Args:
            provider_id: Provider to inspect.
            day: Local calendar date.
            duration_minutes: Length each slot must be free for. Defaults to
                the slot width.

        Returns:
            The listing; empty with a message when the provider is blocked
            or does not work that day.

        Raises:
            InvalidDurationError: If a duration is given and is out of range.
            ProviderNotFoundError: If the provider is missing or not approved.
        """
        if duration_minutes is not None:
            validate_duration(duration_minutes, self._max_minutes)
        require_bookable_provider(self._store, provider_id)

        if self._store.is_blocked_date(provider_id, day):
            logger.debug("Provider %s blocked on %s", provider_id, day)
            return SlotListing(date=day, slots=[], message=UNAVAILABLE_DATE_MESSAGE)

        rules = self._store.get_working_hours_rules(provider_id)
        if rules:
            rule = find_rule(rules, day)
            if rule is None or not rule.is_available:
                logger.debug("Provider %s does not work on %s", provider_id, day)
                return SlotListing(date=day, slots=[], message=NOT_WORKING_DAY_MESSAGE)
            open_minute = to_minute_of_day(rule.start_time)
            close_minute: Optional[int] = to_minute_of_day(rule.end_time)
            window_end = close_minute
        else:
            open_minute = self._default_open
            close_minute = None
            window_end = self._default_close

        width = duration_minutes or self._slot_minutes
        day_start, day_end = local_day_bounds(day, self._tz)
        # Late slots can run past midnight into the next day's bookings.
        bookings = self._store.get_active_bookings_in_window(
            provider_id, day_start - self._lookback, day_end + timedelta(minutes=width)
        )

        earliest = self._earliest_minute(day)

        slots: list[Slot] = []
        for minute in range(open_minute, window_end, self._slot_minutes):
            if minute < earliest:
                continue
            start = day_start.replace(hour=minute // 60, minute=minute % 60)
            free = first_overlapping(Interval.from_duration(start, width), bookings) is None
            if free and duration_minutes is not None and close_minute is not None:
                free = local_end_minute(start, duration_minutes, self._tz) <= close_minute
            slots.append(Slot(time=format_minute_of_day(minute), available=free))

        logger.debug(
            "Listed %d slot(s) for provider %s on %s (%d booking(s) considered)",
            len(slots), provider_id, day, len(bookings),
        )
        return SlotListing(date=day, slots=slots)

    def _earliest_minute(self, day: date) -> int:
        """First minute-of-day a slot may start on ``day``, honouring the lead time today."""
        now: datetime = self._clock.now().astimezone(self._tz)
        if now.date() != day:
            return 0
        return to_minute_of_day(now.time()) + self._lead_minutes
