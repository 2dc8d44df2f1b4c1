"""
Booking admission check.

Decides whether a provider can take a booking of a given length at a given
instant. Checks run in a fixed order and stop at the first failure:

1. Working hours (only when the provider has configured any)
2. Blocked date
3. Overlap with the provider's active bookings

Usage:
    guard = ConflictGuard(store)
    decision = guard.can_book("prov-1", start, 60)
    if not decision.accepted:
        print(decision.reason, decision.message)
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from massage_booking.config import AppConfig, settings
from massage_booking.schemas.availability_schema import BookingDecision, RejectionReason
from massage_booking.schemas.provider_schema import WorkingHoursRule
from massage_booking.scheduling.intervals import Interval, first_overlapping
from massage_booking.scheduling.policy import (
    find_rule,
    local_end_minute,
    require_bookable_provider,
    validate_duration,
)
from massage_booking.tools.schedule_store import ScheduleReader
from massage_booking.utils import to_minute_of_day

logger = logging.getLogger(__name__)


class ConflictGuard:
    """Authoritative yes/no gate for new bookings. Read-only."""

    def __init__(self, store: ScheduleReader, config: AppConfig = settings) -> None:
        self._store = store
        self._tz = config.scheduling.tzinfo
        self._max_minutes = config.booking.max_booking_minutes
        self._lookback = timedelta(minutes=config.booking.conflict_lookback_minutes)

    def can_book(
        self, provider_id: str, proposed_start: datetime, duration_minutes: int
    ) -> BookingDecision:
        """
        Check whether a booking may be placed.

        Args:
            provider_id: Provider to book.
            proposed_start: Timezone-aware start instant.
            duration_minutes: Requested length of the booking.

        Returns:
            An accepting decision, or a rejecting one carrying the reason.

        Raises:
            ValueError: If ``proposed_start`` is naive.
            InvalidDurationError: If the duration is not positive or too long.
            ProviderNotFoundError: If the provider is missing or not approved.
        """
        if proposed_start.tzinfo is None or proposed_start.utcoffset() is None:
            raise ValueError("proposed_start must be timezone-aware")
        validate_duration(duration_minutes, self._max_minutes)
        require_bookable_provider(self._store, provider_id)

        local_start = proposed_start.astimezone(self._tz)

        rules = self._store.get_working_hours_rules(provider_id)
        if rules:
            reason = self._check_working_hours(rules, local_start, duration_minutes)
            if reason is not None:
                return self._reject(provider_id, local_start, reason)

        if self._store.is_blocked_date(provider_id, local_start.date()):
            return self._reject(provider_id, local_start, RejectionReason.DATE_BLOCKED)

        candidate = Interval.from_duration(proposed_start, duration_minutes)
        existing = self._store.get_active_bookings_in_window(
            provider_id, candidate.start - self._lookback, candidate.end
        )
        clash = first_overlapping(candidate, existing)
        if clash is not None:
            logger.debug("Candidate %s overlaps booking %s", candidate, clash.id)
            return self._reject(provider_id, local_start, RejectionReason.TIME_CONFLICT)

        logger.debug(
            "Provider %s can take %d min at %s", provider_id, duration_minutes,
            local_start.isoformat(),
        )
        return BookingDecision.accept()

    def _check_working_hours(
        self, rules: list[WorkingHoursRule], local_start: datetime, duration_minutes: int
    ) -> Optional[RejectionReason]:
        rule = find_rule(rules, local_start)
        if rule is None or not rule.is_available:
            return RejectionReason.NOT_AVAILABLE_ON_DAY
        if to_minute_of_day(local_start.time()) < to_minute_of_day(rule.start_time):
            return RejectionReason.BEFORE_OPENING
        end_minute = local_end_minute(local_start, duration_minutes, self._tz)
        if end_minute > to_minute_of_day(rule.end_time):
            return RejectionReason.AFTER_CLOSING
        return None

    def _reject(
        self, provider_id: str, local_start: datetime, reason: RejectionReason
    ) -> BookingDecision:
        logger.info(
            "Booking rejected for provider %s at %s: %s",
            provider_id, local_start.isoformat(), reason.value,
        )
        return BookingDecision.reject(reason)
