"""Rules shared by the conflict check and the slot listing."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from massage_booking.schemas.provider_schema import Provider, WorkingHoursRule
from massage_booking.scheduling.errors import InvalidDurationError, ProviderNotFoundError
from massage_booking.utils import MINUTES_PER_DAY, sunday_based_weekday, to_minute_of_day

logger = logging.getLogger(__name__)


def require_bookable_provider(store, provider_id: str) -> Provider:
    """Return the provider, or raise if it is missing or not approved."""
    provider = store.get_provider(provider_id)
    if provider is None or not provider.is_bookable:
        logger.info("Provider %s not found or not bookable", provider_id)
        raise ProviderNotFoundError(provider_id)
    return provider


def validate_duration(duration_minutes: int, max_minutes: int) -> None:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise InvalidDurationError(f"Duration must be a whole number of minutes, got {duration_minutes!r}")
    if duration_minutes <= 0:
        raise InvalidDurationError(f"Duration must be positive, got {duration_minutes}")
    if duration_minutes > max_minutes:
        raise InvalidDurationError(
            f"Duration {duration_minutes} exceeds the maximum of {max_minutes} minutes"
        )


def find_rule(rules: list[WorkingHoursRule], day: date) -> Optional[WorkingHoursRule]:
    """Return the rule for ``day``'s weekday, or None if there is none.

    If several rows exist for the same weekday, the first one wins.
    """
    weekday = sunday_based_weekday(day)
    for rule in rules:
        if rule.day_of_week == weekday:
            return rule
    return None


def local_end_minute(start: datetime, duration_minutes: int, tz: ZoneInfo) -> int:
    """Minute-of-day at which a booking ends, counted from the start's local midnight.

    Ends that fall on a later local date run past 24:00, so any booking that
    crosses midnight compares as ending after every closing time.
    """
    local_start = start.astimezone(tz)
    local_end = (
        start.astimezone(timezone.utc) + timedelta(minutes=duration_minutes)
    ).astimezone(tz)
    days_later = (local_end.date() - local_start.date()).days
    return to_minute_of_day(local_end.time()) + days_later * MINUTES_PER_DAY
