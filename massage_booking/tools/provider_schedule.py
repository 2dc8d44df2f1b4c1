"""Provider-managed weekly hours and blocked dates."""

import logging
from datetime import date
from typing import Optional

from massage_booking.schemas.provider_schema import BlockedDate, WorkingHoursRule
from massage_booking.scheduling.errors import InvalidScheduleError, ProviderNotFoundError
from massage_booking.tools.schedule_store import ScheduleStore
from massage_booking.utils import to_minute_of_day

logger = logging.getLogger(__name__)


class ProviderScheduleService:
    """Reads and replaces a provider's declared schedule."""

    def __init__(self, store: ScheduleStore) -> None:
        self._store = store

    def _require_provider(self, provider_id: str) -> None:
        if self._store.get_provider(provider_id) is None:
            raise ProviderNotFoundError(provider_id)

    def get_working_hours(self, provider_id: str) -> list[WorkingHoursRule]:
        self._require_provider(provider_id)
        return self._store.get_working_hours_rules(provider_id)

    def set_working_hours(
        self, provider_id: str, rules: list[WorkingHoursRule]
    ) -> list[WorkingHoursRule]:
        """Replace every weekly rule for the provider.

        An empty list clears the schedule, which makes the provider bookable
        at any time.

        Raises:
            ProviderNotFoundError: If the provider does not exist.
            InvalidScheduleError: If a rule belongs to another provider,
                repeats a weekday, or does not end after it starts.
        """
        self._require_provider(provider_id)
        seen: set[int] = set()
        for rule in rules:
            if rule.provider_id != provider_id:
                raise InvalidScheduleError(
                    f"Rule for provider '{rule.provider_id}' passed for '{provider_id}'"
                )
            if rule.day_of_week in seen:
                raise InvalidScheduleError(f"Duplicate rule for day {rule.day_of_week}")
            if to_minute_of_day(rule.start_time) >= to_minute_of_day(rule.end_time):
                raise InvalidScheduleError(
                    f"Day {rule.day_of_week}: start {rule.start_time} is not before end {rule.end_time}"
                )
            seen.add(rule.day_of_week)

        with self._store.provider_lock(provider_id):
            stored = self._store.replace_working_hours_rules(provider_id, rules)
        logger.info("Working hours replaced for provider %s (%d rule(s))", provider_id, len(stored))
        return stored

    def block_date(self, provider_id: str, day: date, reason: Optional[str] = None) -> BlockedDate:
        self._require_provider(provider_id)
        with self._store.provider_lock(provider_id):
            blocked = self._store.add_blocked_date(
                BlockedDate(provider_id=provider_id, date=day, reason=reason)
            )
        logger.info("Provider %s blocked %s", provider_id, day.isoformat())
        return blocked

    def unblock_date(self, provider_id: str, day: date) -> bool:
        """Remove a blocked date. Returns False if it was not blocked."""
        self._require_provider(provider_id)
        with self._store.provider_lock(provider_id):
            removed = self._store.remove_blocked_date(provider_id, day)
        if removed:
            logger.info("Provider %s unblocked %s", provider_id, day.isoformat())
        return removed

    def list_blocked_dates(self, provider_id: str) -> list[BlockedDate]:
        self._require_provider(provider_id)
        return self._store.list_blocked_dates(provider_id)
