"""
Provider schedule and booking store.

``ScheduleStore`` is the read/write contract the scheduling core needs from
the persistence layer. ``InMemoryScheduleStore`` implements it with plain
dicts and is what the tests, the demo CLI, and the services use by default.

In production, this would sit on top of the relational schema (providers,
provider_availability, provider_blocked_dates, bookings), and
``provider_lock`` would map to a transaction that locks the provider row.
"""

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Any, ContextManager, Iterator, Optional, Protocol

from massage_booking.schemas.booking_schema import ACTIVE_STATUSES, Booking
from massage_booking.schemas.provider_schema import BlockedDate, Provider, WorkingHoursRule

logger = logging.getLogger(__name__)


class ScheduleReader(Protocol):
    """Reads the conflict check and the slot listing depend on."""

    def get_provider(self, provider_id: str) -> Optional[Provider]: ...

    def get_working_hours_rules(self, provider_id: str) -> list[WorkingHoursRule]: ...

    def is_blocked_date(self, provider_id: str, day: date) -> bool: ...

    def get_active_bookings_in_window(
        self, provider_id: str, window_start: datetime, window_end: datetime
    ) -> list[Booking]: ...


class ScheduleStore(ScheduleReader, Protocol):
    """Reads plus the writes and per-provider locking the booking services use."""

    def add_provider(self, provider: Provider) -> Provider: ...

    def replace_working_hours_rules(
        self, provider_id: str, rules: list[WorkingHoursRule]
    ) -> list[WorkingHoursRule]: ...

    def add_blocked_date(self, blocked: BlockedDate) -> BlockedDate: ...

    def remove_blocked_date(self, provider_id: str, day: date) -> bool: ...

    def list_blocked_dates(self, provider_id: str) -> list[BlockedDate]: ...

    def add_booking(self, booking: Booking) -> Booking: ...

    def get_booking(self, booking_id: str) -> Optional[Booking]: ...

    def update_booking(self, booking_id: str, **changes: Any) -> Booking: ...

    def provider_lock(self, provider_id: str) -> ContextManager[None]: ...


class InMemoryScheduleStore:
    """Thread-safe dict-backed store with one re-entrant lock per provider."""

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}
        self._rules: dict[str, list[WorkingHoursRule]] = defaultdict(list)
        self._blocked: dict[str, dict[date, BlockedDate]] = defaultdict(dict)
        self._bookings: dict[str, Booking] = {}
        self._guard = threading.Lock()
        self._provider_locks: dict[str, threading.RLock] = {}

    # ------------------------------------------------------------------ #
    # Providers
    # ------------------------------------------------------------------ #

    def add_provider(self, provider: Provider) -> Provider:
        with self._guard:
            self._providers[provider.id] = provider
        logger.debug("Provider stored: %s (%s)", provider.id, provider.status.value)
        return provider

    def get_provider(self, provider_id: str) -> Optional[Provider]:
        with self._guard:
            return self._providers.get(provider_id)

    # ------------------------------------------------------------------ #
    # Working hours and blocked dates
    # ------------------------------------------------------------------ #

    def get_working_hours_rules(self, provider_id: str) -> list[WorkingHoursRule]:
        with self._guard:
            return list(self._rules.get(provider_id, []))

    def replace_working_hours_rules(
        self, provider_id: str, rules: list[WorkingHoursRule]
    ) -> list[WorkingHoursRule]:
        """Delete every existing rule for the provider and store ``rules`` instead."""
        with self._guard:
            self._rules[provider_id] = sorted(rules, key=lambda r: r.day_of_week)
            return list(self._rules[provider_id])

    def is_blocked_date(self, provider_id: str, day: date) -> bool:
        with self._guard:
            return day in self._blocked.get(provider_id, {})

    def add_blocked_date(self, blocked: BlockedDate) -> BlockedDate:
        with self._guard:
            self._blocked[blocked.provider_id][blocked.date] = blocked
        return blocked

    def remove_blocked_date(self, provider_id: str, day: date) -> bool:
        with self._guard:
            return self._blocked.get(provider_id, {}).pop(day, None) is not None

    def list_blocked_dates(self, provider_id: str) -> list[BlockedDate]:
        with self._guard:
            entries = self._blocked.get(provider_id, {})
            return [entries[d] for d in sorted(entries)]

    # ------------------------------------------------------------------ #
    # Bookings
    # ------------------------------------------------------------------ #

    def get_active_bookings_in_window(
        self, provider_id: str, window_start: datetime, window_end: datetime
    ) -> list[Booking]:
        """Active bookings whose start lies in [window_start, window_end), ordered by start."""
        lo = window_start.astimezone(timezone.utc)
        hi = window_end.astimezone(timezone.utc)
        with self._guard:
            found = [
                b for b in self._bookings.values()
                if b.provider_id == provider_id
                and b.status in ACTIVE_STATUSES
                and lo <= b.scheduled_at.astimezone(timezone.utc) < hi
            ]
        return sorted(found, key=lambda b: b.scheduled_at.astimezone(timezone.utc))

    def add_booking(self, booking: Booking) -> Booking:
        with self._guard:
            self._bookings[booking.id] = booking
        return booking

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        with self._guard:
            return self._bookings.get(booking_id)

    def update_booking(self, booking_id: str, **changes: Any) -> Booking:
        """Apply field changes to a stored booking and return the new copy.

        The result is validated as a whole, so the same rules apply as when
        the booking was first built.

        Raises:
            KeyError: If the booking does not exist.
            ValueError: If a change names an unknown field.
            pydantic.ValidationError: If a changed value is invalid.
        """
        unknown = set(changes) - set(Booking.model_fields)
        if unknown:
            raise ValueError(f"Unknown booking field(s): {sorted(unknown)}")
        with self._guard:
            current = self._bookings[booking_id]
            updated = Booking.model_validate({**current.model_dump(), **changes})
            self._bookings[booking_id] = updated
        return updated

    # ------------------------------------------------------------------ #
    # Locking
    # ------------------------------------------------------------------ #

    @contextmanager
    def provider_lock(self, provider_id: str) -> Iterator[None]:
        """Serialize read-check-write sequences for one provider."""
        with self._guard:
            lock = self._provider_locks.setdefault(provider_id, threading.RLock())
        with lock:
            yield

    def reset(self) -> None:
        """Clear all data. Used by test fixtures for isolation."""
        with self._guard:
            self._providers.clear()
            self._rules.clear()
            self._blocked.clear()
            self._bookings.clear()
            self._provider_locks.clear()
