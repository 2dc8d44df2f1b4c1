"""
Demo providers for the command-line tool.

Mirrors the development seed: one approved therapist working Monday to
Saturday 09:00-21:00, one approved therapist with no schedule configured
yet, and one still awaiting approval.
"""

import logging

from massage_booking.schemas.provider_schema import Provider, ProviderStatus, WorkingHoursRule
from massage_booking.tools.schedule_store import InMemoryScheduleStore

logger = logging.getLogger(__name__)

SCHEDULED_PROVIDER_ID = "prov-maria"
UNSCHEDULED_PROVIDER_ID = "prov-ana"
PENDING_PROVIDER_ID = "prov-jose"


def seed_demo_store(store: InMemoryScheduleStore) -> InMemoryScheduleStore:
    """Populate ``store`` with the demo providers and return it."""
    store.add_provider(Provider(id=SCHEDULED_PROVIDER_ID, display_name="Maria Santos"))
    store.add_provider(Provider(id=UNSCHEDULED_PROVIDER_ID, display_name="Ana Reyes"))
    store.add_provider(
        Provider(id=PENDING_PROVIDER_ID, display_name="Jose Cruz", status=ProviderStatus.PENDING)
    )
    store.replace_working_hours_rules(
        SCHEDULED_PROVIDER_ID,
        [
            WorkingHoursRule(
                provider_id=SCHEDULED_PROVIDER_ID,
                day_of_week=day,
                start_time="09:00",
                end_time="21:00",
            )
            for day in range(1, 7)
        ],
    )
    logger.debug("Demo store seeded")
    return store
