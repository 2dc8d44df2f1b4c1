"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_booking_schema(self):
        from massage_booking.schemas.booking_schema import (
            ACTIVE_STATUSES, Booking, BookingRequest, BookingResult, BookingStatus,
        )
        assert BookingStatus.PENDING in ACTIVE_STATUSES
        assert Booking is not None and BookingRequest is not None
        assert BookingResult(success=False, message="x").booking is None

    def test_import_provider_schema(self):
        from massage_booking.schemas.provider_schema import (
            BlockedDate, Provider, ProviderStatus, WorkingHoursRule,
        )
        assert Provider(id="p", display_name="P").status == ProviderStatus.APPROVED
        assert BlockedDate is not None and WorkingHoursRule is not None

    def test_import_availability_schema(self):
        from massage_booking.schemas.availability_schema import (
            REJECTION_MESSAGES, BookingDecision, RejectionReason, Slot, SlotListing,
        )
        assert set(REJECTION_MESSAGES) == set(RejectionReason)
        assert BookingDecision.accept().accepted
        assert Slot is not None and SlotListing is not None


class TestSchedulingImports:
    def test_package_reexports(self):
        from massage_booking.scheduling import (
            AvailabilityResolver, BookingLifecycle, Clock, ConflictGuard,
            FixedClock, Interval, SystemClock, overlaps,
        )
        assert callable(overlaps)
        for cls in (AvailabilityResolver, BookingLifecycle, ConflictGuard,
                    FixedClock, Interval, SystemClock):
            assert isinstance(cls, type)
        assert Clock is not None

    def test_error_hierarchy(self):
        from massage_booking.scheduling.errors import (
            BookingNotFoundError, InvalidDurationError, InvalidScheduleError,
            InvalidStatusTransitionError, ProviderNotFoundError, SchedulingError,
        )
        for exc in (BookingNotFoundError, InvalidDurationError, InvalidScheduleError,
                    InvalidStatusTransitionError, ProviderNotFoundError):
            assert issubclass(exc, SchedulingError)
        assert issubclass(ProviderNotFoundError, LookupError)
        assert issubclass(InvalidDurationError, ValueError)


class TestToolImports:
    def test_import_store(self):
        from massage_booking.tools.schedule_store import InMemoryScheduleStore
        assert InMemoryScheduleStore().get_provider("none") is None

    def test_import_services(self):
        from massage_booking.tools.booking import BookingService
        from massage_booking.tools.provider_schedule import ProviderScheduleService
        assert callable(BookingService) and callable(ProviderScheduleService)

    def test_demo_seed(self):
        from massage_booking.tools.demo_data import SCHEDULED_PROVIDER_ID, seed_demo_store
        from massage_booking.tools.schedule_store import InMemoryScheduleStore
        store = seed_demo_store(InMemoryScheduleStore())
        assert len(store.get_working_hours_rules(SCHEDULED_PROVIDER_ID)) == 6


class TestConfigImport:
    def test_settings_singleton(self):
        from massage_booking.config import AppConfig, settings
        assert isinstance(settings, AppConfig)
        assert settings.booking.conflict_lookback_minutes >= settings.booking.max_booking_minutes

    def test_logging_context(self):
        from massage_booking.logging_context import NO_REQUEST, get_request_id, request_scope
        with request_scope("req-123"):
            assert get_request_id() == "req-123"
        assert get_request_id() == NO_REQUEST
