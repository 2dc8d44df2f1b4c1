"""Tests for configuration loading and validation."""

from dataclasses import FrozenInstanceError, replace

import pytest

from massage_booking.config import (
    AppConfig,
    BookingConfig,
    SchedulingConfig,
    _safe_int,
    _validate_config,
)
from tests.conftest import make_config


def with_scheduling(**changes) -> AppConfig:
    config = make_config()
    return replace(config, scheduling=replace(config.scheduling, **changes))


def with_booking(**changes) -> AppConfig:
    config = make_config()
    return replace(config, booking=replace(config.booking, **changes))


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(AppConfig())  # should not raise

    def test_pinned_test_config_passes_validation(self):
        _validate_config(make_config())

    def test_unknown_timezone(self):
        with pytest.raises(ValueError, match="BUSINESS_TIMEZONE"):
            _validate_config(with_scheduling(business_timezone="Mars/Olympus_Mons"))

    def test_slot_minutes_must_be_positive(self):
        with pytest.raises(ValueError, match="SLOT_MINUTES"):
            _validate_config(with_scheduling(slot_minutes=0))

    def test_negative_lead_time(self):
        with pytest.raises(ValueError, match="LEAD_TIME_MINUTES"):
            _validate_config(with_scheduling(lead_time_minutes=-5))

    def test_zero_lead_time_allowed(self):
        _validate_config(with_scheduling(lead_time_minutes=0))

    def test_malformed_open_time(self):
        with pytest.raises(ValueError, match="DEFAULT_OPEN_TIME"):
            _validate_config(with_scheduling(default_open_time="9 o'clock"))

    def test_open_must_precede_close(self):
        with pytest.raises(ValueError, match="DEFAULT_OPEN_TIME must be before"):
            _validate_config(with_scheduling(default_open_time="21:00", default_close_time="9:00"))

    def test_max_booking_minutes_must_be_positive(self):
        with pytest.raises(ValueError, match="MAX_BOOKING_MINUTES"):
            _validate_config(with_booking(max_booking_minutes=0, conflict_lookback_minutes=0))

    def test_lookback_must_cover_longest_booking(self):
        with pytest.raises(ValueError, match="CONFLICT_LOOKBACK_MINUTES"):
            _validate_config(with_booking(max_booking_minutes=180, conflict_lookback_minutes=120))

    def test_tzinfo_property(self):
        assert SchedulingConfig(business_timezone="UTC").tzinfo.key == "UTC"

    def test_sub_configs_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            BookingConfig().max_booking_minutes = 5  # type: ignore[misc]


class TestSafeInt:
    def test_default_used_when_unset(self):
        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SLOT_MINUTES_TEST_VAR", "15")
        assert _safe_int("SLOT_MINUTES_TEST_VAR", "30") == 15

    def test_bad_value_names_variable(self, monkeypatch):
        monkeypatch.setenv("SLOT_MINUTES_TEST_VAR", "half-hour")
        with pytest.raises(ValueError, match="SLOT_MINUTES_TEST_VAR"):
            _safe_int("SLOT_MINUTES_TEST_VAR", "30")
