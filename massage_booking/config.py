"""
Centralized configuration with environment variable overrides.

Business timezone, slot geometry, lead time, and the booking-duration
bounds used by the conflict check are all configurable here. Nothing is
hardcoded in scheduling logic.
"""

import logging
import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from massage_booking.logging_context import configure_logging
from massage_booking.utils import parse_hhmm, to_minute_of_day

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _is_hhmm(value: str) -> bool:
    try:
        parse_hhmm(value)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot geometry and availability rules."""

    business_timezone: str = os.getenv("BUSINESS_TIMEZONE", "Asia/Manila")
    slot_minutes: int = _safe_int("SLOT_MINUTES", "30")
    lead_time_minutes: int = _safe_int("LEAD_TIME_MINUTES", "60")
    default_open_time: str = os.getenv("DEFAULT_OPEN_TIME", "09:00")
    default_close_time: str = os.getenv("DEFAULT_CLOSE_TIME", "21:00")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.business_timezone)


@dataclass(frozen=True)
class BookingConfig:
    """Bounds on booking durations and the conflict query window."""

    max_booking_minutes: int = _safe_int("MAX_BOOKING_MINUTES", "120")
    # How far before a proposed start to look for bookings that may still be running.
    conflict_lookback_minutes: int = _safe_int("CONFLICT_LOOKBACK_MINUTES", "120")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "massage-booking-scheduler")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    try:
        ZoneInfo(config.scheduling.business_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(
            f"BUSINESS_TIMEZONE is not a known timezone: {config.scheduling.business_timezone!r}"
        ) from None

    if config.scheduling.slot_minutes < 1:
        raise ValueError(f"SLOT_MINUTES must be >= 1, got {config.scheduling.slot_minutes}")
    if config.scheduling.lead_time_minutes < 0:
        raise ValueError(
            f"LEAD_TIME_MINUTES must be >= 0, got {config.scheduling.lead_time_minutes}"
        )

    for name, value in [
        ("DEFAULT_OPEN_TIME", config.scheduling.default_open_time),
        ("DEFAULT_CLOSE_TIME", config.scheduling.default_close_time),
    ]:
        if not _is_hhmm(value):
            raise ValueError(f"{name} must be in HH:MM format, got {value!r}")
    if to_minute_of_day(config.scheduling.default_open_time) >= to_minute_of_day(
        config.scheduling.default_close_time
    ):
        raise ValueError(
            "DEFAULT_OPEN_TIME must be before DEFAULT_CLOSE_TIME, "
            f"got {config.scheduling.default_open_time}-{config.scheduling.default_close_time}"
        )

    if config.booking.max_booking_minutes < 1:
        raise ValueError(
            f"MAX_BOOKING_MINUTES must be >= 1, got {config.booking.max_booking_minutes}"
        )
    if config.booking.conflict_lookback_minutes < config.booking.max_booking_minutes:
        raise ValueError(
            "CONFLICT_LOOKBACK_MINUTES must be >= MAX_BOOKING_MINUTES, "
            f"got {config.booking.conflict_lookback_minutes} < {config.booking.max_booking_minutes}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(config.log_level)
    logger.info(
        "Configuration loaded for '%s' (timezone %s)",
        config.app_name, config.scheduling.business_timezone,
    )
    return config


# Singleton instance
settings = load_config()
