"""Tests for the booking status transition table."""

import pytest

from massage_booking.schemas.booking_schema import ACTIVE_STATUSES, TERMINAL_STATUSES, BookingStatus
from massage_booking.scheduling.errors import InvalidStatusTransitionError
from massage_booking.scheduling.lifecycle import BookingLifecycle


class TestStatusSets:
    def test_active_and_terminal_partition_all_statuses(self):
        assert ACTIVE_STATUSES | TERMINAL_STATUSES == set(BookingStatus)
        assert not ACTIVE_STATUSES & TERMINAL_STATUSES

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {
            BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.REJECTED,
        }


class TestTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            (BookingStatus.PENDING, BookingStatus.ACCEPTED),
            (BookingStatus.PENDING, BookingStatus.REJECTED),
            (BookingStatus.PENDING, BookingStatus.CANCELLED),
            (BookingStatus.ACCEPTED, BookingStatus.CANCELLED),
            (BookingStatus.ACCEPTED, BookingStatus.PROVIDER_EN_ROUTE),
            (BookingStatus.PROVIDER_EN_ROUTE, BookingStatus.PROVIDER_ARRIVED),
            (BookingStatus.PROVIDER_ARRIVED, BookingStatus.IN_PROGRESS),
            (BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED),
        ],
    )
    def test_allowed(self, current, target):
        assert BookingLifecycle.transition(current, target) == target

    @pytest.mark.parametrize(
        "current, target",
        [
            (BookingStatus.PENDING, BookingStatus.COMPLETED),
            (BookingStatus.ACCEPTED, BookingStatus.REJECTED),
            (BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED),
            (BookingStatus.CANCELLED, BookingStatus.ACCEPTED),
            (BookingStatus.COMPLETED, BookingStatus.PENDING),
        ],
    )
    def test_disallowed(self, current, target):
        with pytest.raises(InvalidStatusTransitionError, match="Valid targets"):
            BookingLifecycle.transition(current, target)

    @pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
    def test_terminal_statuses_have_no_exits(self, status):
        assert BookingLifecycle.get_valid_targets(status) == []
        assert BookingLifecycle.is_terminal(status)

    def test_pending_targets(self):
        assert set(BookingLifecycle.get_valid_targets(BookingStatus.PENDING)) == {
            BookingStatus.ACCEPTED, BookingStatus.REJECTED, BookingStatus.CANCELLED,
        }
