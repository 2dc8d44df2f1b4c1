"""
Command-line entry point for the scheduling core.

Runs availability listings and booking checks against the seeded demo
providers and prints JSON. Useful for exploring the rules without a
running backend.

Usage:
    python main.py slots --provider prov-maria --date 2024-06-10
    python main.py slots --provider prov-maria --date 2024-06-10 --duration 90
    python main.py check --provider prov-maria --start 2024-06-10T16:30 --duration 60
    python main.py --now 2024-06-10T14:05 slots --provider prov-ana --date 2024-06-10
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from typing import Optional

from massage_booking.config import settings
from massage_booking.logging_context import new_request_id, request_scope
from massage_booking.scheduling.availability_resolver import AvailabilityResolver
from massage_booking.scheduling.clock import Clock, FixedClock, SystemClock
from massage_booking.scheduling.conflict_guard import ConflictGuard
from massage_booking.scheduling.errors import SchedulingError
from massage_booking.tools.demo_data import seed_demo_store
from massage_booking.tools.schedule_store import InMemoryScheduleStore

logger = logging.getLogger(__name__)


def _local_datetime(value: str) -> datetime:
    """Parse an ISO datetime; naive values are read in the business timezone."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=settings.scheduling.tzinfo)
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query provider availability and booking conflicts on demo data."
    )
    parser.add_argument(
        "--now",
        type=_local_datetime,
        default=None,
        help="Pretend the current time is this ISO datetime (default: wall clock).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    slots = sub.add_parser("slots", help="List a provider's slots for a date.")
    slots.add_argument("--provider", required=True, help="Provider ID.")
    slots.add_argument("--date", required=True, type=date.fromisoformat, help="Local date, YYYY-MM-DD.")
    slots.add_argument(
        "--duration", type=int, default=None, help="Minutes each slot must be free for."
    )

    check = sub.add_parser("check", help="Check whether a booking would be accepted.")
    check.add_argument("--provider", required=True, help="Provider ID.")
    check.add_argument("--start", required=True, type=_local_datetime, help="Start time, ISO format.")
    check.add_argument("--duration", type=int, required=True, help="Length in minutes.")
    return parser


def run(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    tz = settings.scheduling.tzinfo
    clock: Clock = FixedClock(args.now, tz) if args.now else SystemClock(tz)
    store = seed_demo_store(InMemoryScheduleStore())

    with request_scope(new_request_id("CLI")):
        try:
            if args.command == "slots":
                listing = AvailabilityResolver(store, clock=clock).slots_for(
                    args.provider, args.date, args.duration
                )
                output = listing.model_dump(mode="json", exclude_none=True)
            else:
                decision = ConflictGuard(store).can_book(
                    args.provider, args.start, args.duration
                )
                output = decision.model_dump(mode="json", exclude_none=True)
        except SchedulingError as exc:
            logger.error("%s", exc)
            return 1

    sys.stdout.write(json.dumps(output, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(run())
