"""Injectable clocks bound to the business timezone."""

from datetime import date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    tz: ZoneInfo

    def now(self) -> datetime:
        """Current instant, timezone-aware, expressed in the business timezone."""
        ...


class SystemClock:
    """Wall clock in the business timezone."""

    def __init__(self, tz: ZoneInfo) -> None:
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Clock frozen at a given instant. Used by tests and the demo CLI."""

    def __init__(self, moment: datetime, tz: ZoneInfo) -> None:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=tz)
        self.tz = tz
        self._moment = moment.astimezone(tz)

    def now(self) -> datetime:
        return self._moment

    def advance(self, **kwargs: float) -> None:
        self._moment = self._moment + timedelta(**kwargs)


def local_day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return [start of ``day``, start of the next day) as aware datetimes in ``tz``."""
    start = datetime(day.year, day.month, day.day, tzinfo=tz)
    following = day + timedelta(days=1)
    end = datetime(following.year, following.month, following.day, tzinfo=tz)
    return start, end
