# salon_booking/clock.py

"""
Civil time for the salon.

Dashboard windows (day / month / year) are computed in a fixed UTC offset,
IST (+05:30) by default. All arithmetic uses an explicit ``timezone`` object so
the host's TZ setting never leaks in. The one exception is
``server_local_day()``, which deliberately follows the host clock and backs the
``/bookings/today`` listing.
"""

from datetime import datetime, time, timedelta, timezone
from typing import Callable, Optional, Tuple

IST_OFFSET = timedelta(hours=5, minutes=30)

# Inclusive window ends stop one tick before the next boundary
TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(instant: datetime) -> datetime:
    """Aware UTC datetime. Naive values are taken to already be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def to_storage(instant: datetime) -> datetime:
    """Aware UTC, the form every instant takes in the database."""
    return as_utc(instant)


class CivilClock:
    def __init__(self, utc_offset: timedelta = IST_OFFSET, now: Optional[Callable[[], datetime]] = None):
        self.tz = timezone(utc_offset)
        self._now = now or utc_now

    def now(self) -> datetime:
        return as_utc(self._now())

    def to_civil(self, instant: datetime) -> datetime:
        return as_utc(instant).astimezone(self.tz)

    def civil_now(self) -> datetime:
        return self.to_civil(self.now())

    def _civil(self, instant: Optional[datetime]) -> datetime:
        return self.to_civil(instant) if instant is not None else self.civil_now()

    # Day

    def start_of_day(self, instant: Optional[datetime] = None) -> datetime:
        civil = self._civil(instant)
        return datetime(civil.year, civil.month, civil.day, tzinfo=self.tz)

    def end_of_day(self, instant: Optional[datetime] = None) -> datetime:
        return self.start_of_day(instant) + timedelta(days=1) - TICK

    # Month

    def start_of_month(self, instant: Optional[datetime] = None) -> datetime:
        civil = self._civil(instant)
        return datetime(civil.year, civil.month, 1, tzinfo=self.tz)

    def end_of_month(self, instant: Optional[datetime] = None) -> datetime:
        start = self.start_of_month(instant)
        if start.month == 12:
            next_month = start.replace(year=start.year + 1, month=1)
        else:
            next_month = start.replace(month=start.month + 1)
        return next_month - TICK

    # Year

    def start_of_year(self, instant: Optional[datetime] = None) -> datetime:
        civil = self._civil(instant)
        return datetime(civil.year, 1, 1, tzinfo=self.tz)

    def end_of_year(self, instant: Optional[datetime] = None) -> datetime:
        start = self.start_of_year(instant)
        return start.replace(year=start.year + 1) - TICK

    def window(self, kind: str, instant: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        if kind == "day":
            return self.start_of_day(instant), self.end_of_day(instant)
        if kind == "month":
            return self.start_of_month(instant), self.end_of_month(instant)
        if kind == "year":
            return self.start_of_year(instant), self.end_of_year(instant)
        raise ValueError(f"Unknown window kind: {kind}")

    def server_local_day(self) -> Tuple[datetime, datetime]:
        """[local midnight, next local midnight) using the host's timezone."""
        today = self.now().astimezone().date()
        # naive local midnights resolved one by one, so DST days get their own offsets
        start = datetime.combine(today, time.min).astimezone()
        end = datetime.combine(today + timedelta(days=1), time.min).astimezone()
        return start, end
