# salon_booking/reporter.py

from datetime import datetime
from typing import List

from sqlalchemy import func
from sqlmodel import Session, select

from salon_booking.clock import CivilClock, to_storage
from salon_booking.models import Booking, BookingStatus
from salon_booking.schemas import IncomeAnalytics, WindowStats


class DashboardReporter:
    """Read-only rollups over civil (fixed-offset) day, month and year windows."""

    def __init__(self, session: Session, clock: CivilClock):
        self.session = session
        self.clock = clock

    def _scalar(self, column, start: datetime, end: datetime, *criteria):
        stmt = (
            select(column)
            .where(Booking.booking_time >= to_storage(start))
            .where(Booking.booking_time <= to_storage(end))
        )
        for criterion in criteria:
            stmt = stmt.where(criterion)
        return self.session.exec(stmt).one()

    def _revenue(self, start: datetime, end: datetime) -> float:
        total = self._scalar(
            func.coalesce(func.sum(Booking.total_price), 0),
            start,
            end,
            Booking.status == BookingStatus.COMPLETED,
        )
        return float(total)

    def window_stats(self, window: str) -> WindowStats:
        start, end = self.clock.window(window)

        total_bookings = self._scalar(func.count(Booking.id), start, end)
        completed = self._scalar(func.count(Booking.id), start, end, Booking.status == BookingStatus.COMPLETED)
        customers = self._scalar(func.count(func.distinct(Booking.customer_id)), start, end)

        return WindowStats(
            window=window,
            start=start,
            end=end,
            total_revenue=self._revenue(start, end),
            total_customers=customers,
            total_bookings=total_bookings,
            completed_bookings=completed,
            pending_bookings=total_bookings - completed,
        )

    def today_stats(self) -> WindowStats:
        return self.window_stats("day")

    def monthly_stats(self) -> WindowStats:
        return self.window_stats("month")

    def yearly_stats(self) -> WindowStats:
        return self.window_stats("year")

    def income_analytics(self) -> IncomeAnalytics:
        return IncomeAnalytics(
            today_revenue=self._revenue(*self.clock.window("day")),
            monthly_revenue=self._revenue(*self.clock.window("month")),
            yearly_revenue=self._revenue(*self.clock.window("year")),
        )

    def recent_bookings(self, limit: int = 10) -> List[Booking]:
        return self.session.exec(
            select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit)
        ).all()
