# salon_booking/routers/dashboard_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from salon_booking.config import settings
from salon_booking.deps import get_reporter
from salon_booking.reporter import DashboardReporter
from salon_booking.schemas import BookingPublic, IncomeAnalytics, WindowStats
from salon_booking.validation import validate_limit

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/today-stats", response_model=WindowStats)
def get_today_stats(reporter: DashboardReporter = Depends(get_reporter)):
    return reporter.today_stats()


@router.get("/monthly-stats", response_model=WindowStats)
def get_monthly_stats(reporter: DashboardReporter = Depends(get_reporter)):
    return reporter.monthly_stats()


@router.get("/yearly-stats", response_model=WindowStats)
def get_yearly_stats(reporter: DashboardReporter = Depends(get_reporter)):
    return reporter.yearly_stats()


@router.get("/income-analytics", response_model=IncomeAnalytics)
def get_income_analytics(reporter: DashboardReporter = Depends(get_reporter)):
    return reporter.income_analytics()


@router.get("/recent-bookings", response_model=List[BookingPublic])
def get_recent_bookings(limit: Optional[int] = None, reporter: DashboardReporter = Depends(get_reporter)):
    limit = validate_limit(limit) if limit is not None else settings.RECENT_BOOKINGS_LIMIT
    return reporter.recent_bookings(limit)
