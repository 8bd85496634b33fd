# salon_booking/deps.py

from datetime import timedelta

from fastapi import Depends
from sqlmodel import Session

from salon_booking.catalog import ServiceCatalog
from salon_booking.clock import CivilClock
from salon_booking.config import settings
from salon_booking.customers import CustomerDirectory
from salon_booking.db import get_session
from salon_booking.ledger import BookingLedger
from salon_booking.reporter import DashboardReporter


# Everything is built per request around the request's session

def get_clock() -> CivilClock:
    return CivilClock(utc_offset=timedelta(minutes=settings.CIVIL_UTC_OFFSET_MINUTES))


def get_catalog(session: Session = Depends(get_session)) -> ServiceCatalog:
    return ServiceCatalog(session)


def get_directory(session: Session = Depends(get_session)) -> CustomerDirectory:
    return CustomerDirectory(session)


def get_ledger(
    session: Session = Depends(get_session),
    catalog: ServiceCatalog = Depends(get_catalog),
    directory: CustomerDirectory = Depends(get_directory),
    clock: CivilClock = Depends(get_clock),
) -> BookingLedger:
    return BookingLedger(session, catalog, directory, clock, seat_count=settings.SEAT_COUNT)


def get_reporter(
    session: Session = Depends(get_session),
    clock: CivilClock = Depends(get_clock),
) -> DashboardReporter:
    return DashboardReporter(session, clock)
