# salon_booking/routers/bookings_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from salon_booking.clock import CivilClock
from salon_booking.config import settings
from salon_booking.deps import get_clock, get_ledger
from salon_booking.ledger import BookingLedger
from salon_booking.schemas import BookingCreate, BookingPostpone, BookingPublic, BookingUpdate, SeatAvailability
from salon_booking.validation import (
    normalize_instant,
    parse_instant,
    validate_customer_spec,
    validate_seat_number,
)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post("", response_model=BookingPublic, status_code=201)
def create_booking(
    booking: BookingCreate,
    ledger: BookingLedger = Depends(get_ledger),
    clock: CivilClock = Depends(get_clock),
):
    # 1) Validate payload
    customer = validate_customer_spec(booking.customer)
    seat_number = validate_seat_number(booking.seat_number, settings.SEAT_COUNT)
    booking_time = normalize_instant(booking.booking_time, clock)

    # 2) Hand over to the ledger
    return ledger.create(customer, booking.service_id, seat_number, booking_time)


@router.get("", response_model=List[BookingPublic])
def list_bookings(ledger: BookingLedger = Depends(get_ledger)):
    return ledger.list_all()


# Host-local day, kept as-is for existing consumers
@router.get("/today", response_model=List[BookingPublic])
def list_today_bookings(ledger: BookingLedger = Depends(get_ledger)):
    return ledger.list_today_server_local()


@router.get("/today/civil", response_model=List[BookingPublic])
def list_today_bookings_civil(ledger: BookingLedger = Depends(get_ledger)):
    return ledger.list_today_civil()


@router.get("/available-seats", response_model=SeatAvailability)
def get_available_seats(
    at: Optional[str] = Query(None, alias="datetime"),
    ledger: BookingLedger = Depends(get_ledger),
    clock: CivilClock = Depends(get_clock),
):
    return ledger.available_seats(parse_instant(at, clock))


@router.get("/{booking_id}", response_model=BookingPublic)
def get_booking(booking_id: int, ledger: BookingLedger = Depends(get_ledger)):
    return ledger.find_one(booking_id)


@router.patch("/{booking_id}", response_model=BookingPublic)
def update_booking(
    booking_id: int,
    patch: BookingUpdate,
    ledger: BookingLedger = Depends(get_ledger),
    clock: CivilClock = Depends(get_clock),
):
    updates = {}
    if patch.seat_number is not None:
        updates["seat_number"] = validate_seat_number(patch.seat_number, settings.SEAT_COUNT)
    if patch.booking_time is not None:
        updates["booking_time"] = normalize_instant(patch.booking_time, clock)
    return ledger.update(booking_id, patch.model_copy(update=updates))


@router.patch("/{booking_id}/postpone", response_model=BookingPublic)
def postpone_booking(
    booking_id: int,
    body: BookingPostpone,
    ledger: BookingLedger = Depends(get_ledger),
    clock: CivilClock = Depends(get_clock),
):
    return ledger.postpone(booking_id, normalize_instant(body.booking_time, clock))


@router.patch("/{booking_id}/cancel", response_model=BookingPublic)
def cancel_booking(booking_id: int, ledger: BookingLedger = Depends(get_ledger)):
    return ledger.cancel(booking_id)


@router.patch("/{booking_id}/complete", response_model=BookingPublic)
def complete_booking(booking_id: int, ledger: BookingLedger = Depends(get_ledger)):
    return ledger.complete(booking_id)


@router.delete("/{booking_id}", response_model=BookingPublic)
def delete_booking(booking_id: int, ledger: BookingLedger = Depends(get_ledger)):
    return ledger.remove(booking_id)
