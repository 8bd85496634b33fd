# salon_booking/ledger.py

"""
Booking ledger: seat/time allocation and the booking lifecycle.

    CONFIRMED <-> POSTPONED
    CONFIRMED | POSTPONED -> CANCELLED | COMPLETED   (terminal)

No two active (CONFIRMED / POSTPONED) bookings may share a
(seat_number, booking_time) pair. The ledger checks before writing so callers
get a readable error, but the guarantee under concurrent writers comes from
the partial unique index ``uq_booking_active_seat_time``: a writer that loses
the race fails at commit, the transaction is rolled back and the caller sees
``Conflict``.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from salon_booking.catalog import ServiceCatalog
from salon_booking.clock import CivilClock, as_utc, to_storage, utc_now
from salon_booking.customers import CustomerDirectory
from salon_booking.errors import Conflict, InvalidTransition, NotFound
from salon_booking.logger import logger
from salon_booking.models import ACTIVE_STATUSES, TERMINAL_STATUSES, Booking, BookingStatus
from salon_booking.schemas import BookingPublic, BookingUpdate, CustomerSpec, SeatAvailability

SEAT_TAKEN = "Seat is already booked at this time"

ALLOWED_TRANSITIONS = {
    BookingStatus.CONFIRMED: set(BookingStatus),
    BookingStatus.POSTPONED: set(BookingStatus),
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}


class BookingLedger:
    def __init__(
        self,
        session: Session,
        catalog: ServiceCatalog,
        customers: CustomerDirectory,
        clock: CivilClock,
        seat_count: int = 10,
    ):
        self.session = session
        self.catalog = catalog
        self.customers = customers
        self.clock = clock
        self.seat_count = seat_count

    # Helpers

    def _active_at(self, seat_number: int, booking_time: datetime, exclude_id: Optional[int] = None) -> Optional[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.seat_number == seat_number)
            .where(Booking.booking_time == to_storage(booking_time))
            .where(Booking.status.in_(ACTIVE_STATUSES))
        )
        if exclude_id is not None:
            stmt = stmt.where(Booking.id != exclude_id)
        return self.session.exec(stmt).first()

    def _ensure_slot_free(self, seat_number: int, booking_time: datetime, exclude_id: Optional[int] = None):
        if self._active_at(seat_number, booking_time, exclude_id) is not None:
            logger.warning(f"Seat conflict: seat {seat_number} at {booking_time.isoformat()}")
            raise Conflict(SEAT_TAKEN)

    def _commit(self, booking: Booking) -> Booking:
        seat_number, booking_time = booking.seat_number, booking.booking_time
        self.session.add(booking)
        try:
            self.session.commit()
        except IntegrityError:
            # lost the race for the slot; nothing from this operation is kept
            self.session.rollback()
            logger.warning(f"Seat conflict at commit: seat {seat_number} at {booking_time}")
            raise Conflict(SEAT_TAKEN)
        self.session.refresh(booking)
        return booking

    def _ordered(self, stmt) -> List[Booking]:
        return self.session.exec(stmt.order_by(Booking.booking_time, Booking.id)).all()

    # Commands

    def create(self, customer_spec: CustomerSpec, service_id: int, seat_number: int, booking_time: datetime) -> Booking:
        # 1) Seat must be free at that instant
        self._ensure_slot_free(seat_number, booking_time)

        # 2) Service must exist and still be offered
        service = self.catalog.get_bookable(service_id)

        # 3) Resolve customer (flushed only, committed with the booking)
        customer = self.customers.upsert_by_mobile(customer_spec, commit=False)

        # 4) Persist with a snapshot of the current price
        booking = Booking(
            customer_id=customer.id,
            service_id=service.id,
            seat_number=seat_number,
            booking_time=to_storage(booking_time),
            total_price=service.price,
            status=BookingStatus.CONFIRMED,
        )
        booking = self._commit(booking)
        logger.info(
            f"Booking created: id={booking.id}, seat={booking.seat_number}, "
            f"time={as_utc(booking.booking_time).isoformat()}, customer={customer.mobile}"
        )
        return booking

    def find_one(self, booking_id: int) -> Booking:
        booking = self.session.get(Booking, booking_id)
        if booking is None:
            raise NotFound(f"Booking with ID {booking_id} not found")
        return booking

    def update(self, booking_id: int, patch: BookingUpdate) -> Booking:
        booking = self.find_one(booking_id)
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)

        # 1) Lifecycle
        if booking.status in TERMINAL_STATUSES:
            logger.warning(f"Rejected change to {booking.status.value} booking {booking.id}")
            raise InvalidTransition(f"Booking {booking.id} is {booking.status.value} and can no longer be changed")

        target_status = changes.get("status", booking.status)
        if target_status not in ALLOWED_TRANSITIONS[booking.status]:
            raise InvalidTransition(f"Cannot move booking {booking.id} from {booking.status.value} to {target_status.value}")

        # 2) Re-check the slot if it moves and the booking still holds it
        seat_number = changes.get("seat_number", booking.seat_number)
        moved = "booking_time" in changes or "seat_number" in changes
        if moved and target_status in ACTIVE_STATUSES:
            booking_time = changes.get("booking_time", booking.booking_time)
            self._ensure_slot_free(seat_number, booking_time, exclude_id=booking.id)

        # 3) A new service means a new price snapshot
        if "service_id" in changes and changes["service_id"] != booking.service_id:
            service = self.catalog.get_bookable(changes["service_id"])
            booking.service_id = service.id
            booking.total_price = service.price

        if "booking_time" in changes:
            booking.booking_time = to_storage(changes["booking_time"])
        booking.seat_number = seat_number
        booking.status = target_status
        booking.updated_at = to_storage(utc_now())

        booking = self._commit(booking)
        logger.info(f"Booking updated: id={booking.id}, status={booking.status.value}, seat={booking.seat_number}")
        return booking

    def postpone(self, booking_id: int, new_booking_time: datetime) -> Booking:
        return self.update(booking_id, BookingUpdate(booking_time=new_booking_time, status=BookingStatus.POSTPONED))

    def cancel(self, booking_id: int) -> Booking:
        return self.update(booking_id, BookingUpdate(status=BookingStatus.CANCELLED))

    def complete(self, booking_id: int) -> Booking:
        return self.update(booking_id, BookingUpdate(status=BookingStatus.COMPLETED))

    def remove(self, booking_id: int) -> BookingPublic:
        booking = self.find_one(booking_id)
        # the row is gone after commit, keep what it looked like
        snapshot = BookingPublic.model_validate(booking)
        self.session.delete(booking)
        self.session.commit()
        logger.info(f"Booking deleted: id={booking_id}")
        return snapshot

    # Queries

    def list_all(self) -> List[Booking]:
        return self._ordered(select(Booking))

    def list_today_server_local(self) -> List[Booking]:
        """Bookings between the host's local midnights (not the civil day)."""
        start, end = self.clock.server_local_day()
        return self._ordered(
            select(Booking)
            .where(Booking.booking_time >= to_storage(start))
            .where(Booking.booking_time < to_storage(end))
        )

    def list_today_civil(self) -> List[Booking]:
        start, end = self.clock.start_of_day(), self.clock.end_of_day()
        return self._ordered(
            select(Booking)
            .where(Booking.booking_time >= to_storage(start))
            .where(Booking.booking_time <= to_storage(end))
        )

    def available_seats(self, instant: datetime) -> SeatAvailability:
        booked = set(
            self.session.exec(
                select(Booking.seat_number)
                .where(Booking.booking_time == to_storage(instant))
                .where(Booking.status.in_(ACTIVE_STATUSES))
            ).all()
        )
        all_seats = range(1, self.seat_count + 1)
        return SeatAvailability(
            booking_time=instant,
            available_seats=[seat for seat in all_seats if seat not in booked],
            booked_seats=[seat for seat in all_seats if seat in booked],
        )
