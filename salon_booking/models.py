# salon_booking/models.py

from enum import Enum
from typing import Optional, List
from datetime import datetime

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field, Relationship

from salon_booking.clock import utc_now, to_storage


def _stamp() -> datetime:
    return to_storage(utc_now())


class BookingStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


# Active bookings hold their (seat, time) slot
ACTIVE_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.POSTPONED)
TERMINAL_STATUSES = (BookingStatus.CANCELLED, BookingStatus.COMPLETED)

_ACTIVE_SQL = text("status IN ('CONFIRMED', 'POSTPONED')")


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    price: float
    duration: int  # minutes
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=_stamp)
    updated_at: datetime = Field(default_factory=_stamp)

    bookings: List["Booking"] = Relationship(back_populates="service")


class Customer(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    mobile: str = Field(index=True, unique=True)
    place: str

    # booking history, most recent first
    bookings: List["Booking"] = Relationship(
        back_populates="customer",
        sa_relationship_kwargs={"order_by": "Booking.booking_time.desc()"},
    )


class Booking(SQLModel, table=True):
    __table_args__ = (
        # At most one active booking per seat per instant
        Index(
            "uq_booking_active_seat_time",
            "seat_number",
            "booking_time",
            unique=True,
            sqlite_where=_ACTIVE_SQL,
            postgresql_where=_ACTIVE_SQL,
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    customer_id: int = Field(foreign_key="customer.id", index=True)
    service_id: int = Field(foreign_key="service.id", index=True)
    seat_number: int
    booking_time: datetime = Field(index=True)  # UTC
    total_price: float
    status: BookingStatus = Field(default=BookingStatus.CONFIRMED, index=True)
    created_at: datetime = Field(default_factory=_stamp)
    updated_at: datetime = Field(default_factory=_stamp)

    customer: Optional[Customer] = Relationship(back_populates="bookings")
    service: Optional[Service] = Relationship(back_populates="bookings")
