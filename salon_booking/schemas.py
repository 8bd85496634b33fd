# salon_booking/schemas.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salon_booking.clock import as_utc
from salon_booking.models import BookingStatus


# Services

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    price: float
    duration: int
    description: Optional[str] = None
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[int] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    duration: int
    description: Optional[str] = None
    is_active: bool


# Customers

class CustomerSpec(BaseModel):
    name: str
    mobile: str
    place: str


class CustomerUpdate(BaseModel):
    # mobile is the identity key and cannot be patched
    name: Optional[str] = None
    place: Optional[str] = None


class CustomerPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    mobile: str
    place: str


# Bookings

class _UtcTimes(BaseModel):
    @field_validator("booking_time", "created_at", "updated_at", check_fields=False)
    @classmethod
    def _attach_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class BookingCreate(BaseModel):
    customer: CustomerSpec
    service_id: int
    seat_number: int
    booking_time: datetime


class BookingUpdate(BaseModel):
    service_id: Optional[int] = None
    seat_number: Optional[int] = None
    booking_time: Optional[datetime] = None
    status: Optional[BookingStatus] = None


class BookingPostpone(BaseModel):
    booking_time: datetime


class BookingSummary(_UtcTimes):
    model_config = ConfigDict(from_attributes=True)

    id: int
    seat_number: int
    booking_time: datetime
    total_price: float
    status: BookingStatus
    service: ServicePublic


class BookingPublic(_UtcTimes):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    service_id: int
    seat_number: int
    booking_time: datetime
    total_price: float
    status: BookingStatus
    created_at: datetime
    updated_at: datetime
    customer: CustomerPublic
    service: ServicePublic


class CustomerDetail(CustomerPublic):
    bookings: List[BookingSummary] = []


class SeatAvailability(BaseModel):
    booking_time: datetime
    available_seats: List[int]
    booked_seats: List[int]


# Dashboard

class WindowStats(BaseModel):
    window: str
    start: datetime
    end: datetime
    total_revenue: float
    total_customers: int
    total_bookings: int
    completed_bookings: int
    pending_bookings: int


class IncomeAnalytics(BaseModel):
    today_revenue: float
    monthly_revenue: float
    yearly_revenue: float
