# salon_booking/validation.py

"""
Input checks run by the routers before anything reaches the core.

The core trusts its inputs; everything that can be rejected on shape or range
alone is rejected here with ``InvalidInput`` (422).
"""

from datetime import datetime
from typing import Optional

from salon_booking.clock import CivilClock
from salon_booking.errors import InvalidInput
from salon_booking.schemas import CustomerSpec, CustomerUpdate, ServiceCreate, ServiceUpdate

MIN_SERVICE_DURATION = 5
MAX_RECENT_LIMIT = 100


def validate_seat_number(seat_number: int, seat_count: int) -> int:
    if not (1 <= seat_number <= seat_count):
        raise InvalidInput(f"seat_number must be between 1 and {seat_count}")
    return seat_number


def normalize_instant(value: datetime, clock: CivilClock) -> datetime:
    """A timestamp without an offset is read as salon (civil) time."""
    if value.tzinfo is None:
        return value.replace(tzinfo=clock.tz)
    return value


def parse_instant(raw: Optional[str], clock: CivilClock) -> datetime:
    if not raw:
        raise InvalidInput("datetime is required")
    try:
        value = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        raise InvalidInput(f"Invalid ISO-8601 date-time: {raw}")
    return normalize_instant(value, clock)


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise InvalidInput(f"{field} must not be empty")
    return value.strip()


def _check_price(price: float):
    if price < 0:
        raise InvalidInput("price cannot be negative")


def _check_duration(duration: int):
    if duration < MIN_SERVICE_DURATION:
        raise InvalidInput(f"duration must be at least {MIN_SERVICE_DURATION} minutes")


def validate_service_create(spec: ServiceCreate) -> ServiceCreate:
    name = _require_text(spec.name, "name")
    _check_price(spec.price)
    _check_duration(spec.duration)
    return spec.model_copy(update={"name": name})


# Fields that may be left out of a patch but never cleared
SERVICE_REQUIRED_FIELDS = ("name", "price", "duration", "is_active")


def validate_service_update(patch: ServiceUpdate) -> ServiceUpdate:
    for field in SERVICE_REQUIRED_FIELDS:
        if field in patch.model_fields_set and getattr(patch, field) is None:
            raise InvalidInput(f"{field} cannot be null")
    updates = {}
    if patch.name is not None:
        updates["name"] = _require_text(patch.name, "name")
    if patch.price is not None:
        _check_price(patch.price)
    if patch.duration is not None:
        _check_duration(patch.duration)
    return patch.model_copy(update=updates)


def validate_customer_spec(spec: CustomerSpec) -> CustomerSpec:
    return CustomerSpec(
        name=_require_text(spec.name, "name"),
        mobile=_require_text(spec.mobile, "mobile"),
        place=_require_text(spec.place, "place"),
    )


def validate_customer_update(patch: CustomerUpdate) -> CustomerUpdate:
    updates = {}
    if patch.name is not None:
        updates["name"] = _require_text(patch.name, "name")
    if patch.place is not None:
        updates["place"] = _require_text(patch.place, "place")
    return patch.model_copy(update=updates)


def validate_limit(limit: int) -> int:
    if not (1 <= limit <= MAX_RECENT_LIMIT):
        raise InvalidInput(f"limit must be between 1 and {MAX_RECENT_LIMIT}")
    return limit
