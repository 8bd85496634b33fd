# salon_booking/routers/customers_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from salon_booking.customers import CustomerDirectory
from salon_booking.deps import get_directory
from salon_booking.models import Customer
from salon_booking.schemas import BookingSummary, CustomerDetail, CustomerPublic, CustomerSpec, CustomerUpdate
from salon_booking.validation import validate_customer_spec, validate_customer_update

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
)


# Latest bookings shown per customer in list views
LIST_HISTORY = 5
SEARCH_HISTORY = 3


def _with_history(customers: List[Customer], limit: int) -> List[CustomerDetail]:
    # relationship is ordered most recent first
    return [
        CustomerDetail(
            **CustomerPublic.model_validate(customer).model_dump(),
            bookings=[BookingSummary.model_validate(b) for b in customer.bookings[:limit]],
        )
        for customer in customers
    ]


@router.post("", response_model=CustomerPublic, status_code=201)
def create_customer(spec: CustomerSpec, directory: CustomerDirectory = Depends(get_directory)):
    return directory.create(validate_customer_spec(spec))


@router.get("", response_model=List[CustomerDetail])
def list_customers(directory: CustomerDirectory = Depends(get_directory)):
    return _with_history(directory.list(), LIST_HISTORY)


@router.get("/search", response_model=List[CustomerDetail])
def search_customers(q: str = "", directory: CustomerDirectory = Depends(get_directory)):
    return _with_history(directory.search(q), SEARCH_HISTORY)



@router.get("/mobile/{mobile}", response_model=CustomerDetail)
def get_customer_by_mobile(mobile: str, directory: CustomerDirectory = Depends(get_directory)):
    customer = directory.get_by_mobile(mobile)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/{customer_id}", response_model=CustomerDetail)
def get_customer(customer_id: int, directory: CustomerDirectory = Depends(get_directory)):
    return directory.get(customer_id)


@router.patch("/{customer_id}", response_model=CustomerPublic)
def update_customer(customer_id: int, patch: CustomerUpdate, directory: CustomerDirectory = Depends(get_directory)):
    return directory.update(customer_id, validate_customer_update(patch))
