# salon_booking/customers.py

from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from salon_booking.errors import Conflict, NotFound
from salon_booking.logger import logger
from salon_booking.models import Customer
from salon_booking.schemas import CustomerSpec, CustomerUpdate


class CustomerDirectory:
    """Customers keyed by mobile number."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, spec: CustomerSpec) -> Customer:
        customer = Customer(**spec.model_dump())
        self.session.add(customer)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict(f"Customer with mobile {spec.mobile} already exists")
        self.session.refresh(customer)
        logger.info(f"Customer created: id={customer.id}, mobile={customer.mobile}")
        return customer

    def list(self) -> List[Customer]:
        return self.session.exec(select(Customer).order_by(Customer.name)).all()

    def get(self, customer_id: int) -> Customer:
        customer = self.session.get(Customer, customer_id)
        if customer is None:
            raise NotFound(f"Customer with ID {customer_id} not found")
        return customer

    def get_by_mobile(self, mobile: str) -> Optional[Customer]:
        # None is a normal answer here, booking intake relies on it
        return self.session.exec(select(Customer).where(Customer.mobile == mobile)).first()

    def update(self, customer_id: int, patch: CustomerUpdate) -> Customer:
        customer = self.get(customer_id)
        for key, value in patch.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(customer, key, value)
        self.session.add(customer)
        self.session.commit()
        self.session.refresh(customer)
        logger.info(f"Customer updated: id={customer.id}")
        return customer

    def search(self, text: str) -> List[Customer]:
        term = f"%{text.lower()}%"
        return self.session.exec(
            select(Customer)
            .where(
                or_(
                    func.lower(Customer.name).like(term),
                    func.lower(Customer.mobile).like(term),
                    func.lower(Customer.place).like(term),
                )
            )
            .order_by(Customer.name)
        ).all()

    def upsert_by_mobile(self, spec: CustomerSpec, commit: bool = True) -> Customer:
        """
        Existing mobile: overwrite name/place with the incoming values.
        New mobile: create the customer.

        With ``commit=False`` the change is only flushed, so the caller can
        roll it back together with its own writes. If another writer registers
        the same mobile in between, the lookup is repeated once and the row it
        created is updated instead.
        """
        try:
            return self._write_customer(spec, commit)
        except IntegrityError:
            self.session.rollback()
            logger.info(f"Customer {spec.mobile} registered concurrently, retrying as update")
        try:
            return self._write_customer(spec, commit)
        except IntegrityError:
            self.session.rollback()
            raise Conflict(f"Customer with mobile {spec.mobile} could not be saved, retry the request")

    def _write_customer(self, spec: CustomerSpec, commit: bool) -> Customer:
        customer = self.get_by_mobile(spec.mobile)
        if customer is None:
            customer = Customer(**spec.model_dump())
            self.session.add(customer)
        elif (customer.name, customer.place) != (spec.name, spec.place):
            customer.name = spec.name
            customer.place = spec.place
            self.session.add(customer)

        if commit:
            self.session.commit()
            self.session.refresh(customer)
        else:
            self.session.flush()
        return customer
