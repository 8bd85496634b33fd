# salon_booking/catalog.py

from typing import List

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from salon_booking.clock import utc_now, to_storage
from salon_booking.errors import Conflict, NotFound, ServiceUnavailable
from salon_booking.logger import logger
from salon_booking.models import Service
from salon_booking.schemas import ServiceCreate, ServiceUpdate


class ServiceCatalog:
    """Bookable service types. Rows are never hard-deleted, only deactivated."""

    def __init__(self, session: Session):
        self.session = session

    def _save(self, service: Service) -> Service:
        name = service.name
        self.session.add(service)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict(f"Service named '{name}' already exists")
        self.session.refresh(service)
        return service

    def create(self, spec: ServiceCreate) -> Service:
        service = self._save(Service(**spec.model_dump()))
        logger.info(f"Service created: {service.name} (id={service.id}, price={service.price})")
        return service

    def list(self) -> List[Service]:
        return self.session.exec(
            select(Service).where(Service.is_active == True).order_by(Service.name)  # noqa: E712
        ).all()

    def get(self, service_id: int) -> Service:
        service = self.session.get(Service, service_id)
        if service is None:
            raise NotFound(f"Service with ID {service_id} not found")
        return service

    def get_bookable(self, service_id: int) -> Service:
        service = self.get(service_id)
        if not service.is_active:
            raise ServiceUnavailable(f"Service with ID {service_id} is no longer available for booking")
        return service

    def update(self, service_id: int, patch: ServiceUpdate) -> Service:
        service = self.get(service_id)
        for key, value in patch.model_dump(exclude_unset=True).items():
            # only the description can be cleared
            if value is not None or key == "description":
                setattr(service, key, value)
        service.updated_at = to_storage(utc_now())
        return self._save(service)

    def deactivate(self, service_id: int) -> Service:
        service = self.get(service_id)
        service.is_active = False
        service.updated_at = to_storage(utc_now())
        service = self._save(service)
        logger.info(f"Service deactivated: {service.name} (id={service.id})")
        return service

    def search(self, text: str) -> List[Service]:
        term = f"%{text.lower()}%"
        return self.session.exec(
            select(Service)
            .where(Service.is_active == True)  # noqa: E712
            .where(
                or_(
                    func.lower(Service.name).like(term),
                    func.lower(func.coalesce(Service.description, "")).like(term),
                )
            )
            .order_by(Service.name)
        ).all()
