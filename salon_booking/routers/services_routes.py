# salon_booking/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends

from salon_booking.catalog import ServiceCatalog
from salon_booking.deps import get_catalog
from salon_booking.schemas import ServiceCreate, ServicePublic, ServiceUpdate
from salon_booking.validation import validate_service_create, validate_service_update

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(spec: ServiceCreate, catalog: ServiceCatalog = Depends(get_catalog)):
    return catalog.create(validate_service_create(spec))


@router.get("", response_model=List[ServicePublic])
def list_services(catalog: ServiceCatalog = Depends(get_catalog)):
    return catalog.list()


@router.get("/search", response_model=List[ServicePublic])
def search_services(q: str = "", catalog: ServiceCatalog = Depends(get_catalog)):
    return catalog.search(q)


@router.get("/{service_id}", response_model=ServicePublic)
def get_service(service_id: int, catalog: ServiceCatalog = Depends(get_catalog)):
    return catalog.get(service_id)


@router.patch("/{service_id}", response_model=ServicePublic)
def update_service(service_id: int, patch: ServiceUpdate, catalog: ServiceCatalog = Depends(get_catalog)):
    return catalog.update(service_id, validate_service_update(patch))


# Soft delete: the row stays for booking history
@router.delete("/{service_id}", response_model=ServicePublic)
def deactivate_service(service_id: int, catalog: ServiceCatalog = Depends(get_catalog)):
    return catalog.deactivate(service_id)
