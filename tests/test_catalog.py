import pytest

from salon_booking.errors import Conflict, NotFound
from salon_booking.schemas import ServiceCreate, ServiceUpdate
from salon_booking.seed import DEFAULT_SERVICES, seed_default_services


def test_list_returns_active_services_by_name(catalog):
    catalog.create(ServiceCreate(name="Shave", price=80, duration=20))
    catalog.create(ServiceCreate(name="Beard Trim", price=60, duration=15))
    hidden = catalog.create(ServiceCreate(name="Hair Color", price=300, duration=60))
    catalog.deactivate(hidden.id)

    names = [s.name for s in catalog.list()]
    assert names == ["Beard Trim", "Shave"]


def test_get_missing_service_raises_not_found(catalog):
    with pytest.raises(NotFound):
        catalog.get(999)


def test_deactivate_is_soft(catalog, haircut):
    result = catalog.deactivate(haircut.id)

    assert result.is_active is False
    assert catalog.get(haircut.id).name == "Hair Cut"

    with pytest.raises(NotFound):
        catalog.deactivate(12345)


def test_update_changes_only_given_fields(catalog, haircut):
    updated = catalog.update(haircut.id, ServiceUpdate(price=400))

    assert updated.price == 400
    assert updated.duration == 30
    assert updated.description == "Classic cut"


def test_duplicate_name_is_a_conflict(catalog, haircut):
    with pytest.raises(Conflict):
        catalog.create(ServiceCreate(name="Hair Cut", price=10, duration=10))


def test_search_is_case_insensitive_over_name_and_description(catalog, haircut):
    catalog.create(ServiceCreate(name="Face Massage", price=120, duration=25, description="Relaxing massage"))
    gone = catalog.create(ServiceCreate(name="Head Massage", price=100, duration=20))
    catalog.deactivate(gone.id)

    assert [s.name for s in catalog.search("MASSAGE")] == ["Face Massage"]
    assert [s.name for s in catalog.search("classic")] == ["Hair Cut"]
    assert catalog.search("pedicure") == []


def test_seed_is_idempotent(session, catalog):
    first = seed_default_services(session)
    second = seed_default_services(session)

    assert len(first) == len(DEFAULT_SERVICES)
    assert second == []
    assert len(catalog.list()) == len(DEFAULT_SERVICES)
