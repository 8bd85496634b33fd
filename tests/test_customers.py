import pytest
from sqlmodel import Session, select

from salon_booking.customers import CustomerDirectory
from salon_booking.errors import Conflict, NotFound
from salon_booking.models import Customer
from salon_booking.schemas import CustomerSpec, CustomerUpdate


def test_get_by_mobile_returns_none_when_missing(directory):
    assert directory.get_by_mobile("0000000000") is None


def test_get_missing_customer_raises(directory):
    with pytest.raises(NotFound):
        directory.get(42)


def test_create_with_existing_mobile_is_a_conflict(directory, customer_spec):
    directory.create(customer_spec)
    with pytest.raises(Conflict):
        directory.create(customer_spec)


def test_upsert_twice_with_same_values_keeps_one_unchanged_row(session, directory, customer_spec):
    first = directory.upsert_by_mobile(customer_spec)
    second = directory.upsert_by_mobile(customer_spec)

    rows = session.exec(select(Customer)).all()
    assert len(rows) == 1
    assert first.id == second.id
    assert (rows[0].name, rows[0].mobile, rows[0].place) == ("Ravi Kumar", "9876543210", "Guntur")


def test_upsert_overwrites_name_and_place(directory, customer_spec):
    original = directory.upsert_by_mobile(customer_spec)
    moved = directory.upsert_by_mobile(CustomerSpec(name="Ravi K", mobile="9876543210", place="Vijayawada"))

    assert moved.id == original.id
    assert (moved.name, moved.place) == ("Ravi K", "Vijayawada")


def test_update_patches_name_and_place_only(directory, customer_spec):
    customer = directory.create(customer_spec)
    updated = directory.update(customer.id, CustomerUpdate(place="Tenali"))

    assert updated.place == "Tenali"
    assert updated.name == "Ravi Kumar"
    assert updated.mobile == "9876543210"


def test_search_matches_name_mobile_and_place(directory, customer_spec):
    directory.create(customer_spec)
    directory.create(CustomerSpec(name="Anita Rao", mobile="9000011111", place="Nellore"))

    assert [c.name for c in directory.search("ravi")] == ["Ravi Kumar"]
    assert [c.name for c in directory.search("90000")] == ["Anita Rao"]
    assert [c.name for c in directory.search("NELL")] == ["Anita Rao"]
    assert [c.name for c in directory.list()] == ["Anita Rao", "Ravi Kumar"]


def test_upsert_that_loses_a_registration_race_updates_the_winning_row(engine, session, directory, monkeypatch):
    # another request registers the mobile after our lookup came back empty
    with Session(engine) as other:
        CustomerDirectory(other).create(CustomerSpec(name="Ravi", mobile="9876543210", place="Guntur"))

    real_lookup = directory.get_by_mobile
    calls = []

    def stale_then_real(mobile):
        calls.append(mobile)
        return None if len(calls) == 1 else real_lookup(mobile)

    monkeypatch.setattr(directory, "get_by_mobile", stale_then_real)

    customer = directory.upsert_by_mobile(CustomerSpec(name="Ravi Kumar", mobile="9876543210", place="Tenali"))

    rows = session.exec(select(Customer)).all()
    assert len(calls) == 2
    assert len(rows) == 1
    assert customer.id == rows[0].id
    assert (rows[0].name, rows[0].place) == ("Ravi Kumar", "Tenali")
