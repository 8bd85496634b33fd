import os

# Keep the app away from real files while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("SEED_DEFAULT_SERVICES", "False")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from salon_booking.catalog import ServiceCatalog
from salon_booking.clock import CivilClock
from salon_booking.customers import CustomerDirectory
from salon_booking.db import create_db_and_tables, get_session
from salon_booking.deps import get_clock
from salon_booking.ledger import BookingLedger
from salon_booking.main import app
from salon_booking.reporter import DashboardReporter
from salon_booking.schemas import CustomerSpec, ServiceCreate

IST = timezone(timedelta(hours=5, minutes=30))

# 2024-06-01 12:00 IST
FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=IST)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return CivilClock(now=lambda: FIXED_NOW)


@pytest.fixture
def catalog(session):
    return ServiceCatalog(session)


@pytest.fixture
def directory(session):
    return CustomerDirectory(session)


@pytest.fixture
def ledger(session, catalog, directory, clock):
    return BookingLedger(session, catalog, directory, clock, seat_count=10)


@pytest.fixture
def reporter(session, clock):
    return DashboardReporter(session, clock)


@pytest.fixture
def haircut(catalog):
    return catalog.create(ServiceCreate(name="Hair Cut", price=300, duration=30, description="Classic cut"))


@pytest.fixture
def customer_spec():
    return CustomerSpec(name="Ravi Kumar", mobile="9876543210", place="Guntur")


@pytest.fixture
def client(engine, clock):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
