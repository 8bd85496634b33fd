# salon_booking/db.py

from sqlmodel import SQLModel, create_engine, Session

from salon_booking.config import settings


def make_engine(database_url: str, echo: bool = False):
    connect_args = {}
    if database_url.startswith("sqlite"):
        # required for SQLite + FastAPI; writers wait on the file lock instead of failing
        connect_args = {"check_same_thread": False, "timeout": 30}
    return create_engine(database_url, echo=echo, connect_args=connect_args)


# Engine = connection to the database
engine = make_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def create_db_and_tables(bind=None):
    # models must be imported so their tables are registered on the metadata
    from salon_booking import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
