"""Shared test fixtures: in-memory SQLite session and an API client bound to it."""
import os

# Must be set before acts.config is imported anywhere.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from acts.main import app
from acts.database import get_db
from acts.models import Base, AstronautDetail, AstronautDuty, Person


@pytest.fixture
def db():
    """In-memory SQLite database with all tables, shared across threads for TestClient."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False)
    session = Session()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def api_client(db):
    """TestClient with the DB dependency overridden to use the in-memory session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def add_person(db):
    """Factory: insert a person directly, optionally with a detail and duty history.

    duties is a list of (rank, duty_title, start, end) tuples.
    """
    def _add(name: str, rank: str | None = None, duty_title: str | None = None,
             career_start: date | None = None, career_end: date | None = None,
             duties: list[tuple] | None = None) -> Person:
        person = Person(name=name)
        db.add(person)
        db.flush()
        if rank is not None or duty_title is not None:
            db.add(AstronautDetail(
                person_id=person.id,
                current_rank=rank or "",
                current_duty_title=duty_title or "",
                career_start_date=career_start or date(2020, 1, 1),
                career_end_date=career_end,
            ))
        for d_rank, d_title, start, end in duties or []:
            db.add(AstronautDuty(
                person_id=person.id, rank=d_rank, duty_title=d_title,
                duty_start_date=start, duty_end_date=end,
            ))
        db.commit()
        return person

    return _add
