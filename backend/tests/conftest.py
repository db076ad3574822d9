"""Shared pytest fixtures.

Fixture overview
----------------
db_engine     in-memory SQLite engine with the schema created (one per test)
db_session    session bound to db_engine
client        TestClient with get_db and the restaurant clock overridden
make_payload  builds a valid {"data": {...}} body, overriding any field
NOW           fixed "current" restaurant time: Monday 2030-06-03 12:00
"""
from __future__ import annotations

import os

# Before any table_reservations import: settings and the module-level engine read it.
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from table_reservations.core.clock import restaurant_now
from table_reservations.db.base import Base
from table_reservations.db.session import get_db
from table_reservations.main import app
from table_reservations.models.reservation import Reservation  # noqa: F401

NOW = datetime(2030, 6, 3, 12, 0)  # Monday
MONDAY = "2030-06-03"
TUESDAY = "2030-06-04"
WEDNESDAY = "2030-06-05"


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[restaurant_now] = lambda: NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_payload():
    def _make(**overrides) -> dict:
        data = {
            "first_name": "Rick",
            "last_name": "Sanchez",
            "mobile_number": "8005551212",
            "reservation_date": WEDNESDAY,
            "reservation_time": "18:00",
            "people": 2,
        }
        data.update(overrides)
        return {"data": data}

    return _make
