"""
conftest.py
===========
Shared fixtures: a seeded in-memory database, the reference snapshot built
from it, and a FastAPI test client.
"""

import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from telemed_app.db import make_engine, init_db, seed_reference_data
from telemed_app.main import app
from telemed_app.models import Base
from telemed_app.reference import load_reference_data


@pytest.fixture(scope="session")
def db_session():
    """
    A private in-memory SQLite database seeded with the reference rows.
    Separate from the app's engine so unit tests never depend on startup.
    """
    engine = make_engine("sqlite://")
    init_db(Base, bind=engine)
    db = sessionmaker(bind=engine)()
    seed_reference_data(db)
    yield db
    db.close()
    engine.dispose()


@pytest.fixture(scope="session")
def reference(db_session):
    return load_reference_data(db_session)


@pytest.fixture
def today():
    """Frozen 'today' for date-window checks."""
    return datetime.date(2024, 6, 1)


@pytest.fixture(scope="module")
def client():
    """FastAPI test client; entering the context runs the startup event."""
    with TestClient(app) as c:
        yield c
