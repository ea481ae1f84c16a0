import os

# Must be set before roommates.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from roommates.database import SessionLocal, engine
from roommates.models import Base
from roommates.preferences import PreferenceRecord
from roommates.services import create_user


def make_record(user_id=1, **overrides):
    fields = {
        "cleanliness_level": 3,
        "noise_level": 3,
        "sleep_schedule": "early_bird",
        "diet_preferences": "no_restrictions",
        "smoking_preferences": "no",
        "pets_preferences": "no",
        "guest_preferences": "sometimes",
        "age_range_min": 20,
        "age_range_max": 35,
        "interests": ["cooking", "hiking"],
    }
    fields.update(overrides)
    return PreferenceRecord(user_id=user_id, **fields)


@pytest.fixture
def tables():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def users(db_session):
    """Three registered users, ids 1-3."""
    created = [
        create_user(db_session, "alice", "Alice Moreau"),
        create_user(db_session, "bo", "Bo Lindqvist"),
        create_user(db_session, "chidi", "Chidi Okafor"),
    ]
    db_session.commit()
    return created


@pytest.fixture
def api_client(tables):
    from roommates.main import app

    return TestClient(app)
