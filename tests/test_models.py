from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from roommates.models import (
    Base,
    DietPreference,
    GuestPreference,
    Match,
    MatchStatus,
    PetsPreference,
    RoommatePreference,
    SleepSchedule,
    SmokingPreference,
)


def _index_names(table_name):
    return {index.name for index in Base.metadata.tables[table_name].indexes}


def test_models_declare_lookup_indexes():
    assert "ix_roommate_preferences_fingerprint" in _index_names("roommate_preferences")
    assert {"ix_matches_user_a_id", "ix_matches_user_b_id"} <= _index_names("matches")


def test_database_rejects_inverted_age_range(db_session, users):
    db_session.add(RoommatePreference(
        user_id=1,
        cleanliness_level=3,
        noise_level=3,
        sleep_schedule=SleepSchedule.EARLY_BIRD,
        diet_preferences=DietPreference.VEGAN,
        smoking_preferences=SmokingPreference.NO,
        pets_preferences=PetsPreference.NO,
        guest_preferences=GuestPreference.RARELY,
        age_range_min=40,
        age_range_max=30,
        interests=[],
    ))
    with pytest.raises(IntegrityError, match="ck_age_range_order"):
        db_session.flush()


def test_database_rejects_out_of_range_score(db_session, users):
    db_session.add(Match(
        user_a_id=1,
        user_b_id=2,
        compatibility_score=150,
        status=MatchStatus.PENDING,
        date_matched=datetime.utcnow(),
    ))
    with pytest.raises(IntegrityError, match="ck_compatibility_score"):
        db_session.flush()
