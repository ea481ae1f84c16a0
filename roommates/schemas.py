"""Request and response models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

from .models import (
    DietPreference,
    GuestPreference,
    Match,
    PetsPreference,
    SleepSchedule,
    SmokingPreference,
    User,
)
from .preferences import PreferenceRecord
from .ranking import RankedCandidate


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    full_name: str = Field(min_length=1, max_length=255)
    bio: str | None = Field(default=None, max_length=500)


class UserOut(BaseModel):
    id: int
    username: str
    full_name: str
    bio: str | None = None

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(id=user.id, username=user.username, full_name=user.full_name, bio=user.bio)


class PreferencesIn(BaseModel):
    """Submitted preferences. Range checks are repeated by PreferenceRecord."""

    cleanliness_level: int = Field(ge=1, le=5)
    noise_level: int = Field(ge=1, le=5)
    sleep_schedule: SleepSchedule
    diet_preferences: DietPreference
    smoking_preferences: SmokingPreference
    pets_preferences: PetsPreference
    guest_preferences: GuestPreference
    age_range_min: int = Field(ge=18)
    age_range_max: int = Field(ge=18)
    interests: list[str] = Field(default_factory=list)
    additional_notes: str | None = None

    def to_record(self, user_id: int) -> PreferenceRecord:
        return PreferenceRecord(user_id=user_id, **self.model_dump())


class PreferencesOut(BaseModel):
    user_id: int
    cleanliness_level: int
    noise_level: int
    sleep_schedule: SleepSchedule
    diet_preferences: DietPreference
    smoking_preferences: SmokingPreference
    pets_preferences: PetsPreference
    guest_preferences: GuestPreference
    age_range_min: int
    age_range_max: int
    interests: list[str]
    additional_notes: str | None = None
    fingerprint: str

    @classmethod
    def from_record(cls, record: PreferenceRecord) -> "PreferencesOut":
        return cls(**record.to_fields())


class CandidateOut(BaseModel):
    user: UserOut
    preferences: PreferencesOut
    compatibility: int

    @classmethod
    def from_ranked(cls, candidate: RankedCandidate) -> "CandidateOut":
        return cls(
            user=UserOut.from_model(candidate.owner),
            preferences=PreferencesOut.from_record(candidate.preferences),
            compatibility=candidate.score,
        )


class MatchCreate(BaseModel):
    compatibility_score: int = Field(ge=0, le=100)


class MatchStatusUpdate(BaseModel):
    # Plain string so unknown values reach the lifecycle's InvalidStatus check
    status: str


class MatchOut(BaseModel):
    id: int
    user_a_id: int
    user_b_id: int
    compatibility_score: int
    status: str
    date_matched: datetime
    other_user: UserOut | None = None

    @classmethod
    def from_model(cls, match: Match, other_user: User | None = None) -> "MatchOut":
        return cls(
            id=match.id,
            user_a_id=match.user_a_id,
            user_b_id=match.user_b_id,
            compatibility_score=match.compatibility_score,
            status=match.status.value,
            date_matched=match.date_matched,
            other_user=UserOut.from_model(other_user) if other_user else None,
        )
