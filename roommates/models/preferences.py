"""Roommate preferences model and the living-preference enumerations."""

import enum

from sqlalchemy import CheckConstraint, Index, Integer, String, Text, Enum, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class SleepSchedule(str, enum.Enum):
    """When the user usually sleeps."""

    EARLY_BIRD = "early_bird"
    NIGHT_OWL = "night_owl"
    FLEXIBLE = "flexible"


class DietPreference(str, enum.Enum):
    """Household diet."""

    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    NO_RESTRICTIONS = "no_restrictions"


class SmokingPreference(str, enum.Enum):
    """Smoking in the home."""

    YES = "yes"
    NO = "no"
    OUTDOORS_ONLY = "outdoors_only"


class PetsPreference(str, enum.Enum):
    """Pets in the home."""

    YES = "yes"
    NO = "no"
    DEPENDS = "depends"


class GuestPreference(str, enum.Enum):
    """How often guests come over."""

    OFTEN = "often"
    SOMETIMES = "sometimes"
    RARELY = "rarely"


def _enum_column(enum_cls):
    return Enum(
        enum_cls,
        values_callable=lambda x: [e.value for e in x],
        native_enum=False,
        length=32,
    )


class RoommatePreference(Base, TimestampMixin):
    """Model for storing a user's living preferences.

    At most one row per user. Interests are stored as a sorted JSON array
    of normalized tags.
    """

    __tablename__ = "roommate_preferences"
    __table_args__ = (
        CheckConstraint("cleanliness_level BETWEEN 1 AND 5", name="ck_cleanliness_level"),
        CheckConstraint("noise_level BETWEEN 1 AND 5", name="ck_noise_level"),
        CheckConstraint("age_range_min >= 18", name="ck_age_range_min"),
        CheckConstraint("age_range_min <= age_range_max", name="ck_age_range_order"),
        Index("ix_roommate_preferences_fingerprint", "fingerprint"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, unique=True
    )
    cleanliness_level: Mapped[int] = mapped_column(Integer, nullable=False)
    noise_level: Mapped[int] = mapped_column(Integer, nullable=False)
    sleep_schedule: Mapped[SleepSchedule] = mapped_column(
        _enum_column(SleepSchedule), nullable=False
    )
    diet_preferences: Mapped[DietPreference] = mapped_column(
        _enum_column(DietPreference), nullable=False
    )
    smoking_preferences: Mapped[SmokingPreference] = mapped_column(
        _enum_column(SmokingPreference), nullable=False
    )
    pets_preferences: Mapped[PetsPreference] = mapped_column(
        _enum_column(PetsPreference), nullable=False
    )
    guest_preferences: Mapped[GuestPreference] = mapped_column(
        _enum_column(GuestPreference), nullable=False
    )
    age_range_min: Mapped[int] = mapped_column(Integer, nullable=False)
    age_range_max: Mapped[int] = mapped_column(Integer, nullable=False)
    interests: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    additional_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    fingerprint: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Relationship to owning user
    user: Mapped["User"] = relationship("User", back_populates="preferences")

    def __repr__(self) -> str:
        return f"<RoommatePreference(id={self.id}, user_id={self.user_id})>"
