"""
Validated preference records.

A PreferenceRecord is the immutable, in-memory form of one user's living
preferences. Everything downstream (scoring, eligibility, ranking) works on
these records and never on raw request payloads or ORM rows, so every value
is checked once, here, at construction.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from .errors import InvalidPreferences
from .models import (
    DietPreference,
    GuestPreference,
    PetsPreference,
    RoommatePreference,
    SleepSchedule,
    SmokingPreference,
    normalize_interest,
)

LEVEL_MIN = 1
LEVEL_MAX = 5
MIN_AGE = 18

_ENUM_FIELDS = {
    "sleep_schedule": SleepSchedule,
    "diet_preferences": DietPreference,
    "smoking_preferences": SmokingPreference,
    "pets_preferences": PetsPreference,
    "guest_preferences": GuestPreference,
}


def normalize_interests(interests: Iterable[str] | None) -> frozenset[str]:
    """Collapse free-text tags into a set of normalized, non-empty tags."""
    if interests is None:
        return frozenset()
    if isinstance(interests, str):
        raise InvalidPreferences("interests must be a list of tags, not a string")
    tags = set()
    for tag in interests:
        if not isinstance(tag, str):
            raise InvalidPreferences(f"interest tags must be strings, got {tag!r}")
        normalized = normalize_interest(tag)
        if normalized:
            tags.add(normalized)
    return frozenset(tags)


def _check_int(name: str, value: Any, minimum: int, maximum: int | None = None) -> None:
    # bool is an int subclass; True is not a cleanliness level
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPreferences(f"{name} must be an integer, got {value!r}")
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        raise InvalidPreferences(f"{name} must be {bounds}, got {value}")


@dataclass(frozen=True)
class PreferenceRecord:
    """
    One user's roommate preferences.

    Attributes:
        user_id: Owning user.
        cleanliness_level: 1 (relaxed) to 5 (spotless).
        noise_level: 1 (quiet) to 5 (loud).
        sleep_schedule, diet_preferences, smoking_preferences,
        pets_preferences, guest_preferences: enumerations; raw string
            values are accepted and coerced.
        age_range_min, age_range_max: acceptable roommate age band, >= 18
            and min <= max.
        interests: normalized interest tags.
        additional_notes: free text, never scored.
    """
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
    interests: frozenset[str] = field(default_factory=frozenset)
    additional_notes: str | None = None

    def __post_init__(self):
        _check_int("cleanliness_level", self.cleanliness_level, LEVEL_MIN, LEVEL_MAX)
        _check_int("noise_level", self.noise_level, LEVEL_MIN, LEVEL_MAX)
        _check_int("age_range_min", self.age_range_min, MIN_AGE)
        _check_int("age_range_max", self.age_range_max, MIN_AGE)
        if self.age_range_min > self.age_range_max:
            raise InvalidPreferences(
                f"age_range_min ({self.age_range_min}) must not exceed "
                f"age_range_max ({self.age_range_max})"
            )

        for name, enum_cls in _ENUM_FIELDS.items():
            raw = getattr(self, name)
            try:
                value = enum_cls(raw)
            except ValueError:
                allowed = ", ".join(e.value for e in enum_cls)
                raise InvalidPreferences(f"{name} must be one of {allowed}, got {raw!r}") from None
            object.__setattr__(self, name, value)

        object.__setattr__(self, "interests", normalize_interests(self.interests))

    @property
    def fingerprint(self) -> str:
        """Short lookup string over cleanliness, noise, sleep, smoking and pets."""
        return (
            f"{self.cleanliness_level}-{self.noise_level}-{self.sleep_schedule.value}-"
            f"{self.smoking_preferences.value}-{self.pets_preferences.value}"
        )

    @classmethod
    def from_model(cls, row: RoommatePreference) -> "PreferenceRecord":
        """Build a record from a persisted preferences row."""
        return cls(
            user_id=row.user_id,
            cleanliness_level=row.cleanliness_level,
            noise_level=row.noise_level,
            sleep_schedule=row.sleep_schedule,
            diet_preferences=row.diet_preferences,
            smoking_preferences=row.smoking_preferences,
            pets_preferences=row.pets_preferences,
            guest_preferences=row.guest_preferences,
            age_range_min=row.age_range_min,
            age_range_max=row.age_range_max,
            interests=row.interests or [],
            additional_notes=row.additional_notes,
        )

    def to_fields(self) -> dict[str, Any]:
        """Column values for persisting this record, fingerprint included."""
        return {
            "user_id": self.user_id,
            "cleanliness_level": self.cleanliness_level,
            "noise_level": self.noise_level,
            "sleep_schedule": self.sleep_schedule,
            "diet_preferences": self.diet_preferences,
            "smoking_preferences": self.smoking_preferences,
            "pets_preferences": self.pets_preferences,
            "guest_preferences": self.guest_preferences,
            "age_range_min": self.age_range_min,
            "age_range_max": self.age_range_max,
            "interests": sorted(self.interests),
            "additional_notes": self.additional_notes,
            "fingerprint": self.fingerprint,
        }

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-friendly representation."""
        data = self.to_fields()
        for name in _ENUM_FIELDS:
            data[name] = data[name].value
        return data
