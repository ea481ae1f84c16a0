"""Database models for the roommate matcher."""

from .base import Base, TimestampMixin, normalize_interest, make_pair_key
from .user import User
from .preferences import (
    RoommatePreference,
    SleepSchedule,
    DietPreference,
    SmokingPreference,
    PetsPreference,
    GuestPreference,
)
from .match import Match, MatchStatus, TERMINAL_STATUSES

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "normalize_interest",
    "make_pair_key",
    # Models
    "User",
    "RoommatePreference",
    "Match",
    # Enumerations
    "SleepSchedule",
    "DietPreference",
    "SmokingPreference",
    "PetsPreference",
    "GuestPreference",
    "MatchStatus",
    "TERMINAL_STATUSES",
]
