"""Persistence-backed operations used by the HTTP layer.

Each function takes an open SQLAlchemy session and leaves committing to the
caller (see database.get_db_session). Scoring and ranking stay pure; this
module only fetches rows, converts them to PreferenceRecords and stores
results.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .config import get_settings
from .errors import DuplicatePreferences, NotFound
from .matches import create_match, transition_match
from .models import Match, RoommatePreference, User
from .preferences import PreferenceRecord
from .ranking import RankedCandidate, rank_candidates

logger = logging.getLogger(__name__)


# =============================================================================
# Users
# =============================================================================


def create_user(db_session: Session, username: str, full_name: str, bio: str | None = None) -> User:
    """Register a user."""
    user = User(username=username.strip(), full_name=full_name.strip(), bio=bio)
    db_session.add(user)
    db_session.flush()
    logger.info(f"Created user {user.id} ({user.username})")
    return user


def get_user(db_session: Session, user_id: int) -> User:
    """Fetch a user or raise NotFound."""
    user = db_session.get(User, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return user


# =============================================================================
# Preferences
# =============================================================================


def _get_preference_row(db_session: Session, user_id: int) -> RoommatePreference | None:
    return (
        db_session.query(RoommatePreference)
        .filter(RoommatePreference.user_id == user_id)
        .first()
    )


def get_preferences(db_session: Session, user_id: int) -> PreferenceRecord | None:
    """Return the user's preferences, or None if they have not submitted any."""
    row = _get_preference_row(db_session, user_id)
    return PreferenceRecord.from_model(row) if row else None


def list_other_preferences(
    db_session: Session, excluding_user_id: int
) -> list[tuple[User, PreferenceRecord]]:
    """All other users' preferences, in a stable order, paired with their owner."""
    rows = (
        db_session.query(RoommatePreference, User)
        .join(User, RoommatePreference.user_id == User.id)
        .filter(RoommatePreference.user_id != excluding_user_id)
        .order_by(RoommatePreference.id)
        .all()
    )
    return [(user, PreferenceRecord.from_model(row)) for row, user in rows]


def create_preferences(db_session: Session, record: PreferenceRecord) -> PreferenceRecord:
    """Store a user's first preference record.

    Raises:
        NotFound: If the user does not exist.
        DuplicatePreferences: If the user already has preferences.
    """
    get_user(db_session, record.user_id)
    if _get_preference_row(db_session, record.user_id):
        raise DuplicatePreferences(f"User {record.user_id} already has preferences")

    db_session.add(RoommatePreference(**record.to_fields()))
    db_session.flush()
    logger.info(f"Created preferences for user {record.user_id} ({record.fingerprint})")
    return record


def update_preferences(db_session: Session, record: PreferenceRecord) -> PreferenceRecord:
    """Replace every field of an existing preference record.

    Raises:
        NotFound: If the user has no preferences yet.
    """
    row = _get_preference_row(db_session, record.user_id)
    if row is None:
        raise NotFound(f"Preferences for user {record.user_id} not found")

    for name, value in record.to_fields().items():
        setattr(row, name, value)
    db_session.flush()
    logger.info(f"Updated preferences for user {record.user_id} ({record.fingerprint})")
    return record


def submit_preferences(db_session: Session, record: PreferenceRecord) -> PreferenceRecord:
    """Create the user's preferences, or replace them if they already exist."""
    if _get_preference_row(db_session, record.user_id):
        return update_preferences(db_session, record)
    return create_preferences(db_session, record)


def delete_preferences(db_session: Session, user_id: int) -> None:
    """Remove the whole preference record.

    Raises:
        NotFound: If the user has no preferences.
    """
    row = _get_preference_row(db_session, user_id)
    if row is None:
        raise NotFound(f"Preferences for user {user_id} not found")
    db_session.delete(row)
    db_session.flush()
    logger.info(f"Deleted preferences for user {user_id}")


# =============================================================================
# Matching
# =============================================================================


def find_potential_roommates(
    db_session: Session,
    user_id: int,
    min_score: int | None = None,
) -> list[RankedCandidate]:
    """Rank every other user with preferences against this user's.

    Args:
        db_session: Active session.
        user_id: Requesting user.
        min_score: Threshold; defaults to Settings.min_compatibility_score.

    Raises:
        PreconditionMissing: If the requesting user has no preferences.
    """
    if min_score is None:
        min_score = get_settings().min_compatibility_score

    requester = get_preferences(db_session, user_id)
    candidates = list_other_preferences(db_session, user_id) if requester else []
    ranked = rank_candidates(requester, candidates, min_score=min_score)
    logger.info(f"Found {len(ranked)} potential roommates for user {user_id}")
    return ranked


def propose_match(
    db_session: Session,
    user_id: int,
    other_user_id: int,
    score: int | None,
) -> Match:
    """Create a pending match from user_id to other_user_id.

    Raises:
        NotFound: If either user does not exist.
        DuplicateMatch: If the two users are already matched.
        InvalidMatch: If the score is missing or invalid.
    """
    get_user(db_session, user_id)
    get_user(db_session, other_user_id)
    return create_match(db_session, user_id, other_user_id, score)


def update_match_status(
    db_session: Session,
    match_id: int,
    acting_user_id: int,
    status,
) -> Match:
    """Load a match and apply a status transition."""
    match = db_session.get(Match, match_id)
    transition_match(match, acting_user_id, status)
    db_session.flush()
    return match


def get_user_matches(db_session: Session, user_id: int) -> list[tuple[Match, User]]:
    """Matches the user takes part in, newest first, with the other participant."""
    matches = (
        db_session.query(Match)
        .filter(or_(Match.user_a_id == user_id, Match.user_b_id == user_id))
        .order_by(Match.date_matched.desc(), Match.id.desc())
        .all()
    )
    return [(match, get_user(db_session, match.other_user_id(user_id))) for match in matches]
