"""Match lifecycle: creation with duplicate-pair prevention and status transitions.

pending -> accepted | rejected. Accepted and rejected are final.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import (
    DuplicateMatch,
    Forbidden,
    InvalidMatch,
    InvalidStatus,
    InvalidTransition,
    NotFound,
)
from .models import Match, MatchStatus, TERMINAL_STATUSES, make_pair_key

logger = logging.getLogger(__name__)


def parse_status(value) -> MatchStatus:
    """Coerce a raw status value, e.g. "accepted", into a MatchStatus.

    Raises:
        InvalidStatus: If the value is not pending, accepted or rejected.
    """
    try:
        return MatchStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in MatchStatus)
        raise InvalidStatus(f"Status must be one of {allowed}, got {value!r}") from None


def find_existing_match(db_session: Session, user_a_id: int, user_b_id: int) -> Match | None:
    """Look up the match between two users regardless of slot order."""
    return (
        db_session.query(Match)
        .filter(Match.pair_key == make_pair_key(user_a_id, user_b_id))
        .first()
    )


def create_match(
    db_session: Session,
    user_a_id: int,
    user_b_id: int,
    score: int | None,
) -> Match:
    """Create a pending match between two users.

    Args:
        db_session: Active session; the caller commits.
        user_a_id: Proposing user.
        user_b_id: Other user.
        score: Compatibility score to snapshot, 0-100.

    Returns:
        The new, flushed Match.

    Raises:
        InvalidMatch: If the score is missing or out of range, or both ids are the same.
        DuplicateMatch: If a match already links the two users.
        IntegrityError: For any other constraint violation, e.g. an unknown user id.
    """
    if score is None:
        raise InvalidMatch("compatibility score is required")
    if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 100:
        raise InvalidMatch(f"compatibility score must be an integer 0-100, got {score!r}")
    if user_a_id == user_b_id:
        raise InvalidMatch("cannot match a user with themselves")

    if find_existing_match(db_session, user_a_id, user_b_id):
        raise DuplicateMatch(f"Match already exists for users {user_a_id} and {user_b_id}")

    match = Match(
        user_a_id=user_a_id,
        user_b_id=user_b_id,
        compatibility_score=score,
        status=MatchStatus.PENDING,
        date_matched=datetime.utcnow(),
    )
    try:
        # Savepoint: a failed insert must not discard the caller's other work
        with db_session.begin_nested():
            db_session.add(match)
            db_session.flush()
    except IntegrityError:
        pair_taken = (
            db_session.query(Match.id).filter(Match.pair_key == match.pair_key).first()
        )
        if pair_taken is None:
            raise
        # Lost a race with a concurrent creation of the same pair
        raise DuplicateMatch(
            f"Match already exists for users {user_a_id} and {user_b_id}"
        ) from None

    logger.info(f"Created match {match.id} ({match.pair_key}) with score {score}")
    return match


def transition_match(match: Match | None, acting_user_id: int, new_status) -> Match:
    """Move a match to a new status on behalf of one of its participants.

    Re-applying the current status is a no-op. The score and match date are
    never changed.

    Raises:
        NotFound: If match is None.
        InvalidStatus: If new_status is not a known status.
        Forbidden: If acting_user_id is not a participant.
        InvalidTransition: If the match is already accepted or rejected.
    """
    if match is None:
        raise NotFound("Match not found")
    status = parse_status(new_status)
    if not match.involves(acting_user_id):
        raise Forbidden(f"User {acting_user_id} is not part of match {match.id}")

    if match.status == status:
        return match
    if match.status in TERMINAL_STATUSES:
        raise InvalidTransition(
            f"Match {match.id} is already {match.status.value}; cannot change to {status.value}"
        )

    match.status = status
    logger.info(f"Match {match.id} moved to {status.value} by user {acting_user_id}")
    return match
