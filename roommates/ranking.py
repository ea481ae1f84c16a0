"""
Candidate ranking.

filter (self, eligibility) -> score -> threshold -> sort. Pure: the same
inputs always give the same order and scores.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from .errors import PreconditionMissing
from .preferences import PreferenceRecord
from .scoring import is_eligible, score_compatibility

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 50


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate that passed filtering, with its compatibility score."""
    owner: Any
    score: int
    preferences: PreferenceRecord


def _score_candidate(
    requester: PreferenceRecord,
    owner: Any,
    candidate: PreferenceRecord,
) -> RankedCandidate | None:
    if candidate.user_id == requester.user_id:
        return None
    if not is_eligible(requester, candidate):
        logger.debug(
            f"user {candidate.user_id} skipped: age range "
            f"[{candidate.age_range_min}, {candidate.age_range_max}] does not overlap"
        )
        return None
    return RankedCandidate(
        owner=owner,
        score=score_compatibility(requester, candidate),
        preferences=candidate,
    )


def rank_candidates(
    requester: PreferenceRecord | None,
    candidates: Iterable[tuple[Any, PreferenceRecord]],
    min_score: int = DEFAULT_MIN_SCORE,
) -> list[RankedCandidate]:
    """
    Rank other users' preference records against the requester's.

    Args:
        requester: The requesting user's preferences.
        candidates: (owner, record) pairs; owner is returned untouched.
        min_score: Candidates scoring below this are dropped.

    Returns:
        Candidates sorted by descending score. Ties keep input order.

    Raises:
        PreconditionMissing: If the requester has no preferences.
        ValueError: If min_score is outside [0, 100].
    """
    if requester is None:
        raise PreconditionMissing("preferences required")
    if not 0 <= min_score <= 100:
        raise ValueError(f"min_score must be between 0 and 100, got {min_score}")

    scored = [
        _score_candidate(requester, owner, candidate)
        for owner, candidate in candidates
    ]
    kept = [c for c in scored if c is not None and c.score >= min_score]

    logger.debug(
        f"user {requester.user_id}: {len(kept)} of {len(scored)} candidates "
        f"at or above {min_score}"
    )
    # sorted() is stable, so equal scores stay in enumeration order
    return sorted(kept, key=lambda c: c.score, reverse=True)
