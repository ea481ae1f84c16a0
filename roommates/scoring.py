"""
Roommate compatibility scoring and the basic eligibility check.

Each factor compares one attribute of two preference records and returns a
similarity ratio in [0, 1]. The ratio is multiplied by the factor's weight;
the weighted sum is normalized against the total weight applied and scaled
to a 0-100 integer. All factor rules are symmetric, so
score_compatibility(a, b) == score_compatibility(b, a).
"""

from fractions import Fraction
from typing import Callable, Mapping

from .models import GuestPreference, PetsPreference, SleepSchedule, SmokingPreference
from .preferences import LEVEL_MAX, PreferenceRecord

FACTOR_WEIGHTS = {
    "cleanliness": 15,
    "noise": 15,
    "sleep_schedule": 15,
    "smoking": 10,
    "pets": 10,
    "diet": 5,
    "guests": 10,
    "interests": 20,
}

# Partial credit when one side is accommodating, as a share of the factor weight
SLEEP_FLEXIBLE_CREDIT = Fraction(10, 15)
SMOKING_OUTDOORS_CREDIT = Fraction(1, 2)
PETS_DEPENDS_CREDIT = Fraction(1, 2)
GUESTS_ADJACENT_CREDIT = Fraction(1, 2)

GUEST_ORDINAL = {
    GuestPreference.RARELY: 1,
    GuestPreference.SOMETIMES: 2,
    GuestPreference.OFTEN: 3,
}


# =============================================================================
# Factor rules
# =============================================================================


def _level_similarity(x: int, y: int) -> Fraction:
    # 1 vs 5 still leaves (5 - 4) / 5; identical levels give 1
    return Fraction(LEVEL_MAX - abs(x - y), LEVEL_MAX)


def _match_or_partial(x, y, wildcard, partial: Fraction) -> Fraction:
    if x == y:
        return Fraction(1)
    if wildcard in (x, y):
        return partial
    return Fraction(0)


def cleanliness_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    return _level_similarity(a.cleanliness_level, b.cleanliness_level)


def noise_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    return _level_similarity(a.noise_level, b.noise_level)


def sleep_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    return _match_or_partial(
        a.sleep_schedule, b.sleep_schedule, SleepSchedule.FLEXIBLE, SLEEP_FLEXIBLE_CREDIT
    )


def smoking_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    return _match_or_partial(
        a.smoking_preferences,
        b.smoking_preferences,
        SmokingPreference.OUTDOORS_ONLY,
        SMOKING_OUTDOORS_CREDIT,
    )


def pets_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    return _match_or_partial(
        a.pets_preferences, b.pets_preferences, PetsPreference.DEPENDS, PETS_DEPENDS_CREDIT
    )


def diet_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    return Fraction(int(a.diet_preferences == b.diet_preferences))


def guests_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    if a.guest_preferences == b.guest_preferences:
        return Fraction(1)
    gap = abs(GUEST_ORDINAL[a.guest_preferences] - GUEST_ORDINAL[b.guest_preferences])
    return GUESTS_ADJACENT_CREDIT if gap == 1 else Fraction(0)


def interests_similarity(a: PreferenceRecord, b: PreferenceRecord) -> Fraction:
    """Shared tags over the smaller set; 0 when either side lists none."""
    common = len(a.interests & b.interests)
    return Fraction(common, max(1, min(len(a.interests), len(b.interests))))


FACTORS: dict[str, Callable[[PreferenceRecord, PreferenceRecord], Fraction]] = {
    "cleanliness": cleanliness_similarity,
    "noise": noise_similarity,
    "sleep_schedule": sleep_similarity,
    "smoking": smoking_similarity,
    "pets": pets_similarity,
    "diet": diet_similarity,
    "guests": guests_similarity,
    "interests": interests_similarity,
}


# =============================================================================
# Scoring
# =============================================================================


def _resolve_weights(weights: Mapping[str, float] | None) -> dict[str, Fraction]:
    weights = FACTOR_WEIGHTS if weights is None else weights
    unknown = set(weights) - set(FACTORS)
    if unknown:
        raise ValueError(f"Unknown compatibility factors: {sorted(unknown)}")

    resolved = {}
    for name, weight in weights.items():
        if weight < 0:
            raise ValueError(f"Weight for {name} must not be negative")
        if weight:
            resolved[name] = Fraction(weight)
    if not resolved:
        raise ValueError("At least one factor must carry a positive weight")
    return resolved


def _weighted_subscores(
    a: PreferenceRecord,
    b: PreferenceRecord,
    weights: dict[str, Fraction],
) -> dict[str, Fraction]:
    return {name: FACTORS[name](a, b) * weight for name, weight in weights.items()}


def score_breakdown(
    a: PreferenceRecord,
    b: PreferenceRecord,
    weights: Mapping[str, float] | None = None,
) -> dict[str, float]:
    """
    Weighted sub-score per factor, before normalization.

    With the default weights the values add up to the final score (before
    rounding), e.g. {"cleanliness": 12.0, "noise": 12.0, ...}.
    """
    return {
        name: float(value)
        for name, value in _weighted_subscores(a, b, _resolve_weights(weights)).items()
    }


def score_compatibility(
    a: PreferenceRecord,
    b: PreferenceRecord,
    weights: Mapping[str, float] | None = None,
) -> int:
    """
    Compatibility of two preference records as an integer percentage.

    Args:
        a: One preference record.
        b: The other preference record.
        weights: Optional factor -> weight mapping replacing FACTOR_WEIGHTS.
            Factors left out or weighted 0 are skipped.

    Returns:
        Integer in [0, 100], rounded half-up.

    Raises:
        ValueError: If weights name an unknown factor or sum to zero.
    """
    resolved = _resolve_weights(weights)
    subscores = _weighted_subscores(a, b, resolved)
    percentage = sum(subscores.values()) / sum(resolved.values()) * 100
    # Exact rationals, so .5 boundaries round up reliably
    return int((percentage + Fraction(1, 2)) // 1)


def is_eligible(requester: PreferenceRecord, candidate: PreferenceRecord) -> bool:
    """
    Cheap pre-scoring check: do the two stated age ranges overlap?

    Only the ranges each user asked for are compared; a candidate's own age
    is not checked against the requester's range.
    """
    if (
        requester.age_range_min > candidate.age_range_max
        or requester.age_range_max < candidate.age_range_min
    ):
        return False
    return True
