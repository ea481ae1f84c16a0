"""HTTP routes for preferences, roommate discovery and matches.

The acting user arrives in the X-User-Id header; authenticating it is the
gateway's job.
"""

import logging

from fastapi import APIRouter, Depends, Header, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import services
from .database import get_db
from .errors import (
    DuplicateMatch,
    DuplicatePreferences,
    Forbidden,
    InvalidTransition,
    NotFound,
    RoommateError,
)
from .schemas import (
    CandidateOut,
    MatchCreate,
    MatchOut,
    MatchStatusUpdate,
    PreferencesIn,
    PreferencesOut,
    UserCreate,
    UserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

ERROR_STATUS_CODES = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    DuplicateMatch: status.HTTP_409_CONFLICT,
    DuplicatePreferences: status.HTTP_409_CONFLICT,
    InvalidTransition: status.HTTP_409_CONFLICT,
}


def error_status_code(exc: RoommateError) -> int:
    """Most specific status code for an error; anything unlisted is a 400."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_400_BAD_REQUEST


async def roommate_error_handler(request: Request, exc: RoommateError) -> JSONResponse:
    """Exception handler turning matching errors into JSON responses."""
    status_code = error_status_code(exc)
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "message": str(exc)},
    )


def current_user_id(x_user_id: int = Header()) -> int:
    return x_user_id


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(body: UserCreate, db: Session = Depends(get_db)):
    user = services.create_user(db, body.username, body.full_name, body.bio)
    return UserOut.from_model(user)


# =============================================================================
# Preferences
# =============================================================================


@router.post("/roommates/preferences", response_model=PreferencesOut)
def submit_preferences(
    body: PreferencesIn,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Create or replace the current user's preferences."""
    record = services.submit_preferences(db, body.to_record(user_id))
    return PreferencesOut.from_record(record)


@router.get("/roommates/preferences", response_model=PreferencesOut)
def read_preferences(
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    record = services.get_preferences(db, user_id)
    if record is None:
        raise NotFound("Roommate preferences not found")
    return PreferencesOut.from_record(record)


@router.delete("/roommates/preferences", status_code=status.HTTP_204_NO_CONTENT)
def remove_preferences(
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    services.delete_preferences(db, user_id)


# =============================================================================
# Discovery and matches
# =============================================================================


@router.get("/roommates", response_model=list[CandidateOut])
def potential_roommates(
    min_score: int | None = Query(default=None, ge=0, le=100),
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Other users ranked by compatibility, best first."""
    ranked = services.find_potential_roommates(db, user_id, min_score=min_score)
    return [CandidateOut.from_ranked(candidate) for candidate in ranked]


@router.post("/roommates/match/{other_user_id}", response_model=MatchOut)
def propose_match(
    other_user_id: int,
    body: MatchCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    match = services.propose_match(db, user_id, other_user_id, body.compatibility_score)
    return MatchOut.from_model(match)


@router.get("/roommates/matches", response_model=list[MatchOut])
def list_matches(
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    return [
        MatchOut.from_model(match, other_user)
        for match, other_user in services.get_user_matches(db, user_id)
    ]


@router.put("/roommates/matches/{match_id}/status", response_model=MatchOut)
def update_match_status(
    match_id: int,
    body: MatchStatusUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    match = services.update_match_status(db, match_id, user_id, body.status)
    return MatchOut.from_model(match)
