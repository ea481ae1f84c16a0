"""Errors raised by the matching core.

All of them are local and recoverable: the caller decides how to surface
them. The HTTP layer maps each class to a status code in ``api.py``.
"""


class RoommateError(Exception):
    """Base class for matching errors."""

    pass


class InvalidPreferences(RoommateError, ValueError):
    """Raised when a preference record fails validation."""

    pass


class PreconditionMissing(RoommateError):
    """Raised when the requester has no preference record."""

    pass


class DuplicatePreferences(RoommateError):
    """Raised when creating a second preference record for a user."""

    pass


class DuplicateMatch(RoommateError):
    """Raised when a match already links the same two users."""

    pass


class NotFound(RoommateError):
    """Raised when a referenced match, user or record does not exist."""

    pass


class Forbidden(RoommateError):
    """Raised when the acting user is not a participant of the match."""

    pass


class InvalidStatus(RoommateError):
    """Raised when a requested match status is not a known value."""

    pass


class InvalidTransition(InvalidStatus):
    """Raised when changing the status of an accepted or rejected match."""

    pass


class InvalidMatch(RoommateError, ValueError):
    """Raised when match creation arguments are unusable."""

    pass
