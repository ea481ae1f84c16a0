"""SQLAlchemy base and helper utilities."""

import re
from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


def normalize_interest(tag: str) -> str:
    """Normalize an interest tag for matching.

    Converts to lowercase and collapses whitespace.
    This ensures "Hiking" == " hiking " == "HIKING"

    Args:
        tag: The free-text interest tag.

    Returns:
        Normalized tag, empty if the tag held only whitespace.
    """
    tag = tag.lower()
    tag = re.sub(r"\s+", " ", tag).strip()  # Collapse whitespace
    return tag


def make_pair_key(user_a_id: int, user_b_id: int) -> str:
    """Order-insensitive key for a pair of users, e.g. (7, 3) -> "3:7"."""
    low, high = sorted((user_a_id, user_b_id))
    return f"{low}:{high}"
