"""Match model for proposed roommate pairings."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, Index, Integer, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, make_pair_key


class MatchStatus(str, enum.Enum):
    """Status of a match."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


TERMINAL_STATUSES = frozenset({MatchStatus.ACCEPTED, MatchStatus.REJECTED})


class Match(Base):
    """Model for storing a proposed pairing between two users.

    The pair is unordered: user_a/user_b only record who proposed it.
    pair_key is the sorted "low:high" id pair and is unique, so the
    database rejects a second match for the same two users in either order.
    compatibility_score is a snapshot taken when the match is created.
    """

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("compatibility_score BETWEEN 0 AND 100", name="ck_compatibility_score"),
        Index("ix_matches_user_a_id", "user_a_id"),
        Index("ix_matches_user_b_id", "user_b_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_a_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    user_b_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    pair_key: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    compatibility_score: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[MatchStatus] = mapped_column(
        Enum(
            MatchStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
            length=16,
        ),
        default=MatchStatus.PENDING,
        nullable=False,
    )
    date_matched: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    user_a = relationship("User", foreign_keys=[user_a_id])
    user_b = relationship("User", foreign_keys=[user_b_id])

    def __init__(self, **kwargs):
        """Initialize match, deriving the pair key from the two user ids."""
        if "pair_key" not in kwargs and "user_a_id" in kwargs and "user_b_id" in kwargs:
            kwargs["pair_key"] = make_pair_key(kwargs["user_a_id"], kwargs["user_b_id"])
        super().__init__(**kwargs)

    def involves(self, user_id: int) -> bool:
        return user_id in (self.user_a_id, self.user_b_id)

    def other_user_id(self, user_id: int) -> int:
        return self.user_b_id if self.user_a_id == user_id else self.user_a_id

    def __repr__(self) -> str:
        return f"<Match(id={self.id}, pair={self.pair_key}, status={self.status.value})>"
