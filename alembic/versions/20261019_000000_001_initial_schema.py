"""Initial schema: users, roommate preferences, matches.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    # One preferences row per user
    op.create_table(
        "roommate_preferences",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("cleanliness_level", sa.Integer(), nullable=False),
        sa.Column("noise_level", sa.Integer(), nullable=False),
        sa.Column("sleep_schedule", sa.String(length=32), nullable=False),
        sa.Column("diet_preferences", sa.String(length=32), nullable=False),
        sa.Column("smoking_preferences", sa.String(length=32), nullable=False),
        sa.Column("pets_preferences", sa.String(length=32), nullable=False),
        sa.Column("guest_preferences", sa.String(length=32), nullable=False),
        sa.Column("age_range_min", sa.Integer(), nullable=False),
        sa.Column("age_range_max", sa.Integer(), nullable=False),
        sa.Column("interests", sa.JSON(), nullable=False),
        sa.Column("additional_notes", sa.Text(), nullable=True),
        sa.Column("fingerprint", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.CheckConstraint("cleanliness_level BETWEEN 1 AND 5", name="ck_cleanliness_level"),
        sa.CheckConstraint("noise_level BETWEEN 1 AND 5", name="ck_noise_level"),
        sa.CheckConstraint("age_range_min >= 18", name="ck_age_range_min"),
        sa.CheckConstraint("age_range_min <= age_range_max", name="ck_age_range_order"),
    )
    op.create_index(
        "ix_roommate_preferences_fingerprint", "roommate_preferences", ["fingerprint"]
    )

    # pair_key is the sorted "low:high" user id pair: one match per pair
    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_a_id", sa.Integer(), nullable=False),
        sa.Column("user_b_id", sa.Integer(), nullable=False),
        sa.Column("pair_key", sa.String(length=50), nullable=False),
        sa.Column("compatibility_score", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("date_matched", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_a_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["user_b_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_key"),
        sa.CheckConstraint(
            "compatibility_score BETWEEN 0 AND 100", name="ck_compatibility_score"
        ),
    )
    op.create_index("ix_matches_user_a_id", "matches", ["user_a_id"])
    op.create_index("ix_matches_user_b_id", "matches", ["user_b_id"])


def downgrade() -> None:
    op.drop_index("ix_matches_user_b_id", table_name="matches")
    op.drop_index("ix_matches_user_a_id", table_name="matches")
    op.drop_table("matches")
    op.drop_index("ix_roommate_preferences_fingerprint", table_name="roommate_preferences")
    op.drop_table("roommate_preferences")
    op.drop_table("users")
