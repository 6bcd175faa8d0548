"""create users, diaries, likes and friends

Revision ID: 5c1d2e3f4a6b
Revises:
Create Date: 2026-10-18 09:12:05.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1d2e3f4a6b"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
    ]


def upgrade() -> None:
    # Enum types (values match Python enum string values)
    userrole_enum = sa.Enum("USER", "ADMIN", name="userrole")
    weather_enum = sa.Enum("SUNNY", "CLOUDY", "RAINY", "SNOWY", "WINDY", name="weather")
    feeling_enum = sa.Enum("HAPPY", "EXCITED", "CALM", "SAD", "ANGRY", "TIRED", name="feeling")
    opentype_enum = sa.Enum("PUBLIC", "FRIEND", "PRIVATE", name="opentype")
    friendstatus_enum = sa.Enum("WAITING", "ACCEPTED", name="friendstatus")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("nickname", sa.String(length=50), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("profile", sa.String(length=500), nullable=True),
        sa.Column("role", userrole_enum, nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_nickname"), "users", ["nickname"], unique=True)

    op.create_table(
        "diaries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("weather", weather_enum, nullable=False),
        sa.Column("feeling", feeling_enum, nullable=False),
        sa.Column("open_type", opentype_enum, nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_diaries_id"), "diaries", ["id"], unique=False)
    op.create_index(op.f("ix_diaries_user_id"), "diaries", ["user_id"], unique=False)
    op.create_index(
        "ix_diaries_user_date",
        "diaries",
        ["user_id", "date"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "like_diaries",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("diary_id", sa.Integer(), sa.ForeignKey("diaries.id"), primary_key=True),
    )
    op.create_index(op.f("ix_like_diaries_diary_id"), "like_diaries", ["diary_id"], unique=False)

    op.create_table(
        "friends",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("from_user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("to_user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", friendstatus_enum, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("from_user_id", "to_user_id", name="uq_friend_pair"),
    )
    op.create_index(op.f("ix_friends_id"), "friends", ["id"], unique=False)
    op.create_index(op.f("ix_friends_from_user_id"), "friends", ["from_user_id"], unique=False)
    op.create_index(op.f("ix_friends_to_user_id"), "friends", ["to_user_id"], unique=False)


def downgrade() -> None:
    op.drop_table("friends")
    op.drop_table("like_diaries")
    op.drop_table("diaries")
    op.drop_table("users")
    for name in ("friendstatus", "opentype", "feeling", "weather", "userrole"):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
