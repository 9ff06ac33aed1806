"""Initial schema with accounts, rooms, and feedback.

Revision ID: 0001
Revises:
Create Date: 2026-10-18 10:00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column(
            "subscription_type",
            sa.String(50),
            nullable=False,
            server_default="free",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    # Registration relies on this index to reject duplicate emails
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(6), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index("ix_rooms_owner_id", "rooms", ["owner_id"])

    op.create_table(
        "feedback",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "room_id",
            sa.String(6),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "sentiment",
            sa.String(50),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index("ix_feedback_room_id", "feedback", ["room_id"])
    op.create_index("ix_feedback_sentiment", "feedback", ["sentiment"])


def downgrade() -> None:
    op.drop_index("ix_feedback_sentiment", table_name="feedback")
    op.drop_index("ix_feedback_room_id", table_name="feedback")
    op.drop_table("feedback")
    op.drop_index("ix_rooms_owner_id", table_name="rooms")
    op.drop_table("rooms")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
