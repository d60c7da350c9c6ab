"""initial_schema

Create the club scheduling schema:
- Subgroups (training groups, used to tint calendar entries)
- Events (single and recurring, with invitation lead time)
- Event exclusions (cancelled single occurrences of a series)
- Event invitations (one row per event, user and occurrence date)

Revision ID: 3c1f9a7d2e54
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e54"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # SUBGROUPS table
    # ========================================================================
    op.create_table(
        "subgroups",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("club_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("color", sa.String(7), nullable=False, server_default="#6366f1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_subgroups_club_id", "subgroups", ["club_id"])

    # ========================================================================
    # EVENTS table
    # ========================================================================
    op.create_table(
        "events",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("club_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column(
            "category", sa.String(20), nullable=False, server_default="other"
        ),  # 'training', 'competition', 'meeting', 'other'
        sa.Column("repeat_type", sa.String(20), nullable=False, server_default="none"),
        sa.Column("repeat_end_date", sa.Date(), nullable=True),
        sa.Column(
            "target_subgroup_ids",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'[]'"),
        ),
        sa.Column("cancelled", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("lead_time_value", sa.Integer(), nullable=True),
        sa.Column("lead_time_unit", sa.String(10), nullable=True),  # 'hours', 'days', 'weeks'
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "repeat_type IN ('none', 'daily', 'weekly', 'biweekly', 'monthly')",
            name="ck_events_repeat_type",
        ),
    )
    op.create_index("idx_events_club_start_date", "events", ["club_id", "start_date"])

    # ========================================================================
    # EVENT_EXCLUSIONS table
    # ========================================================================
    op.create_table(
        "event_exclusions",
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("excluded_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id", "excluded_date", name="pk_event_exclusions"),
    )

    # ========================================================================
    # EVENT_INVITATIONS table
    # ========================================================================
    op.create_table(
        "event_invitations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("occurrence_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("responded_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "event_id",
            "user_id",
            "occurrence_date",
            name="uq_event_invitation_occurrence",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_event_invitations_status",
        ),
    )
    op.create_index(
        "idx_event_invitations_event_occurrence",
        "event_invitations",
        ["event_id", "occurrence_date"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("event_invitations")
    op.drop_table("event_exclusions")
    op.drop_table("events")
    op.drop_table("subgroups")
