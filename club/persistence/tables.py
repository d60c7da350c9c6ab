"""SQLAlchemy table definitions for club scheduling.

These match the schema created by the Alembic migrations. Column types are
the dialect-neutral SQLAlchemy types so the same metadata can be created on
SQLite for repository tests.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    Time,
    UniqueConstraint,
    Uuid,
    func,
)

metadata = MetaData()

# ============================================================================
# SUBGROUPS TABLE
# ============================================================================
subgroups_table = Table(
    "subgroups",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("club_id", Uuid, nullable=False),
    Column("name", String(255), nullable=False),
    Column("color", String(7), nullable=False, server_default="#6366f1"),
)

Index("idx_subgroups_club_id", subgroups_table.c.club_id)

# ============================================================================
# EVENTS TABLE (single and recurring)
# ============================================================================
events_table = Table(
    "events",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("club_id", Uuid, nullable=False),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("location", String(255), nullable=True),
    Column("start_date", Date, nullable=True),  # NULL rows are rejected per event
    Column("start_time", Time, nullable=True),
    Column("end_time", Time, nullable=True),
    Column("category", String(20), nullable=False, server_default="other"),
    Column("repeat_type", String(20), nullable=False, server_default="none"),
    Column("repeat_end_date", Date, nullable=True),
    Column("target_subgroup_ids", JSON, nullable=False, default=list),
    Column("cancelled", Boolean, nullable=False, server_default="0"),
    Column("lead_time_value", Integer, nullable=True),
    Column("lead_time_unit", String(10), nullable=True),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    CheckConstraint(
        "repeat_type IN ('none', 'daily', 'weekly', 'biweekly', 'monthly')",
        name="ck_events_repeat_type",
    ),
)

Index("idx_events_club_start_date", events_table.c.club_id, events_table.c.start_date)

# ============================================================================
# EVENT EXCLUSIONS TABLE (cancelled single occurrences of recurring events)
# ============================================================================
event_exclusions_table = Table(
    "event_exclusions",
    metadata,
    Column(
        "event_id", Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("excluded_date", Date, nullable=False),
    PrimaryKeyConstraint("event_id", "excluded_date", name="pk_event_exclusions"),
)

# ============================================================================
# EVENT INVITATIONS TABLE (one row per event, user and occurrence)
# ============================================================================
event_invitations_table = Table(
    "event_invitations",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "event_id", Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", Uuid, nullable=False),
    Column("occurrence_date", Date, nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("responded_at", DateTime(timezone=True), nullable=True),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    # Backstop for concurrent materialization: at most one record per occurrence
    UniqueConstraint(
        "event_id", "user_id", "occurrence_date", name="uq_event_invitation_occurrence"
    ),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'rejected')",
        name="ck_event_invitations_status",
    ),
)

Index(
    "idx_event_invitations_event_occurrence",
    event_invitations_table.c.event_id,
    event_invitations_table.c.occurrence_date,
)
