"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import date
from typing import Any, Dict, Iterable
from uuid import UUID

from club.domain.model import Event, InvitationRecord, RecurrenceRule, Subgroup
from club.domain.value import (
    ClubId,
    EventCategory,
    EventId,
    HexColor,
    InvitationId,
    InvitationStatus,
    LeadTimeUnit,
    RepeatType,
    SubgroupId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_event(row: Dict[str, Any], excluded_dates: Iterable[date] = ()) -> Event:
    """Convert database row to Event domain model.

    Args:
        row: Database row as dict
        excluded_dates: Dates excluded from the event's recurrence

    Returns:
        Event domain model

    Raises:
        ValueError: If the row holds an unknown category, repeat type or unit
    """
    lead_time_unit = row.get("lead_time_unit")
    return Event(
        id=EventId(_uuid(row["id"])),
        club_id=ClubId(_uuid(row["club_id"])),
        title=row["title"],
        description=row.get("description"),
        location=row.get("location"),
        start_time=row.get("start_time"),
        end_time=row.get("end_time"),
        category=EventCategory(row.get("category") or EventCategory.OTHER.value),
        target_subgroup_ids=tuple(
            SubgroupId(_uuid(sid)) for sid in row.get("target_subgroup_ids") or []
        ),
        cancelled=bool(row.get("cancelled", False)),
        lead_time_value=row.get("lead_time_value"),
        lead_time_unit=LeadTimeUnit(lead_time_unit) if lead_time_unit else None,
        rule=RecurrenceRule(
            start_date=row.get("start_date"),
            repeat_type=RepeatType(row.get("repeat_type") or RepeatType.NONE.value),
            end_date=row.get("repeat_end_date"),
            excluded_dates=frozenset(excluded_dates),
        ),
        created_at=row["created_at"],
    )


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Convert Event domain model to an events table dict.

    Exclusions are stored separately and are not part of the result.
    """
    return {
        "id": event.id,
        "club_id": event.club_id,
        "title": event.title,
        "description": event.description,
        "location": event.location,
        "start_date": event.rule.start_date,
        "start_time": event.start_time,
        "end_time": event.end_time,
        "category": event.category.value,
        "repeat_type": event.rule.repeat_type.value,
        "repeat_end_date": event.rule.end_date,
        # JSON column; UUIDs are not JSON serializable
        "target_subgroup_ids": [str(sid) for sid in event.target_subgroup_ids],
        "cancelled": event.cancelled,
        "lead_time_value": event.lead_time_value,
        "lead_time_unit": event.lead_time_unit.value if event.lead_time_unit else None,
        "created_at": event.created_at,
    }


def row_to_invitation(row: Dict[str, Any]) -> InvitationRecord:
    """Convert database row to InvitationRecord domain model.

    Args:
        row: Database row as dict

    Returns:
        InvitationRecord domain model
    """
    return InvitationRecord(
        id=InvitationId(_uuid(row["id"])),
        event_id=EventId(_uuid(row["event_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        occurrence_date=row["occurrence_date"],
        status=InvitationStatus(row["status"]),
        responded_at=row.get("responded_at"),
        created_at=row["created_at"],
    )


def invitation_to_dict(invitation: InvitationRecord) -> Dict[str, Any]:
    """Convert InvitationRecord domain model to database dict."""
    return {
        "id": invitation.id,
        "event_id": invitation.event_id,
        "user_id": invitation.user_id,
        "occurrence_date": invitation.occurrence_date,
        "status": invitation.status.value,
        "responded_at": invitation.responded_at,
        "created_at": invitation.created_at,
    }


def row_to_subgroup(row: Dict[str, Any]) -> Subgroup:
    """Convert database row to Subgroup domain model."""
    return Subgroup(
        id=SubgroupId(_uuid(row["id"])),
        club_id=ClubId(_uuid(row["club_id"])),
        name=row["name"],
        color=HexColor(row["color"]),
    )


def subgroup_to_dict(subgroup: Subgroup) -> Dict[str, Any]:
    """Convert Subgroup domain model to database dict."""
    return {
        "id": subgroup.id,
        "club_id": subgroup.club_id,
        "name": subgroup.name,
        "color": subgroup.color.root,
    }
