"""Domain value objects for club scheduling."""

from club.domain.value.identifiers import (
    ClubId,
    EventId,
    InvitationId,
    SubgroupId,
    UserId,
)
from club.domain.value.types import (
    CancelScope,
    EventCategory,
    HexColor,
    InvitationStatus,
    LeadTimeUnit,
    RepeatType,
)

__all__ = [
    # Identifiers
    "ClubId",
    "EventId",
    "InvitationId",
    "SubgroupId",
    "UserId",
    # Types
    "CancelScope",
    "EventCategory",
    "HexColor",
    "InvitationStatus",
    "LeadTimeUnit",
    "RepeatType",
]
