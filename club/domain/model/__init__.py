"""Domain model entities for club scheduling."""

from club.domain.model.event import Event
from club.domain.model.invitation import InvitationRecord
from club.domain.model.occurrence import OccurrenceSummary, Subgroup
from club.domain.model.recurrence import RecurrenceRule

__all__ = [
    "Event",
    "InvitationRecord",
    "OccurrenceSummary",
    "RecurrenceRule",
    "Subgroup",
]
