"""Domain services."""

from .base import Service
from .calendar_service import CalendarService
from .event_service import EventService
from .invitation_service import InvitationService, MaterializationResult

__all__ = [
    "CalendarService",
    "EventService",
    "InvitationService",
    "MaterializationResult",
    "Service",
]
