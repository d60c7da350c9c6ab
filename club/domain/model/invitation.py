"""Invitation record entity.

One record per event, user and occurrence date. Records are created by
materialization and only ever changed by the user's own response.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from club.domain.model.common import DomainModel
from club.domain.value import EventId, InvitationId, InvitationStatus, UserId


class InvitationRecord(DomainModel):
    """Invitation of one user to one occurrence of an event.

    Business rules:
    - (event_id, user_id, occurrence_date) is unique
    - New records are always pending with no response time
    - Records are never deleted when a date is later excluded
    """

    id: InvitationId
    event_id: EventId
    user_id: UserId
    occurrence_date: date
    status: InvitationStatus = InvitationStatus.PENDING
    responded_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def key(self) -> tuple[EventId, UserId, date]:
        """Uniqueness key of this record."""
        return (self.event_id, self.user_id, self.occurrence_date)
