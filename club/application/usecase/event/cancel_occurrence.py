"""Cancel occurrence use case."""

from datetime import date
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from club.adapter.notification import ChangeKind, ChangeNotice, ChangeNotifier, club_scope
from club.application.usecase.base import BaseUseCase
from club.domain.service import EventService, InvitationService
from club.domain.value import CancelScope, EventId


class CancelOccurrenceRequest(BaseModel):
    """Request to cancel one occurrence of a recurring event, or the rest of the series."""

    event_id: str
    occurrence_date: date
    scope: CancelScope = CancelScope.THIS


class CancelOccurrenceResponse(BaseModel):
    """Response after cancelling."""

    event_id: str
    occurrence_date: date
    scope: CancelScope
    excluded_dates: list[date]
    end_date: Optional[date]
    # Invitations already materialized for the cancelled dates; they are kept
    # and their holders may need to be told
    stale_invitation_count: int


class CancelOccurrenceUseCase(BaseUseCase):
    """Use case for cancelling occurrences of a recurring event."""

    def __init__(
        self,
        event_service: EventService,
        invitation_service: InvitationService,
        notifier: ChangeNotifier,
    ) -> None:
        """Initialize use case.

        Args:
            event_service: Event domain service
            invitation_service: Invitation domain service
            notifier: Channel announcing the change to the club
        """
        self.event_service = event_service
        self.invitation_service = invitation_service
        self.notifier = notifier

    async def execute(self, request: CancelOccurrenceRequest) -> CancelOccurrenceResponse:
        """Execute cancel occurrence use case.

        Raises:
            NotFoundError: If the event does not exist
            ValidationError: If the event is not recurring or the date
                precedes the series
        """
        event_id = EventId(UUID(request.event_id))

        with logfire.span(
            "cancel_occurrence",
            event_id=str(event_id),
            occurrence_date=str(request.occurrence_date),
            scope=request.scope.value,
        ):
            event = await self.event_service.get_by_id(event_id)
            updated = await self.event_service.cancel_occurrence(
                event, request.occurrence_date, request.scope
            )
            stale = await self.invitation_service.count_stale(
                event_id, request.occurrence_date, request.scope
            )
            if stale:
                logfire.info(
                    "Cancelled occurrences already have invitations",
                    event_id=str(event_id),
                    occurrence_date=str(request.occurrence_date),
                    count=stale,
                )

            await self.notifier.publish(
                club_scope(event.club_id),
                ChangeNotice(
                    club_id=event.club_id,
                    kind=ChangeKind.OCCURRENCE_CANCELLED,
                    event_id=event_id,
                ),
            )

            return CancelOccurrenceResponse(
                event_id=str(event_id),
                occurrence_date=request.occurrence_date,
                scope=request.scope,
                excluded_dates=sorted(updated.rule.excluded_dates),
                end_date=updated.rule.end_date,
                stale_invitation_count=stale,
            )
