"""Get next occurrence use case."""

from datetime import date
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from club.application.usecase.base import BaseUseCase
from club.domain.error import InvalidRuleError
from club.domain.service import EventService
from club.domain.value import EventId


class GetNextOccurrenceRequest(BaseModel):
    """Request for the next date an event takes place."""

    event_id: str
    after: Optional[date] = None  # Defaults to today


class GetNextOccurrenceResponse(BaseModel):
    """Next occurrence, or None when the event will not happen again."""

    event_id: str
    after: date
    next_occurrence: Optional[date]
    is_recurring: bool


class GetNextOccurrenceUseCase(BaseUseCase):
    """Use case for looking up an event's next occurrence."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(
        self, request: GetNextOccurrenceRequest
    ) -> GetNextOccurrenceResponse:
        """Execute get next occurrence use case.

        An event whose rule cannot be expanded reports no next occurrence.

        Raises:
            NotFoundError: If the event does not exist
        """
        event_id = EventId(UUID(request.event_id))
        after = request.after or date.today()

        with logfire.span("get_next_occurrence", event_id=str(event_id)):
            event = await self.event_service.get_by_id(event_id)
            try:
                next_date = self.event_service.next_occurrence(event, after)
            except InvalidRuleError as e:
                logfire.warn(
                    "Cannot compute next occurrence",
                    event_id=str(event_id),
                    error=str(e),
                )
                next_date = None

            return GetNextOccurrenceResponse(
                event_id=str(event_id),
                after=after,
                next_occurrence=next_date,
                is_recurring=event.is_recurring,
            )
