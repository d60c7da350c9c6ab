"""Event routes."""

from datetime import date
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from club.application.usecase.event import (
    CancelOccurrenceRequest,
    CancelOccurrenceResponse,
    CancelOccurrenceUseCase,
    GetNextOccurrenceRequest,
    GetNextOccurrenceResponse,
    GetNextOccurrenceUseCase,
)
from club.domain.error import DomainError
from club.domain.value import CancelScope
from club.interface.error import to_http_exception

router = APIRouter(prefix="/events", tags=["events"], route_class=DishkaRoute)


@router.get("/{event_id}/next-occurrence", response_model=GetNextOccurrenceResponse)
async def get_next_occurrence(
    event_id: UUID,
    use_case: FromDishka[GetNextOccurrenceUseCase],
    after: date | None = None,
) -> GetNextOccurrenceResponse:
    """Get the first date on or after `after` (default today) the event takes place."""
    try:
        return await use_case.execute(
            GetNextOccurrenceRequest(event_id=str(event_id), after=after)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/{event_id}/occurrences/{occurrence_date}/cancel",
    response_model=CancelOccurrenceResponse,
)
async def cancel_occurrence(
    event_id: UUID,
    occurrence_date: date,
    use_case: FromDishka[CancelOccurrenceUseCase],
    scope: CancelScope = Query(default=CancelScope.THIS),
) -> CancelOccurrenceResponse:
    """Cancel one occurrence (scope=this) or it and all later ones (scope=future).

    Invitations already sent for the cancelled dates are kept; the response
    reports how many there are.

    Raises:
        HTTPException: 404 if the event does not exist, 422 if it is not
            recurring or the date precedes the series
    """
    try:
        return await use_case.execute(
            CancelOccurrenceRequest(
                event_id=str(event_id), occurrence_date=occurrence_date, scope=scope
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
