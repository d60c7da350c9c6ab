"""Calendar routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from club.application.usecase.calendar import (
    GetCalendarMonthRequest,
    GetCalendarMonthResponse,
    GetCalendarMonthUseCase,
)
from club.domain.error import DomainError
from club.interface.error import to_http_exception

router = APIRouter(prefix="/clubs", tags=["calendar"], route_class=DishkaRoute)


@router.get("/{club_id}/calendar", response_model=GetCalendarMonthResponse)
async def get_calendar_month(
    club_id: UUID,
    use_case: FromDishka[GetCalendarMonthUseCase],
    year: int = Query(ge=1, le=9999),
    month: int = Query(ge=1, le=12),
) -> GetCalendarMonthResponse:
    """Get one month of a club's calendar.

    Only days with at least one occurrence are listed.

    Args:
        club_id: Club to show
        use_case: Get calendar month use case from DI
        year: Calendar year
        month: Calendar month (1-12)

    Raises:
        HTTPException: 503 if the store is unavailable
    """
    try:
        return await use_case.execute(
            GetCalendarMonthRequest(club_id=str(club_id), year=year, month=month)
        )
    except DomainError as e:
        raise to_http_exception(e)
