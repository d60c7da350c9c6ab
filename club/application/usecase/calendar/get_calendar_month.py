"""Get calendar month use case."""

from datetime import date, time
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from club.application.usecase.base import BaseUseCase
from club.domain.model import OccurrenceSummary
from club.domain.schedule.cadence import last_day_of_month
from club.domain.service import CalendarService
from club.domain.value import ClubId, EventCategory


class GetCalendarMonthRequest(BaseModel):
    """Request for one month of a club's calendar."""

    club_id: str
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


class OccurrenceItem(BaseModel):
    """Occurrence item in response."""

    event_id: str
    title: str
    start_time: Optional[time]
    end_time: Optional[time]
    location: Optional[str]
    category: EventCategory
    color: str
    subgroups: list[str]
    is_recurring: bool


class CalendarDay(BaseModel):
    """All occurrences on one date, earliest first."""

    day: date
    occurrences: list[OccurrenceItem]


class GetCalendarMonthResponse(BaseModel):
    """Response with the days of a month that have occurrences."""

    club_id: str
    year: int
    month: int
    days: list[CalendarDay]


def _display_order(summary: OccurrenceSummary) -> tuple:
    # Untimed entries after timed ones
    return (summary.start_time is None, summary.start_time or time.min, summary.title)


class GetCalendarMonthUseCase(BaseUseCase):
    """Use case for rendering a month of club events."""

    def __init__(self, calendar_service: CalendarService) -> None:
        """Initialize use case.

        Args:
            calendar_service: Calendar domain service
        """
        self.calendar_service = calendar_service

    async def execute(self, request: GetCalendarMonthRequest) -> GetCalendarMonthResponse:
        """Execute get calendar month use case.

        Events whose rule cannot be expanded are left out; the rest of the
        month is still returned.

        Raises:
            TransientStoreError: If events cannot be loaded
        """
        club_id = ClubId(UUID(request.club_id))
        window_start = date(request.year, request.month, 1)
        window_end = date(
            request.year, request.month, last_day_of_month(request.year, request.month)
        )

        with logfire.span(
            "get_calendar_month",
            club_id=str(club_id),
            year=request.year,
            month=request.month,
        ):
            buckets = await self.calendar_service.get_window(
                club_id, window_start, window_end
            )

            days = [
                CalendarDay(
                    day=day,
                    occurrences=[
                        OccurrenceItem(
                            event_id=str(summary.event_id),
                            title=summary.title,
                            start_time=summary.start_time,
                            end_time=summary.end_time,
                            location=summary.location,
                            category=summary.category,
                            color=summary.group_key.root,
                            subgroups=list(summary.subgroup_names),
                            is_recurring=summary.is_recurring,
                        )
                        for summary in sorted(summaries, key=_display_order)
                    ],
                )
                for day, summaries in buckets.items()
            ]

            return GetCalendarMonthResponse(
                club_id=str(club_id),
                year=request.year,
                month=request.month,
                days=days,
            )
