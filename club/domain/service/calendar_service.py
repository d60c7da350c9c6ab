"""Calendar domain service."""

from datetime import date

import logfire

from club.domain.model import OccurrenceSummary
from club.domain.repository import EventRepository, SubgroupRepository
from club.domain.schedule import CalendarContext, aggregate
from club.domain.value import ClubId

from .base import Service


class CalendarService(Service):
    """Loads a club's events and projects them onto a display window."""

    def __init__(
        self,
        event_repository: EventRepository,
        subgroup_repository: SubgroupRepository,
    ) -> None:
        """Initialize calendar service.

        Args:
            event_repository: Event repository
            subgroup_repository: Subgroup repository
        """
        self.event_repository = event_repository
        self.subgroup_repository = subgroup_repository

    async def build_context(self, club_id: ClubId) -> CalendarContext:
        """Build the request-scoped lookups for one club."""
        subgroups = await self.subgroup_repository.find_by_club(club_id)
        return CalendarContext.from_subgroups(subgroups)

    async def get_window(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> dict[date, list[OccurrenceSummary]]:
        """Occurrences of every club event inside a window, bucketed by date.

        Raises:
            InvalidWindowError: If the window is reversed
            TransientStoreError: If events cannot be loaded
        """
        with logfire.span(
            "calendar_service.get_window",
            club_id=str(club_id),
            window_start=str(window_start),
            window_end=str(window_end),
        ):
            recurring = await self.event_repository.find_recurring_by_club(
                club_id, window_start, window_end
            )
            single = await self.event_repository.find_single_by_club(
                club_id, window_start, window_end
            )
            context = await self.build_context(club_id)

            days = aggregate(recurring, single, window_start, window_end, context)
            logfire.info(
                "Calendar window loaded",
                club_id=str(club_id),
                recurring_events=len(recurring),
                single_events=len(single),
                days_with_events=len(days),
            )
            return days
