"""Event repository interface."""

from abc import ABC, abstractmethod
from datetime import date

from club.domain.model.event import Event
from club.domain.value import ClubId, EventId


class EventRepository(ABC):
    """Repository for Event entity, including its recurrence rule."""

    @abstractmethod
    async def find_by_id(self, event_id: EventId) -> Event | None:
        """Find an event by ID.

        Args:
            event_id: The event's unique identifier

        Returns:
            The event with its exclusions if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_recurring_by_club(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> list[Event]:
        """Find recurring events that may occur inside a window.

        Returns every recurring event of the club that starts on or before
        window_end and has not ended before window_start. Cancelled events
        are included; callers decide what to do with them.
        """
        pass

    @abstractmethod
    async def find_single_by_club(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> list[Event]:
        """Find single events dated inside a window."""
        pass

    @abstractmethod
    async def save(self, event: Event) -> Event:
        """Save an event (create or update), including its exclusions."""
        pass

    @abstractmethod
    async def add_exclusion(self, event_id: EventId, excluded_date: date) -> None:
        """Exclude one date from an event's recurrence.

        Idempotent: excluding an already excluded date is a no-op.
        """
        pass

    @abstractmethod
    async def set_end_date(self, event_id: EventId, end_date: date | None) -> None:
        """Set the last date a recurring event may occur on."""
        pass
