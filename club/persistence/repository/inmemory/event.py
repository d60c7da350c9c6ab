"""In-memory event repository for testing."""

from datetime import date
from typing import Optional

from club.domain.model.event import Event
from club.domain.repository.event import EventRepository
from club.domain.value import ClubId, EventId


class InMemoryEventRepository(EventRepository):
    """In-memory implementation of EventRepository for testing."""

    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID."""
        return self._events.get(event_id)

    async def find_recurring_by_club(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> list[Event]:
        """Find recurring events of a club that may occur inside a window."""
        matches = []
        for event in self._events.values():
            if event.club_id != club_id or not event.is_recurring:
                continue
            rule = event.rule
            if rule.start_date is not None and rule.start_date > window_end:
                continue
            if rule.end_date is not None and rule.end_date < window_start:
                continue
            matches.append(event)
        return matches

    async def find_single_by_club(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> list[Event]:
        """Find single events of a club dated inside a window."""
        return [
            event
            for event in self._events.values()
            if event.club_id == club_id
            and not event.is_recurring
            and event.rule.start_date is not None
            and window_start <= event.rule.start_date <= window_end
        ]

    async def save(self, event: Event) -> Event:
        """Save an event (create or update)."""
        self._events[event.id] = event
        return event

    async def add_exclusion(self, event_id: EventId, excluded_date: date) -> None:
        """Exclude one date from an event's recurrence."""
        event = self._events.get(event_id)
        if event:
            self._events[event_id] = event.model_copy(
                update={"rule": event.rule.with_exclusion(excluded_date)}
            )

    async def set_end_date(self, event_id: EventId, end_date: Optional[date]) -> None:
        """Set the last date a recurring event may occur on."""
        event = self._events.get(event_id)
        if event:
            self._events[event_id] = event.model_copy(
                update={"rule": event.rule.model_copy(update={"end_date": end_date})}
            )
