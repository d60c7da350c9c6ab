"""PostgreSQL implementation of Event repository."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any, Optional

import logfire
from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from club.domain.model import Event
from club.domain.repository import EventRepository
from club.domain.value import ClubId, EventId, RepeatType
from club.persistence.error import store_errors
from club.persistence.mappers import event_to_dict, row_to_event
from club.persistence.statement import insert_ignoring_conflicts
from club.persistence.tables import event_exclusions_table, events_table


class PostgresEventRepository(EventRepository):
    """PostgreSQL implementation of EventRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load_exclusions(
        self, event_ids: Sequence[EventId]
    ) -> dict[EventId, list[date]]:
        if not event_ids:
            return {}
        stmt = select(event_exclusions_table).where(
            event_exclusions_table.c.event_id.in_(event_ids)
        )
        result = await self.session.execute(stmt)
        exclusions: dict[EventId, list[date]] = defaultdict(list)
        for row in result.fetchall():
            exclusions[EventId(row.event_id)].append(row.excluded_date)
        return exclusions

    async def _rows_to_events(self, rows: Iterable[dict[str, Any]]) -> list[Event]:
        """Map rows to events, skipping rows that do not form a valid event.

        A malformed row is logged and dropped so it cannot break the
        listing for every other event of the club.
        """
        rows = list(rows)
        exclusions = await self._load_exclusions([row["id"] for row in rows])
        events = []
        for row in rows:
            try:
                events.append(row_to_event(row, exclusions.get(row["id"], ())))
            except ValueError as e:
                logfire.warn(
                    "Skipping malformed event row", event_id=str(row["id"]), error=str(e)
                )
        return events

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID, with its exclusions."""
        with store_errors("event.find_by_id"):
            stmt = select(events_table).where(events_table.c.id == event_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            if not row:
                return None
            exclusions = await self._load_exclusions([event_id])
            return row_to_event(dict(row), exclusions.get(event_id, ()))

    async def find_recurring_by_club(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> list[Event]:
        """Find recurring events of a club that may occur inside a window.

        Rows without a start date are returned too, so the caller can reject
        them per event.
        """
        with store_errors("event.find_recurring_by_club"):
            stmt = (
                select(events_table)
                .where(
                    and_(
                        events_table.c.club_id == club_id,
                        events_table.c.repeat_type != RepeatType.NONE.value,
                        or_(
                            events_table.c.start_date.is_(None),
                            events_table.c.start_date <= window_end,
                        ),
                        or_(
                            events_table.c.repeat_end_date.is_(None),
                            events_table.c.repeat_end_date >= window_start,
                        ),
                    )
                )
                .order_by(events_table.c.start_date, events_table.c.created_at)
            )
            result = await self.session.execute(stmt)
            return await self._rows_to_events(
                dict(row) for row in result.mappings().all()
            )

    async def find_single_by_club(
        self, club_id: ClubId, window_start: date, window_end: date
    ) -> list[Event]:
        """Find single events of a club dated inside a window."""
        with store_errors("event.find_single_by_club"):
            stmt = (
                select(events_table)
                .where(
                    and_(
                        events_table.c.club_id == club_id,
                        events_table.c.repeat_type == RepeatType.NONE.value,
                        events_table.c.start_date >= window_start,
                        events_table.c.start_date <= window_end,
                    )
                )
                .order_by(events_table.c.start_date, events_table.c.start_time)
            )
            result = await self.session.execute(stmt)
            return await self._rows_to_events(
                dict(row) for row in result.mappings().all()
            )

    async def save(self, event: Event) -> Event:
        """Save an event (create or update), replacing its exclusions."""
        with store_errors("event.save"):
            event_dict = event_to_dict(event)

            stmt = select(events_table.c.id).where(events_table.c.id == event.id)
            existing = (await self.session.execute(stmt)).first()

            if existing:
                stmt = (
                    update(events_table)
                    .where(events_table.c.id == event.id)
                    .values(**event_dict)
                )
                await self.session.execute(stmt)
                await self.session.execute(
                    delete(event_exclusions_table).where(
                        event_exclusions_table.c.event_id == event.id
                    )
                )
            else:
                await self.session.execute(insert(events_table).values(**event_dict))

            if event.rule.excluded_dates:
                await self.session.execute(
                    insert(event_exclusions_table),
                    [
                        {"event_id": event.id, "excluded_date": day}
                        for day in sorted(event.rule.excluded_dates)
                    ],
                )

            await self.session.flush()
            return event

    async def add_exclusion(self, event_id: EventId, excluded_date: date) -> None:
        """Exclude one date from an event's recurrence."""
        with store_errors("event.add_exclusion"):
            stmt = insert_ignoring_conflicts(
                self.session,
                event_exclusions_table,
                {"event_id": event_id, "excluded_date": excluded_date},
                ["event_id", "excluded_date"],
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def set_end_date(self, event_id: EventId, end_date: Optional[date]) -> None:
        """Set the last date a recurring event may occur on."""
        with store_errors("event.set_end_date"):
            stmt = (
                update(events_table)
                .where(events_table.c.id == event_id)
                .values(repeat_end_date=end_date)
            )
            await self.session.execute(stmt)
            await self.session.flush()
