"""Event domain service."""

from datetime import date, timedelta

import logfire

from club.domain.error import NotFoundError, ValidationError
from club.domain.model import Event
from club.domain.repository import EventRepository
from club.domain.schedule import next_occurrence
from club.domain.value import CancelScope, EventId

from .base import Service


class EventService(Service):
    """Domain service for event lookups and occurrence cancellation."""

    def __init__(self, event_repository: EventRepository) -> None:
        """Initialize event service.

        Args:
            event_repository: Event repository
        """
        self.event_repository = event_repository

    async def get_by_id(self, event_id: EventId) -> Event:
        """Get event by ID.

        Raises:
            NotFoundError: If event not found
        """
        with logfire.span("event_service.get_by_id", event_id=str(event_id)):
            event = await self.event_repository.find_by_id(event_id)
            if not event:
                logfire.warn("Event not found", event_id=str(event_id))
                raise NotFoundError("Event", str(event_id))
            return event

    def next_occurrence(self, event: Event, after: date) -> date | None:
        """Next date on or after `after` on which the event takes place.

        Single events yield their own date while it has not passed.

        Raises:
            InvalidRuleError: If the recurrence rule cannot be expanded
        """
        if event.cancelled:
            return None
        if not event.is_recurring:
            day = event.rule.start_date
            return day if day is not None and day >= after else None
        return next_occurrence(event.rule, after)

    async def cancel_occurrence(
        self, event: Event, occurrence_date: date, scope: CancelScope
    ) -> Event:
        """Cancel one occurrence, or an occurrence and all later ones.

        THIS adds the date to the rule's exclusions. FUTURE ends the series
        the day before the date. Invitations already materialized for the
        cancelled dates are left untouched.

        Args:
            event: Recurring event
            occurrence_date: Date of the occurrence to cancel
            scope: Which occurrences are affected

        Returns:
            The updated event

        Raises:
            ValidationError: If the event is not recurring or the date is
                before the series starts
        """
        with logfire.span(
            "event_service.cancel_occurrence",
            event_id=str(event.id),
            occurrence_date=str(occurrence_date),
            scope=scope.value,
        ):
            if not event.is_recurring:
                raise ValidationError("Only recurring events have occurrences to cancel")
            if event.rule.start_date is not None and occurrence_date < event.rule.start_date:
                raise ValidationError(
                    f"{occurrence_date} is before the series starts on {event.rule.start_date}"
                )

            if scope == CancelScope.THIS:
                await self.event_repository.add_exclusion(event.id, occurrence_date)
                updated = event.model_copy(
                    update={"rule": event.rule.with_exclusion(occurrence_date)}
                )
            else:
                new_end = occurrence_date - timedelta(days=1)
                if event.rule.end_date is not None and event.rule.end_date < new_end:
                    new_end = event.rule.end_date
                await self.event_repository.set_end_date(event.id, new_end)
                updated = event.model_copy(
                    update={"rule": event.rule.model_copy(update={"end_date": new_end})}
                )

            logfire.info(
                "Occurrence cancelled",
                event_id=str(event.id),
                occurrence_date=str(occurrence_date),
                scope=scope.value,
            )
            return updated
