"""Invitation domain service.

Materializes invitation records for the occurrences of recurring events.
"""

from collections.abc import Iterable
from datetime import date, datetime
from uuid import uuid4

import logfire
from pydantic import BaseModel

from club.domain.error import DuplicateInvitationError, StoreError
from club.domain.model import Event, InvitationRecord, RecurrenceRule
from club.domain.repository import InvitationRepository
from club.domain.schedule import generate
from club.domain.value import (
    CancelScope,
    EventId,
    InvitationId,
    InvitationStatus,
    UserId,
)

from .base import Service


class MaterializationResult(BaseModel):
    """Outcome of materializing one user's invitations to one event.

    Attributes:
        created: Dates for which a new record was inserted
        duplicates: Dates another caller inserted first (benign)
        failed: Dates whose insert failed for any other reason
    """

    event_id: EventId
    user_id: UserId
    created: list[date] = []
    duplicates: list[date] = []
    failed: list[date] = []

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


class InvitationService(Service):
    """Domain service keeping the invitation ledger in sync with event rules.

    Materialization is strictly additive: records are never updated or
    deleted here, and a date added to a rule's exclusions only stops future
    materialization.
    """

    def __init__(self, invitation_repository: InvitationRepository) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
        """
        self.invitation_repository = invitation_repository

    async def materialize(
        self,
        rule: RecurrenceRule,
        event_id: EventId,
        user_id: UserId,
        existing_occurrence_dates: Iterable[date],
        window_start: date,
        window_end: date,
    ) -> MaterializationResult:
        """Insert pending invitations for occurrences the user has none for.

        Idempotent: repeating the call with unchanged inputs creates nothing.
        Concurrent calls are safe; a duplicate rejected by the store counts
        as a no-op. Other insert failures are logged and the remaining dates
        are still attempted.

        Args:
            rule: The event's recurrence rule
            event_id: Event the invitations belong to
            user_id: Invited user
            existing_occurrence_dates: Dates the user already has records for
            window_start: First date to materialize (inclusive)
            window_end: Last date to materialize (inclusive)

        Returns:
            Dates created, rejected as duplicates, and failed

        Raises:
            InvalidRuleError: If the rule cannot be expanded
            InvalidWindowError: If the window is reversed
        """
        with logfire.span(
            "invitation_service.materialize",
            event_id=str(event_id),
            user_id=str(user_id),
            window_start=str(window_start),
            window_end=str(window_end),
        ):
            generated = generate(rule, window_start, window_end)
            existing = set(existing_occurrence_dates)
            missing = [day for day in generated if day not in existing]

            result = MaterializationResult(event_id=event_id, user_id=user_id)
            for occurrence_date in missing:
                invitation = InvitationRecord(
                    id=InvitationId(uuid4()),
                    event_id=event_id,
                    user_id=user_id,
                    occurrence_date=occurrence_date,
                    status=InvitationStatus.PENDING,
                    created_at=datetime.now(),
                )
                try:
                    await self.invitation_repository.add(invitation)
                    result.created.append(occurrence_date)
                except DuplicateInvitationError:
                    result.duplicates.append(occurrence_date)
                    logfire.debug(
                        "Invitation already materialized",
                        event_id=str(event_id),
                        user_id=str(user_id),
                        occurrence_date=str(occurrence_date),
                    )
                except StoreError as e:
                    result.failed.append(occurrence_date)
                    logfire.error(
                        "Failed to insert invitation",
                        event_id=str(event_id),
                        user_id=str(user_id),
                        occurrence_date=str(occurrence_date),
                        error=str(e),
                    )

            logfire.info(
                "Invitations materialized",
                event_id=str(event_id),
                user_id=str(user_id),
                generated=len(generated),
                created=result.created_count,
                duplicates=len(result.duplicates),
                failed=result.failed_count,
            )
            return result

    async def sync_for_user(
        self,
        event: Event,
        user_id: UserId,
        window_start: date,
        window_end: date,
    ) -> MaterializationResult:
        """Materialize one user's invitations using the records in the store.

        Raises:
            TransientStoreError: If existing records cannot be read; nothing
                is written in that case
            InvalidRuleError: If the event's rule cannot be expanded
        """
        existing = await self.invitation_repository.find_by_event_and_user(
            event.id, user_id
        )
        return await self.materialize(
            event.rule,
            event.id,
            user_id,
            [invitation.occurrence_date for invitation in existing],
            window_start,
            window_end,
        )

    async def find_invitee_ids(self, event_id: EventId) -> list[UserId]:
        """Users already invited to at least one occurrence of the event."""
        with logfire.span(
            "invitation_service.find_invitee_ids", event_id=str(event_id)
        ):
            invitee_ids = await self.invitation_repository.find_invitee_ids(event_id)
            logfire.info(
                "Invitees found", event_id=str(event_id), count=len(invitee_ids)
            )
            return invitee_ids

    async def count_stale(
        self, event_id: EventId, occurrence_date: date, scope: CancelScope
    ) -> int:
        """Invitations left behind by cancelling occurrences.

        THIS counts the records of the one date; FUTURE counts every record
        on or after it.
        """
        if scope == CancelScope.THIS:
            return await self.invitation_repository.count_for_occurrence(
                event_id, occurrence_date
            )
        invitations = await self.invitation_repository.find_by_event(event_id)
        return sum(1 for inv in invitations if inv.occurrence_date >= occurrence_date)
