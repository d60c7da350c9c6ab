"""In-memory invitation repository for testing."""

import asyncio
from datetime import date

from club.domain.error import DuplicateInvitationError, TransientStoreError
from club.domain.model.invitation import InvitationRecord
from club.domain.repository.invitation import InvitationRepository
from club.domain.value import EventId, UserId


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Enforces the (event_id, user_id, occurrence_date) uniqueness the way the
    database index does. Dates listed in fail_on_dates make add() raise
    TransientStoreError, to simulate a store outage part way through a batch.
    """

    def __init__(self) -> None:
        self._invitations: dict[tuple[EventId, UserId, date], InvitationRecord] = {}
        self.fail_on_dates: set[date] = set()
        self.add_calls = 0

    async def find_by_event_and_user(
        self, event_id: EventId, user_id: UserId
    ) -> list[InvitationRecord]:
        """Find all invitations of one user to one event."""
        matches = [
            inv
            for inv in self._invitations.values()
            if inv.event_id == event_id and inv.user_id == user_id
        ]
        return sorted(matches, key=lambda inv: inv.occurrence_date)

    async def find_by_event(self, event_id: EventId) -> list[InvitationRecord]:
        """Find all invitations to an event."""
        matches = [inv for inv in self._invitations.values() if inv.event_id == event_id]
        return sorted(matches, key=lambda inv: (inv.occurrence_date, inv.created_at))

    async def find_invitee_ids(self, event_id: EventId) -> list[UserId]:
        """Distinct users holding at least one invitation to the event."""
        user_ids = {inv.user_id for inv in self._invitations.values() if inv.event_id == event_id}
        return sorted(user_ids)

    async def count_for_occurrence(
        self, event_id: EventId, occurrence_date: date
    ) -> int:
        """Number of invitations to one occurrence of an event."""
        return sum(
            1
            for inv in self._invitations.values()
            if inv.event_id == event_id and inv.occurrence_date == occurrence_date
        )

    async def add(self, invitation: InvitationRecord) -> InvitationRecord:
        """Insert a new invitation.

        Yields to the event loop first so concurrent materializations
        interleave between their read and their writes.

        Raises:
            DuplicateInvitationError: If the key is already taken
            TransientStoreError: If the date is in fail_on_dates
        """
        await asyncio.sleep(0)
        self.add_calls += 1

        if invitation.occurrence_date in self.fail_on_dates:
            raise TransientStoreError(
                f"Simulated outage adding invitation for {invitation.occurrence_date}"
            )

        # Check-and-insert without awaiting in between, so it is atomic
        if invitation.key in self._invitations:
            raise DuplicateInvitationError(
                str(invitation.event_id),
                str(invitation.user_id),
                str(invitation.occurrence_date),
            )
        self._invitations[invitation.key] = invitation
        return invitation
