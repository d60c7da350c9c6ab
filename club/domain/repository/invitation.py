"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import date

from club.domain.model.invitation import InvitationRecord
from club.domain.value import EventId, UserId


class InvitationRepository(ABC):
    """Repository for InvitationRecord entity.

    Implementations must enforce uniqueness of
    (event_id, user_id, occurrence_date) atomically, at the storage layer.
    """

    @abstractmethod
    async def find_by_event_and_user(
        self, event_id: EventId, user_id: UserId
    ) -> list[InvitationRecord]:
        """Find all invitations of one user to one event.

        Args:
            event_id: The event's identifier
            user_id: The invited user's identifier

        Returns:
            Invitations ordered by occurrence date

        Raises:
            TransientStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def find_by_event(self, event_id: EventId) -> list[InvitationRecord]:
        """Find all invitations to an event, for every user and date."""
        pass

    @abstractmethod
    async def find_invitee_ids(self, event_id: EventId) -> list[UserId]:
        """Distinct users holding at least one invitation to the event."""
        pass

    @abstractmethod
    async def count_for_occurrence(self, event_id: EventId, occurrence_date: date) -> int:
        """Number of invitations to one occurrence of an event."""
        pass

    @abstractmethod
    async def add(self, invitation: InvitationRecord) -> InvitationRecord:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The inserted invitation

        Raises:
            DuplicateInvitationError: If a record with the same event, user
                and occurrence date already exists
            TransientStoreError: If the store is unavailable
        """
        pass
