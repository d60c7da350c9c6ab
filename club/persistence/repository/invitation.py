"""PostgreSQL implementation of Invitation repository."""

from datetime import date

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from club.domain.error import DuplicateInvitationError
from club.domain.model import InvitationRecord
from club.domain.repository import InvitationRepository
from club.domain.value import EventId, UserId
from club.persistence.error import store_errors
from club.persistence.mappers import invitation_to_dict, row_to_invitation
from club.persistence.statement import insert_ignoring_conflicts
from club.persistence.tables import event_invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    Uniqueness of (event_id, user_id, occurrence_date) is enforced by the
    uq_event_invitation_occurrence constraint. Inserts use ON CONFLICT DO
    NOTHING so a lost race is reported without aborting the transaction.
    Each insert runs in its own savepoint: any other rejected row rolls back
    alone and the rows added before and after it still commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_event_and_user(
        self, event_id: EventId, user_id: UserId
    ) -> list[InvitationRecord]:
        """Find all invitations of one user to one event."""
        with store_errors("invitation.find_by_event_and_user"):
            stmt = (
                select(event_invitations_table)
                .where(
                    and_(
                        event_invitations_table.c.event_id == event_id,
                        event_invitations_table.c.user_id == user_id,
                    )
                )
                .order_by(event_invitations_table.c.occurrence_date)
            )
            result = await self.session.execute(stmt)
            return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def find_by_event(self, event_id: EventId) -> list[InvitationRecord]:
        """Find all invitations to an event."""
        with store_errors("invitation.find_by_event"):
            stmt = (
                select(event_invitations_table)
                .where(event_invitations_table.c.event_id == event_id)
                .order_by(
                    event_invitations_table.c.occurrence_date,
                    event_invitations_table.c.created_at,
                )
            )
            result = await self.session.execute(stmt)
            return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def find_invitee_ids(self, event_id: EventId) -> list[UserId]:
        """Distinct users holding at least one invitation to the event."""
        with store_errors("invitation.find_invitee_ids"):
            stmt = (
                select(event_invitations_table.c.user_id)
                .where(event_invitations_table.c.event_id == event_id)
                .distinct()
                .order_by(event_invitations_table.c.user_id)
            )
            result = await self.session.execute(stmt)
            return [UserId(user_id) for user_id in result.scalars().all()]

    async def count_for_occurrence(
        self, event_id: EventId, occurrence_date: date
    ) -> int:
        """Number of invitations to one occurrence of an event."""
        with store_errors("invitation.count_for_occurrence"):
            stmt = (
                select(func.count())
                .select_from(event_invitations_table)
                .where(
                    and_(
                        event_invitations_table.c.event_id == event_id,
                        event_invitations_table.c.occurrence_date == occurrence_date,
                    )
                )
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def add(self, invitation: InvitationRecord) -> InvitationRecord:
        """Insert a new invitation.

        Raises:
            DuplicateInvitationError: If the occurrence already has a record
                for this user
            StoreError: If the database rejects the row; only this row is
                rolled back
            TransientStoreError: If the store is unavailable
        """
        with store_errors("invitation.add"):
            stmt = insert_ignoring_conflicts(
                self.session,
                event_invitations_table,
                invitation_to_dict(invitation),
                ["event_id", "user_id", "occurrence_date"],
            )
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)

        if result.rowcount == 0:
            raise DuplicateInvitationError(
                str(invitation.event_id),
                str(invitation.user_id),
                str(invitation.occurrence_date),
            )
        return invitation
