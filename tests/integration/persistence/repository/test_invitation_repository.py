"""Integration tests for PostgresInvitationRepository.

Run against SQLite so the unique index on (event_id, user_id,
occurrence_date) is enforced by a real database.
"""

from datetime import date, datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from club.domain.error import DuplicateInvitationError
from club.domain.model import InvitationRecord
from club.domain.repository import EventRepository, InvitationRepository
from club.domain.service import InvitationService
from club.domain.value import (
    EventId,
    InvitationId,
    InvitationStatus,
    RepeatType,
    UserId,
)
from club.persistence.repository import PostgresInvitationRepository
from tests.conftest import make_event, make_rule
from tests.harness import create_store_fixture

# Integration test fixture - real persistence
store = create_store_fixture()

WINDOW = (date(2024, 6, 1), date(2024, 6, 30))
JUNE_MONDAYS = [date(2024, 6, 3), date(2024, 6, 10), date(2024, 6, 17), date(2024, 6, 24)]


def _invitation(event_id: EventId, user_id: UserId, day: date) -> InvitationRecord:
    return InvitationRecord(
        id=InvitationId(uuid4()),
        event_id=event_id,
        user_id=user_id,
        occurrence_date=day,
        status=InvitationStatus.PENDING,
        created_at=datetime.now(),
    )


class CheckViolatingInvitationRepository(PostgresInvitationRepository):
    """Writes an out-of-range status for one date so the row fails its CHECK."""

    def __init__(self, session: AsyncSession, rejected_date: date) -> None:
        super().__init__(session)
        self.rejected_date = rejected_date

    async def add(self, invitation: InvitationRecord) -> InvitationRecord:
        if invitation.occurrence_date == self.rejected_date:
            invitation = invitation.model_copy(
                update={"status": SimpleNamespace(value="archived")}
            )
        return await super().add(invitation)


async def _create_event(store, rule=None):
    event = make_event(rule or make_rule(date(2024, 6, 3), RepeatType.WEEKLY))
    async with store() as request:
        repo = await request.get(EventRepository)
        await repo.save(event)
    return event


class TestInvitationRepositoryIntegration:
    """Integration tests for the invitation ledger."""

    @pytest.mark.asyncio
    async def test_add_and_find(self, store):
        # Arrange
        event = await _create_event(store)
        user_id = UserId(uuid4())

        # Act
        async with store() as request:
            repo = await request.get(InvitationRepository)
            await repo.add(_invitation(event.id, user_id, date(2024, 6, 10)))
            await repo.add(_invitation(event.id, user_id, date(2024, 6, 3)))

        # Assert
        async with store() as request:
            repo = await request.get(InvitationRepository)
            records = await repo.find_by_event_and_user(event.id, user_id)
            assert [r.occurrence_date for r in records] == [
                date(2024, 6, 3),
                date(2024, 6, 10),
            ]
            assert records[0].status == InvitationStatus.PENDING
            assert records[0].user_id == user_id
            assert await repo.find_invitee_ids(event.id) == [user_id]
            assert await repo.count_for_occurrence(event.id, date(2024, 6, 10)) == 1

    @pytest.mark.asyncio
    async def test_duplicate_key_rejected(self, store):
        """The unique index rejects a second record for the same occurrence."""
        event = await _create_event(store)
        user_id = UserId(uuid4())

        async with store() as request:
            repo = await request.get(InvitationRepository)
            await repo.add(_invitation(event.id, user_id, date(2024, 6, 10)))

            with pytest.raises(DuplicateInvitationError):
                await repo.add(_invitation(event.id, user_id, date(2024, 6, 10)))

            # The transaction is still usable after the rejection
            await repo.add(_invitation(event.id, user_id, date(2024, 6, 17)))

        async with store() as request:
            repo = await request.get(InvitationRepository)
            assert len(await repo.find_by_event(event.id)) == 2

    @pytest.mark.asyncio
    async def test_same_date_for_different_users_allowed(self, store):
        event = await _create_event(store)

        async with store() as request:
            repo = await request.get(InvitationRepository)
            await repo.add(_invitation(event.id, UserId(uuid4()), date(2024, 6, 10)))
            await repo.add(_invitation(event.id, UserId(uuid4()), date(2024, 6, 10)))

        async with store() as request:
            repo = await request.get(InvitationRepository)
            assert await repo.count_for_occurrence(event.id, date(2024, 6, 10)) == 2
            assert len(await repo.find_invitee_ids(event.id)) == 2


class TestMaterializationAgainstDatabase:
    """Materialization with a real unique index underneath."""

    @pytest.mark.asyncio
    async def test_stale_reader_cannot_duplicate(self, store):
        """A caller whose existing-records read predates another writer's commit.

        Both callers read before either writes. The second writer's inserts
        all hit the unique index and come back as duplicates.
        """
        event = await _create_event(store)
        user_id = UserId(uuid4())

        async with store() as request:
            repo = await request.get(InvitationRepository)
            stale_existing = [
                r.occurrence_date for r in await repo.find_by_event_and_user(event.id, user_id)
            ]

        async with store() as request:
            service = await request.get(InvitationService)
            winner = await service.sync_for_user(event, user_id, *WINDOW)

        async with store() as request:
            service = await request.get(InvitationService)
            loser = await service.materialize(
                event.rule, event.id, user_id, stale_existing, *WINDOW
            )

        assert winner.created == JUNE_MONDAYS
        assert loser.created == []
        assert loser.duplicates == JUNE_MONDAYS
        assert loser.failed == []

        async with store() as request:
            repo = await request.get(InvitationRepository)
            records = await repo.find_by_event_and_user(event.id, user_id)
            assert [r.occurrence_date for r in records] == JUNE_MONDAYS

    @pytest.mark.asyncio
    async def test_rejected_row_does_not_undo_the_others(self, store):
        """A row the database rejects rolls back alone; its neighbours commit."""
        event = await _create_event(store)
        user_id = UserId(uuid4())
        rejected_date = date(2024, 6, 10)

        async with store() as request:
            session = await request.get(AsyncSession)
            service = InvitationService(
                CheckViolatingInvitationRepository(session, rejected_date)
            )
            result = await service.materialize(
                event.rule, event.id, user_id, [], *WINDOW
            )

        assert result.created == [date(2024, 6, 3), date(2024, 6, 17), date(2024, 6, 24)]
        assert result.failed == [rejected_date]
        assert result.duplicates == []

        async with store() as request:
            repo = await request.get(InvitationRepository)
            records = await repo.find_by_event_and_user(event.id, user_id)
            assert [r.occurrence_date for r in records] == result.created

    @pytest.mark.asyncio
    async def test_resync_is_idempotent(self, store):
        event = await _create_event(store)
        user_id = UserId(uuid4())

        for _ in range(2):
            async with store() as request:
                service = await request.get(InvitationService)
                result = await service.sync_for_user(event, user_id, *WINDOW)

        assert result.created == []
        assert result.duplicates == []

        async with store() as request:
            repo = await request.get(InvitationRepository)
            assert len(await repo.find_by_event(event.id)) == 4
