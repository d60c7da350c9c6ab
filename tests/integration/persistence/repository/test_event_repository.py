"""Integration tests for PostgresEventRepository and PostgresSubgroupRepository."""

from datetime import date, datetime
from uuid import uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from club.domain.model import Subgroup
from club.domain.repository import EventRepository, SubgroupRepository
from club.domain.value import (
    ClubId,
    EventCategory,
    HexColor,
    LeadTimeUnit,
    RepeatType,
    SubgroupId,
)
from club.persistence.tables import events_table
from tests.conftest import make_event, make_rule
from tests.harness import create_store_fixture

# Integration test fixture - real persistence
store = create_store_fixture()

JUNE = (date(2024, 6, 1), date(2024, 6, 30))


async def _save(store, *events):
    async with store() as request:
        repo = await request.get(EventRepository)
        for event in events:
            await repo.save(event)


class TestEventRepositoryIntegration:
    """Integration tests for events and their exclusions."""

    @pytest.mark.asyncio
    async def test_round_trip_with_exclusions(self, store):
        # Arrange
        subgroup_id = SubgroupId(uuid4())
        event = make_event(
            make_rule(
                date(2024, 6, 3),
                RepeatType.BIWEEKLY,
                end_date=date(2024, 12, 31),
                excluded_dates={date(2024, 6, 17), date(2024, 7, 1)},
            ),
            category=EventCategory.COMPETITION,
            target_subgroup_ids=(subgroup_id,),
            lead_time_value=36,
            lead_time_unit=LeadTimeUnit.HOURS,
        )

        # Act
        await _save(store, event)

        # Assert
        async with store() as request:
            repo = await request.get(EventRepository)
            found = await repo.find_by_id(event.id)

        assert found is not None
        assert found.rule == event.rule
        assert found.category == EventCategory.COMPETITION
        assert found.target_subgroup_ids == (subgroup_id,)
        assert found.lead_time() == event.lead_time()
        assert found.start_time == event.start_time

    @pytest.mark.asyncio
    async def test_missing_event_is_none(self, store):
        async with store() as request:
            repo = await request.get(EventRepository)
            assert await repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_save_replaces_exclusions(self, store):
        event = make_event(
            make_rule(date(2024, 6, 3), excluded_dates={date(2024, 6, 10)})
        )
        await _save(store, event)

        edited = event.model_copy(
            update={"rule": make_rule(date(2024, 6, 3), excluded_dates={date(2024, 6, 24)})}
        )
        await _save(store, edited)

        async with store() as request:
            repo = await request.get(EventRepository)
            found = await repo.find_by_id(event.id)
        assert found.rule.excluded_dates == frozenset({date(2024, 6, 24)})

    @pytest.mark.asyncio
    async def test_add_exclusion_is_idempotent(self, store):
        event = make_event(make_rule(date(2024, 6, 3)))
        await _save(store, event)

        for _ in range(2):
            async with store() as request:
                repo = await request.get(EventRepository)
                await repo.add_exclusion(event.id, date(2024, 6, 10))

        async with store() as request:
            repo = await request.get(EventRepository)
            found = await repo.find_by_id(event.id)
        assert found.rule.excluded_dates == frozenset({date(2024, 6, 10)})

    @pytest.mark.asyncio
    async def test_set_end_date(self, store):
        event = make_event(make_rule(date(2024, 6, 3)))
        await _save(store, event)

        async with store() as request:
            repo = await request.get(EventRepository)
            await repo.set_end_date(event.id, date(2024, 6, 16))

        async with store() as request:
            repo = await request.get(EventRepository)
            found = await repo.find_by_id(event.id)
        assert found.rule.end_date == date(2024, 6, 16)

    @pytest.mark.asyncio
    async def test_recurring_lookup_filters_by_window(self, store, club_id):
        current = make_event(make_rule(date(2024, 1, 1)), club_id=club_id, title="Current")
        ended = make_event(
            make_rule(date(2024, 1, 1), end_date=date(2024, 5, 31)),
            club_id=club_id,
            title="Ended",
        )
        later = make_event(make_rule(date(2024, 7, 1)), club_id=club_id, title="Later")
        undated = make_event(make_rule(None), club_id=club_id, title="Undated")
        single = make_event(
            make_rule(date(2024, 6, 5), RepeatType.NONE), club_id=club_id, title="Single"
        )
        elsewhere = make_event(make_rule(date(2024, 1, 1)), title="Elsewhere")
        await _save(store, current, ended, later, undated, single, elsewhere)

        async with store() as request:
            repo = await request.get(EventRepository)
            recurring = await repo.find_recurring_by_club(club_id, *JUNE)
            singles = await repo.find_single_by_club(club_id, *JUNE)

        assert sorted(e.title for e in recurring) == ["Current", "Undated"]
        assert [e.title for e in singles] == ["Single"]

    @pytest.mark.asyncio
    async def test_malformed_row_skipped(self, store, club_id):
        """One bad row does not hide the club's other events."""
        good = make_event(make_rule(date(2024, 6, 3)), club_id=club_id)
        await _save(store, good)

        async with store() as request:
            session = await request.get(AsyncSession)
            await session.execute(
                insert(events_table).values(
                    id=uuid4(),
                    club_id=club_id,
                    title="Archery",
                    start_date=date(2024, 6, 4),
                    category="archery",
                    repeat_type="weekly",
                    target_subgroup_ids=[],
                    cancelled=False,
                    created_at=datetime.now(),
                )
            )

        async with store() as request:
            repo = await request.get(EventRepository)
            recurring = await repo.find_recurring_by_club(club_id, *JUNE)

        assert [e.id for e in recurring] == [good.id]


class TestSubgroupRepositoryIntegration:
    """Integration tests for subgroups."""

    @pytest.mark.asyncio
    async def test_find_by_club_ordered_by_name(self, store, club_id):
        async with store() as request:
            repo = await request.get(SubgroupRepository)
            for name, color in (("Seniors", "#22C55E"), ("Juniors", "#0ea5e9")):
                await repo.save(
                    Subgroup(
                        id=SubgroupId(uuid4()),
                        club_id=club_id,
                        name=name,
                        color=HexColor(color),
                    )
                )
            await repo.save(
                Subgroup(id=SubgroupId(uuid4()), club_id=ClubId(uuid4()), name="Other")
            )

        async with store() as request:
            repo = await request.get(SubgroupRepository)
            subgroups = await repo.find_by_club(club_id)

        assert [s.name for s in subgroups] == ["Juniors", "Seniors"]
        assert subgroups[1].color.root == "#22c55e"
