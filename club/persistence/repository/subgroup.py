"""PostgreSQL implementation of Subgroup repository."""

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from club.domain.model import Subgroup
from club.domain.repository import SubgroupRepository
from club.domain.value import ClubId
from club.persistence.error import store_errors
from club.persistence.mappers import row_to_subgroup, subgroup_to_dict
from club.persistence.tables import subgroups_table


class PostgresSubgroupRepository(SubgroupRepository):
    """PostgreSQL implementation of SubgroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_club(self, club_id: ClubId) -> list[Subgroup]:
        """Find all subgroups of a club, ordered by name."""
        with store_errors("subgroup.find_by_club"):
            stmt = (
                select(subgroups_table)
                .where(subgroups_table.c.club_id == club_id)
                .order_by(subgroups_table.c.name)
            )
            result = await self.session.execute(stmt)
            return [row_to_subgroup(dict(row)) for row in result.mappings().all()]

    async def save(self, subgroup: Subgroup) -> Subgroup:
        """Save a subgroup (create or update)."""
        with store_errors("subgroup.save"):
            subgroup_dict = subgroup_to_dict(subgroup)
            stmt = select(subgroups_table.c.id).where(
                subgroups_table.c.id == subgroup.id
            )
            existing = (await self.session.execute(stmt)).first()

            if existing:
                stmt = (
                    update(subgroups_table)
                    .where(subgroups_table.c.id == subgroup.id)
                    .values(**subgroup_dict)
                )
            else:
                stmt = insert(subgroups_table).values(**subgroup_dict)
            await self.session.execute(stmt)
            await self.session.flush()
            return subgroup
