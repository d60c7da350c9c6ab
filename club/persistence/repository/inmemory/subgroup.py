"""In-memory subgroup repository for testing."""

from club.domain.model.occurrence import Subgroup
from club.domain.repository.subgroup import SubgroupRepository
from club.domain.value import ClubId, SubgroupId


class InMemorySubgroupRepository(SubgroupRepository):
    """In-memory implementation of SubgroupRepository for testing."""

    def __init__(self) -> None:
        self._subgroups: dict[SubgroupId, Subgroup] = {}

    async def find_by_club(self, club_id: ClubId) -> list[Subgroup]:
        """Find all subgroups of a club, ordered by name."""
        matches = [s for s in self._subgroups.values() if s.club_id == club_id]
        return sorted(matches, key=lambda s: s.name)

    async def save(self, subgroup: Subgroup) -> Subgroup:
        """Save a subgroup (create or update)."""
        self._subgroups[subgroup.id] = subgroup
        return subgroup
