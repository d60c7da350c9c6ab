"""Subgroup repository interface."""

from abc import ABC, abstractmethod

from club.domain.model.occurrence import Subgroup
from club.domain.value import ClubId


class SubgroupRepository(ABC):
    """Read access to a club's subgroups."""

    @abstractmethod
    async def find_by_club(self, club_id: ClubId) -> list[Subgroup]:
        """Find all subgroups of a club."""
        pass

    @abstractmethod
    async def save(self, subgroup: Subgroup) -> Subgroup:
        """Save a subgroup (create or update)."""
        pass
