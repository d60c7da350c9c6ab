"""PostgreSQL repository implementations."""

from club.persistence.repository.event import PostgresEventRepository
from club.persistence.repository.invitation import PostgresInvitationRepository
from club.persistence.repository.subgroup import PostgresSubgroupRepository

__all__ = [
    "PostgresEventRepository",
    "PostgresInvitationRepository",
    "PostgresSubgroupRepository",
]
