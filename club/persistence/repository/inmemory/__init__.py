"""In-memory repository implementations for testing."""

from .event import InMemoryEventRepository
from .invitation import InMemoryInvitationRepository
from .subgroup import InMemorySubgroupRepository

__all__ = [
    "InMemoryEventRepository",
    "InMemoryInvitationRepository",
    "InMemorySubgroupRepository",
]
