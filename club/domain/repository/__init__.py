"""Repository interfaces for the club domain.

Interfaces live in the domain layer; implementations live in persistence.
"""

from club.domain.repository.event import EventRepository
from club.domain.repository.invitation import InvitationRepository
from club.domain.repository.subgroup import SubgroupRepository

__all__ = [
    "EventRepository",
    "InvitationRepository",
    "SubgroupRepository",
]
