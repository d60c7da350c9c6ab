"""Strongly typed identifiers for club domain entities.

Using NewType prevents mixing up different entity IDs.
"""

from typing import NewType
from uuid import UUID

ClubId = NewType("ClubId", UUID)
EventId = NewType("EventId", UUID)
UserId = NewType("UserId", UUID)
InvitationId = NewType("InvitationId", UUID)
SubgroupId = NewType("SubgroupId", UUID)
