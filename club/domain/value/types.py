"""Domain value objects for club scheduling.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from club.domain.value.common import RootValueObject


class RepeatType(str, Enum):
    """Repeat cadence of an event.

    NONE marks a single, non-recurring event.
    """

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class InvitationStatus(str, Enum):
    """Status of an invitation to one occurrence."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class EventCategory(str, Enum):
    """Kind of club event."""

    TRAINING = "training"
    COMPETITION = "competition"
    MEETING = "meeting"
    OTHER = "other"


class LeadTimeUnit(str, Enum):
    """Unit of an invitation lead time."""

    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"


class CancelScope(str, Enum):
    """Which occurrences of a recurring event a cancellation affects."""

    THIS = "this"  # Only the given occurrence
    FUTURE = "future"  # The given occurrence and every later one


class HexColor(RootValueObject[str]):
    """CSS hex colour used to tint calendar entries, e.g. '#6366f1'."""

    @field_validator("root")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        """Validate colour format and normalize to lowercase."""
        if not re.match(r"^#[0-9a-fA-F]{6}$", v):
            raise ValueError("Colour must be a hex value like #6366f1")
        return v.lower()
