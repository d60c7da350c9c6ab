"""Occurrence projections.

Occurrences are derived from rules and never persisted on their own.
"""

from datetime import date, time
from typing import Optional

from club.domain.model.common import DomainModel
from club.domain.value import ClubId, EventCategory, EventId, HexColor, SubgroupId


class Subgroup(DomainModel):
    """Training group within a club, used to tint calendar entries."""

    id: SubgroupId
    club_id: ClubId
    name: str
    color: HexColor = HexColor("#6366f1")


class OccurrenceSummary(DomainModel):
    """One occurrence of an event with everything the calendar needs to render it."""

    event_id: EventId
    occurrence_date: date
    title: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: Optional[str] = None
    category: EventCategory
    group_key: HexColor  # Colour used to group and tint the entry
    subgroup_names: tuple[str, ...] = ()
    is_recurring: bool = False
