"""Event entity.

A club event is either a single event on one date or a recurring series
described by its RecurrenceRule.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Optional

from pydantic import Field

from club.domain.model.common import DomainModel
from club.domain.model.recurrence import RecurrenceRule
from club.domain.value import ClubId, EventCategory, EventId, LeadTimeUnit, SubgroupId


class Event(DomainModel):
    """Event entity.

    Business rules:
    - Single events occur exactly on rule.start_date
    - Cancelled events produce no occurrences and no new invitations
    - Invitations for an occurrence appear once it is within the lead time
      (or the default lookahead when no lead time is set)
    """

    id: EventId
    club_id: ClubId
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    category: EventCategory = EventCategory.OTHER
    target_subgroup_ids: tuple[SubgroupId, ...] = ()
    cancelled: bool = False
    lead_time_value: Optional[int] = None
    lead_time_unit: Optional[LeadTimeUnit] = None
    rule: RecurrenceRule
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_recurring(self) -> bool:
        return self.rule.is_recurring

    def lead_time(self) -> timedelta | None:
        """Invitation lead time in whole days, hours rounded up."""
        if self.lead_time_value is None or self.lead_time_unit is None:
            return None
        if self.lead_time_unit == LeadTimeUnit.HOURS:
            return timedelta(days=math.ceil(self.lead_time_value / 24))
        if self.lead_time_unit == LeadTimeUnit.WEEKS:
            return timedelta(weeks=self.lead_time_value)
        return timedelta(days=self.lead_time_value)

    def lookahead_end(self, today: date, default_weeks: int) -> date:
        """Last date whose occurrence should already have invitations."""
        lead = self.lead_time()
        if lead is None:
            lead = timedelta(weeks=default_weeks)
        return today + lead
