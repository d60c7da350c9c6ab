"""Recurrence rule.

Describes when a recurring event happens. Dates are naive calendar dates.
"""

from datetime import date

from club.domain.model.common import DomainModel
from club.domain.value import RepeatType


class RecurrenceRule(DomainModel):
    """Immutable schedule of a recurring event.

    Business rules:
    - start_date is always a candidate occurrence; only membership in
      excluded_dates removes it
    - Occurrences strictly after end_date are invalid; no end_date means unbounded
    - repeat_type NONE describes a single event and is never expanded

    start_date is optional only so that rows with a missing start can be
    loaded and then rejected per rule instead of failing a whole query.
    """

    start_date: date | None
    repeat_type: RepeatType = RepeatType.NONE
    end_date: date | None = None
    excluded_dates: frozenset[date] = frozenset()

    @property
    def is_recurring(self) -> bool:
        return self.repeat_type != RepeatType.NONE

    def is_excluded(self, day: date) -> bool:
        return day in self.excluded_dates

    def with_exclusion(self, day: date) -> "RecurrenceRule":
        """Return a copy of this rule that also excludes the given date."""
        return self.model_copy(
            update={"excluded_dates": self.excluded_dates | {day}}
        )
