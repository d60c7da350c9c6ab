"""Pure occurrence computations shared by invitations and the calendar."""

from club.domain.schedule.calendar import CalendarContext, aggregate
from club.domain.schedule.generator import Expansion, expand, generate
from club.domain.schedule.next_occurrence import next_occurrence

__all__ = [
    "CalendarContext",
    "Expansion",
    "aggregate",
    "expand",
    "generate",
    "next_occurrence",
]
