"""Calendar projection of club events.

Expands recurring and single events into per-day buckets for display. Pure:
reads nothing and writes nothing beyond its arguments.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

import logfire

from club.domain.error import InvalidRuleError, InvalidWindowError
from club.domain.model import Event, OccurrenceSummary, Subgroup
from club.domain.model.common import DomainModel
from club.domain.schedule.generator import generate
from club.domain.value import EventCategory, HexColor, SubgroupId

CATEGORY_COLORS: dict[EventCategory, HexColor] = {
    EventCategory.TRAINING: HexColor("#10b981"),
    EventCategory.COMPETITION: HexColor("#ef4444"),
    EventCategory.MEETING: HexColor("#f59e0b"),
    EventCategory.OTHER: HexColor("#8b5cf6"),
}


class CalendarContext(DomainModel):
    """Lookups needed to render a calendar, built once per request."""

    subgroups: dict[SubgroupId, Subgroup] = {}

    @classmethod
    def from_subgroups(cls, subgroups: Iterable[Subgroup]) -> "CalendarContext":
        return cls(subgroups={subgroup.id: subgroup for subgroup in subgroups})

    def group_key(self, event: Event) -> HexColor:
        """Colour of the event's first known subgroup, else of its category."""
        for subgroup_id in event.target_subgroup_ids:
            subgroup = self.subgroups.get(subgroup_id)
            if subgroup:
                return subgroup.color
        return CATEGORY_COLORS[event.category]

    def subgroup_names(self, event: Event) -> tuple[str, ...]:
        return tuple(
            self.subgroups[subgroup_id].name
            for subgroup_id in event.target_subgroup_ids
            if subgroup_id in self.subgroups
        )


def summarize(event: Event, day: date, context: CalendarContext) -> OccurrenceSummary:
    """Build the display summary of one occurrence."""
    return OccurrenceSummary(
        event_id=event.id,
        occurrence_date=day,
        title=event.title,
        start_time=event.start_time,
        end_time=event.end_time,
        location=event.location,
        category=event.category,
        group_key=context.group_key(event),
        subgroup_names=context.subgroup_names(event),
        is_recurring=event.is_recurring,
    )


def aggregate(
    recurring_events: Iterable[Event],
    single_events: Iterable[Event],
    window_start: date,
    window_end: date,
    context: CalendarContext | None = None,
) -> dict[date, list[OccurrenceSummary]]:
    """Bucket every occurrence inside a window by date.

    Same-day occurrences are all kept, in input order; callers sort and limit
    for display. Cancelled events are skipped. An event whose rule cannot be
    expanded is skipped with a warning and does not affect the others.

    Args:
        recurring_events: Events with a repeating rule
        single_events: One-off events
        window_start: First displayed date (inclusive)
        window_end: Last displayed date (inclusive)
        context: Request-scoped lookups; empty when omitted

    Returns:
        Mapping of date to occurrence summaries, keys ascending

    Raises:
        InvalidWindowError: If window_start is after window_end
    """
    if window_start > window_end:
        raise InvalidWindowError(window_start, window_end)
    context = context or CalendarContext()

    buckets: dict[date, list[OccurrenceSummary]] = defaultdict(list)
    skipped = 0

    for event in recurring_events:
        if event.cancelled:
            continue
        try:
            dates = generate(event.rule, window_start, window_end)
        except InvalidRuleError as e:
            skipped += 1
            logfire.warn(
                "Skipping event with invalid recurrence rule",
                event_id=str(event.id),
                error=str(e),
            )
            continue
        for day in dates:
            buckets[day].append(summarize(event, day, context))

    for event in single_events:
        if event.cancelled:
            continue
        day = event.rule.start_date
        if day is None:
            skipped += 1
            logfire.warn("Skipping single event without date", event_id=str(event.id))
            continue
        if window_start <= day <= window_end:
            buckets[day].append(summarize(event, day, context))

    if skipped:
        logfire.info(
            "Calendar aggregated with skipped events",
            window_start=str(window_start),
            window_end=str(window_end),
            skipped=skipped,
        )

    return {day: buckets[day] for day in sorted(buckets)}
