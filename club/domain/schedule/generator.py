"""Occurrence generation for recurring events."""

from dataclasses import dataclass
from datetime import date

import logfire

from club.domain.error import InvalidWindowError
from club.domain.model.recurrence import RecurrenceRule
from club.domain.schedule.cadence import (
    MAX_STEPS,
    first_index_on_or_after,
    nth_occurrence,
    validate_rule,
)


@dataclass(frozen=True)
class Expansion:
    """Result of expanding a rule over a window.

    Attributes:
        dates: Occurrence dates, strictly ascending
        truncated: True when the iteration cap stopped expansion while
            candidates inside the window remained
    """

    dates: tuple[date, ...]
    truncated: bool = False


def expand(
    rule: RecurrenceRule,
    window_start: date,
    window_end: date,
    max_steps: int | None = None,
) -> Expansion:
    """Expand a recurrence rule into the occurrence dates inside a window.

    Every returned date lies within [window_start, window_end], is not after
    rule.end_date and is not excluded.

    Args:
        rule: Recurrence rule to expand
        window_start: First date of the window (inclusive)
        window_end: Last date of the window (inclusive)
        max_steps: Override for the per-cadence iteration cap

    Returns:
        Expansion with the dates and whether the cap was hit

    Raises:
        InvalidWindowError: If window_start is after window_end
        InvalidRuleError: If the rule has no start date or does not repeat
    """
    if window_start > window_end:
        raise InvalidWindowError(window_start, window_end)
    validate_rule(rule)

    cap = max_steps if max_steps is not None else MAX_STEPS[rule.repeat_type]
    last_valid = window_end if rule.end_date is None else min(window_end, rule.end_date)

    dates: list[date] = []
    index = first_index_on_or_after(rule, window_start)
    cursor = nth_occurrence(rule, index)
    steps = 0
    while cursor is not None and cursor <= last_valid:
        if steps >= cap:
            return Expansion(dates=tuple(dates), truncated=True)
        if not rule.is_excluded(cursor):
            dates.append(cursor)
        index += 1
        steps += 1
        cursor = nth_occurrence(rule, index)

    return Expansion(dates=tuple(dates))


def generate(
    rule: RecurrenceRule, window_start: date, window_end: date
) -> list[date]:
    """Occurrence dates of a rule inside a window, strictly ascending.

    Logs a warning when the iteration cap truncated the result.

    Raises:
        InvalidWindowError: If window_start is after window_end
        InvalidRuleError: If the rule cannot be expanded
    """
    expansion = expand(rule, window_start, window_end)
    if expansion.truncated:
        logfire.warn(
            "Occurrence expansion hit iteration cap",
            repeat_type=rule.repeat_type.value,
            start_date=str(rule.start_date),
            window_start=str(window_start),
            window_end=str(window_end),
            emitted=len(expansion.dates),
        )
    return list(expansion.dates)
