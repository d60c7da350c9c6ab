"""Next-occurrence lookup for recurring events."""

from datetime import date

from club.domain.model.recurrence import RecurrenceRule
from club.domain.schedule.cadence import (
    MAX_LOOKUP_STEPS,
    first_index_on_or_after,
    nth_occurrence,
)


def next_occurrence(
    rule: RecurrenceRule, after: date, max_steps: int = MAX_LOOKUP_STEPS
) -> date | None:
    """Find the first valid occurrence on or after a date.

    Inclusive: if `after` is itself a valid occurrence it is returned.

    Args:
        rule: Recurrence rule
        after: Reference date
        max_steps: Number of cadence steps scanned before giving up

    Returns:
        The occurrence date, or None if the rule ended, the series runs
        past date.max, or every scanned candidate was excluded

    Raises:
        InvalidRuleError: If the rule cannot be expanded
    """
    index = first_index_on_or_after(rule, after)
    for offset in range(max_steps):
        candidate = nth_occurrence(rule, index + offset)
        if candidate is None:
            return None
        if rule.end_date is not None and candidate > rule.end_date:
            return None
        if not rule.is_excluded(candidate):
            return candidate
    return None
