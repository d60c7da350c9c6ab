"""Cadence arithmetic shared by every occurrence computation.

Occurrence n of a rule is computed directly from the rule's start date
(start + n steps) rather than by repeatedly mutating a cursor, so monthly
rules never drift after a clamped month.

Month overflow policy: clamp. A monthly rule starting on the 31st occurs on
the last day of shorter months (Jan 31, Feb 29, Mar 31, Apr 30, ...).
"""

import calendar
from datetime import date, timedelta
from typing import assert_never

from club.domain.error import InvalidRuleError
from club.domain.model.recurrence import RecurrenceRule
from club.domain.value import RepeatType

# Upper bound on loop iterations per expansion, counted from the first
# candidate inside the window
MAX_STEPS: dict[RepeatType, int] = {
    RepeatType.DAILY: 366,
    RepeatType.WEEKLY: 260,
    RepeatType.BIWEEKLY: 130,
    RepeatType.MONTHLY: 120,
}

# Upper bound on steps scanned by next-occurrence lookups
MAX_LOOKUP_STEPS = 365


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(start: date, months: int) -> date:
    """Add whole calendar months, clamping the day to the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, last_day_of_month(year, month))
    return date(year, month, day)


def validate_rule(rule: RecurrenceRule) -> date:
    """Check that a rule can be expanded and return its start date.

    Raises:
        InvalidRuleError: If the start date is missing or the rule is not recurring
    """
    if rule.start_date is None:
        raise InvalidRuleError("Recurrence rule has no start date")
    if rule.repeat_type not in MAX_STEPS:
        raise InvalidRuleError(
            f"Repeat type '{rule.repeat_type.value}' is not a recurring cadence"
        )
    return rule.start_date


def _fixed_step_days(repeat_type: RepeatType) -> int | None:
    """Step size in days, or None for calendar-month cadences."""
    if repeat_type == RepeatType.DAILY:
        return 1
    elif repeat_type == RepeatType.WEEKLY:
        return 7
    elif repeat_type == RepeatType.BIWEEKLY:
        return 14
    elif repeat_type == RepeatType.MONTHLY:
        return None
    elif repeat_type == RepeatType.NONE:
        raise InvalidRuleError("Single events have no cadence")
    else:
        assert_never(repeat_type)


def nth_occurrence(rule: RecurrenceRule, n: int) -> date | None:
    """Candidate date of the n-th step (n=0 is the start date).

    Returns None when the candidate lies beyond date.max; the series ends
    there.
    """
    start = validate_rule(rule)
    step = _fixed_step_days(rule.repeat_type)
    if step is None:
        if (start.year - 1) * 12 + start.month - 1 + n >= date.max.year * 12:
            return None
        return add_months(start, n)
    if n * step > (date.max - start).days:
        return None
    return start + timedelta(days=n * step)


def first_index_on_or_after(rule: RecurrenceRule, target: date) -> int:
    """Smallest step index whose candidate date is on or after target.

    Equivalent to stepping a cursor forward from the start date until it
    reaches target, without the loop.
    """
    start = validate_rule(rule)
    if target <= start:
        return 0

    step = _fixed_step_days(rule.repeat_type)
    if step is None:
        index = (target.year - start.year) * 12 + (target.month - start.month)
        # A clamped day can land before target within the same month
        if add_months(start, index) < target:
            index += 1
        return index

    return -(-(target - start).days // step)
