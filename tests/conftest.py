"""Test configuration and fixtures."""

from datetime import date, time
from uuid import uuid4

import logfire
import pytest

from club.domain.model import Event, RecurrenceRule
from club.domain.value import (
    ClubId,
    EventCategory,
    EventId,
    LeadTimeUnit,
    RepeatType,
    SubgroupId,
)

# Keep spans in-process; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


def make_rule(
    start_date: date | None,
    repeat_type: RepeatType = RepeatType.WEEKLY,
    end_date: date | None = None,
    excluded_dates: set[date] | None = None,
) -> RecurrenceRule:
    """Helper to build a recurrence rule."""
    return RecurrenceRule(
        start_date=start_date,
        repeat_type=repeat_type,
        end_date=end_date,
        excluded_dates=frozenset(excluded_dates or ()),
    )


def make_event(
    rule: RecurrenceRule,
    club_id: ClubId | None = None,
    title: str = "Training",
    category: EventCategory = EventCategory.TRAINING,
    target_subgroup_ids: tuple[SubgroupId, ...] = (),
    cancelled: bool = False,
    lead_time_value: int | None = None,
    lead_time_unit: LeadTimeUnit | None = None,
    start_time: time | None = time(18, 0),
) -> Event:
    """Helper to build an event around a rule."""
    return Event(
        id=EventId(uuid4()),
        club_id=club_id or ClubId(uuid4()),
        title=title,
        start_time=start_time,
        end_time=time(19, 30) if start_time else None,
        category=category,
        target_subgroup_ids=target_subgroup_ids,
        cancelled=cancelled,
        lead_time_value=lead_time_value,
        lead_time_unit=lead_time_unit,
        rule=rule,
    )


@pytest.fixture
def club_id() -> ClubId:
    return ClubId(uuid4())
