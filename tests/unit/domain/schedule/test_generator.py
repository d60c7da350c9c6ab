"""Unit tests for occurrence generation."""

from datetime import date, timedelta

import pytest

from club.domain.error import InvalidRuleError, InvalidWindowError
from club.domain.schedule import expand, generate
from club.domain.value import RepeatType
from tests.conftest import make_rule


class TestGenerateCadences:
    """Tests for each repeat cadence."""

    def test_weekly_with_exclusion(self):
        """An excluded date is skipped and the series continues after it."""
        rule = make_rule(
            date(2024, 6, 3), RepeatType.WEEKLY, excluded_dates={date(2024, 6, 17)}
        )

        result = generate(rule, date(2024, 6, 3), date(2024, 7, 7))

        assert result == [
            date(2024, 6, 3),
            date(2024, 6, 10),
            date(2024, 6, 24),
            date(2024, 7, 1),
        ]

    def test_monthly_stops_at_end_date(self):
        """Occurrences after the end date are never produced."""
        rule = make_rule(
            date(2024, 1, 15), RepeatType.MONTHLY, end_date=date(2024, 3, 15)
        )

        result = generate(rule, date(2024, 1, 1), date(2024, 12, 31))

        assert result == [date(2024, 1, 15), date(2024, 2, 15), date(2024, 3, 15)]

    def test_monthly_clamps_to_last_day_without_drift(self):
        """A series on the 31st lands on each month's last day and returns to the 31st."""
        rule = make_rule(date(2024, 1, 31), RepeatType.MONTHLY)

        result = generate(rule, date(2024, 1, 1), date(2024, 4, 30))

        assert result == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    def test_monthly_clamp_in_non_leap_year(self):
        rule = make_rule(date(2023, 1, 30), RepeatType.MONTHLY)

        result = generate(rule, date(2023, 2, 1), date(2023, 3, 31))

        assert result == [date(2023, 2, 28), date(2023, 3, 30)]

    def test_biweekly_skips_alternate_weeks(self):
        rule = make_rule(date(2024, 3, 4), RepeatType.BIWEEKLY)

        result = generate(rule, date(2024, 3, 1), date(2024, 4, 30))

        assert result == [
            date(2024, 3, 4),
            date(2024, 3, 18),
            date(2024, 4, 1),
            date(2024, 4, 15),
            date(2024, 4, 29),
        ]

    def test_daily_covers_every_day(self):
        rule = make_rule(date(2024, 2, 27), RepeatType.DAILY)

        result = generate(rule, date(2024, 2, 27), date(2024, 3, 2))

        assert result == [date(2024, 2, 27) + timedelta(days=i) for i in range(5)]


class TestGenerateWindow:
    """Tests for window handling."""

    def test_fast_forwards_to_window_start(self):
        """A series that started long ago yields only in-window dates."""
        rule = make_rule(date(2020, 1, 6), RepeatType.WEEKLY)

        result = generate(rule, date(2024, 6, 1), date(2024, 6, 30))

        assert result == [
            date(2024, 6, 3),
            date(2024, 6, 10),
            date(2024, 6, 17),
            date(2024, 6, 24),
        ]

    def test_window_before_start_is_empty(self):
        rule = make_rule(date(2024, 6, 3), RepeatType.WEEKLY)

        assert generate(rule, date(2024, 5, 1), date(2024, 5, 31)) == []

    def test_window_after_end_date_is_empty(self):
        rule = make_rule(
            date(2024, 1, 1), RepeatType.DAILY, end_date=date(2024, 1, 10)
        )

        assert generate(rule, date(2024, 2, 1), date(2024, 2, 28)) == []

    def test_single_day_window_on_occurrence(self):
        rule = make_rule(date(2024, 6, 3), RepeatType.WEEKLY)

        assert generate(rule, date(2024, 6, 10), date(2024, 6, 10)) == [date(2024, 6, 10)]

    def test_excluded_start_date_is_skipped(self):
        """The start date is a candidate like any other and can be excluded."""
        rule = make_rule(
            date(2024, 6, 3), RepeatType.WEEKLY, excluded_dates={date(2024, 6, 3)}
        )

        assert generate(rule, date(2024, 6, 1), date(2024, 6, 12)) == [date(2024, 6, 10)]

    def test_reversed_window_raises(self):
        rule = make_rule(date(2024, 6, 3), RepeatType.WEEKLY)

        with pytest.raises(InvalidWindowError):
            generate(rule, date(2024, 7, 1), date(2024, 6, 1))


class TestGenerateProperties:
    """Tests for properties every expansion must have."""

    @pytest.mark.parametrize(
        "repeat_type",
        [RepeatType.DAILY, RepeatType.WEEKLY, RepeatType.BIWEEKLY, RepeatType.MONTHLY],
    )
    def test_dates_bounded_ascending_and_valid(self, repeat_type):
        """Every date is in the window, not past the end, not excluded, strictly ascending."""
        excluded = {date(2024, 3, 31), date(2024, 4, 8), date(2024, 5, 2)}
        rule = make_rule(
            date(2024, 1, 31),
            repeat_type,
            end_date=date(2024, 10, 15),
            excluded_dates=excluded,
        )
        window_start, window_end = date(2024, 3, 10), date(2024, 12, 31)

        result = generate(rule, window_start, window_end)

        assert result
        assert all(window_start <= d <= window_end for d in result)
        assert all(d <= rule.end_date for d in result)
        assert not excluded.intersection(result)
        assert all(a < b for a, b in zip(result, result[1:]))

    def test_deterministic(self):
        rule = make_rule(
            date(2024, 1, 31), RepeatType.MONTHLY, excluded_dates={date(2024, 6, 30)}
        )

        first = generate(rule, date(2024, 1, 1), date(2025, 12, 31))
        second = generate(rule, date(2024, 1, 1), date(2025, 12, 31))

        assert first == second

    def test_split_windows_match_whole_window(self):
        """Expanding two adjacent windows yields the same dates as one big window."""
        rule = make_rule(date(2024, 1, 31), RepeatType.MONTHLY)

        whole = generate(rule, date(2024, 1, 1), date(2024, 12, 31))
        split = generate(rule, date(2024, 1, 1), date(2024, 6, 15)) + generate(
            rule, date(2024, 6, 16), date(2024, 12, 31)
        )

        assert whole == split


class TestExpandCap:
    """Tests for the iteration cap."""

    def test_daily_over_two_years_is_truncated(self):
        rule = make_rule(date(2024, 1, 1), RepeatType.DAILY)

        expansion = expand(rule, date(2024, 1, 1), date(2025, 12, 31))

        assert expansion.truncated is True
        assert len(expansion.dates) == 366
        assert expansion.dates[-1] == date(2024, 12, 31)

    def test_daily_over_one_leap_year_is_complete(self):
        rule = make_rule(date(2024, 1, 1), RepeatType.DAILY)

        expansion = expand(rule, date(2024, 1, 1), date(2024, 12, 31))

        assert expansion.truncated is False
        assert len(expansion.dates) == 366

    def test_cap_counts_from_window_not_from_start(self):
        """A series that started years ago is not cut short by its past."""
        rule = make_rule(date(2010, 1, 1), RepeatType.DAILY)

        expansion = expand(rule, date(2024, 6, 1), date(2024, 6, 30))

        assert expansion.truncated is False
        assert len(expansion.dates) == 30

    def test_custom_cap(self):
        rule = make_rule(date(2024, 6, 3), RepeatType.WEEKLY)

        expansion = expand(rule, date(2024, 6, 1), date(2024, 12, 31), max_steps=3)

        assert expansion.truncated is True
        assert expansion.dates == (date(2024, 6, 3), date(2024, 6, 10), date(2024, 6, 17))

    def test_generate_returns_truncated_prefix(self):
        rule = make_rule(date(2024, 1, 1), RepeatType.DAILY)

        result = generate(rule, date(2024, 1, 1), date(2026, 1, 1))

        assert len(result) == 366


class TestInvalidRules:
    """Tests for rules that cannot be expanded."""

    def test_missing_start_date_raises(self):
        rule = make_rule(None, RepeatType.WEEKLY)

        with pytest.raises(InvalidRuleError):
            generate(rule, date(2024, 1, 1), date(2024, 1, 31))

    def test_non_recurring_rule_raises(self):
        rule = make_rule(date(2024, 1, 1), RepeatType.NONE)

        with pytest.raises(InvalidRuleError):
            generate(rule, date(2024, 1, 1), date(2024, 1, 31))


class TestEndOfCalendar:
    """Series running into the last representable date."""

    def test_weekly_stops_at_last_representable_date(self):
        rule = make_rule(date(9999, 12, 1), RepeatType.WEEKLY)

        result = generate(rule, date(9999, 12, 1), date(9999, 12, 31))

        assert result == [
            date(9999, 12, 1),
            date(9999, 12, 8),
            date(9999, 12, 15),
            date(9999, 12, 22),
            date(9999, 12, 29),
        ]

    def test_daily_includes_last_day(self):
        rule = make_rule(date(9999, 1, 1), RepeatType.DAILY)

        result = generate(rule, date(9999, 12, 29), date.max)

        assert result == [date(9999, 12, 29), date(9999, 12, 30), date(9999, 12, 31)]

    def test_monthly_clamps_then_ends(self):
        rule = make_rule(date(9999, 11, 30), RepeatType.MONTHLY)

        expansion = expand(rule, date(9999, 12, 1), date(9999, 12, 31))

        assert expansion.dates == (date(9999, 12, 30),)
        assert expansion.truncated is False
