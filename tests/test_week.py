"""Unit tests for week ranges, meal slots and weekly plan selection."""

from datetime import date

import pytest

from recipebook.plan.week import (
    DEFAULT_SLOTS,
    parse_enabled_slots,
    plan_items_for_week,
    serialize_enabled_slots,
    start_of_week,
    to_iso_day,
    week_range,
)


class TestStartOfWeek:
    """Tests for start_of_week function."""

    @pytest.mark.parametrize(
        "day,expected",
        [
            (date(2026, 1, 12), date(2026, 1, 12)),  # Monday
            (date(2026, 1, 14), date(2026, 1, 12)),  # Wednesday
            (date(2026, 1, 18), date(2026, 1, 12)),  # Sunday
        ],
    )
    def test_monday_start(self, day, expected):
        """Test Monday-based weeks."""
        assert start_of_week(day) == expected

    def test_sunday_start(self):
        """Test Sunday-based weeks."""
        assert start_of_week(date(2026, 1, 14), week_starts_on_monday=False) == date(2026, 1, 11)
        assert start_of_week(date(2026, 1, 11), week_starts_on_monday=False) == date(2026, 1, 11)


class TestWeekRange:
    """Tests for week_range function."""

    def test_seven_days(self):
        """Test the days of a mid-January week."""
        week = week_range(date(2026, 1, 14))
        assert week.start == "2026-01-12"
        assert week.end == "2026-01-18"
        assert len(week.days) == 7
        assert "2026-01-15" in week

    def test_year_boundary(self):
        """Test a week spanning New Year."""
        week = week_range(date(2026, 1, 1))
        assert week.start == "2025-12-29"
        assert week.end == "2026-01-04"

    def test_iso_day(self):
        """Test ISO day formatting."""
        assert to_iso_day(date(2026, 3, 5)) == "2026-03-05"


class TestParseEnabledSlots:
    """Tests for parse_enabled_slots function."""

    @pytest.mark.parametrize("raw", [None, "", [], "not json", "{}", "[9]", "5"])
    def test_falls_back_to_default(self, raw):
        """Test unusable values."""
        assert parse_enabled_slots(raw) == DEFAULT_SLOTS

    def test_list(self):
        """Test a list with invalid entries."""
        assert parse_enabled_slots([0, 7, "x", True, 3]) == [0, 3]

    def test_json_string(self):
        """Test a JSON string from storage."""
        assert parse_enabled_slots("[1, 3]") == [1, 3]

    def test_serialize(self):
        """Test that serialized slots parse back."""
        assert parse_enabled_slots(serialize_enabled_slots([0, 2])) == [0, 2]

    def test_default_is_not_shared(self):
        """Test that callers cannot mutate the default."""
        slots = parse_enabled_slots(None)
        slots.append(0)
        assert DEFAULT_SLOTS == [2]


class TestPlanItemsForWeek:
    """Tests for plan_items_for_week function."""

    def test_selects_week(self, make_plan_item):
        """Test that only days of the anchor's week are kept."""
        plan = [
            make_plan_item("A", day="2026-01-11"),
            make_plan_item("B", day="2026-01-12"),
            make_plan_item("C", day="2026-01-18"),
            make_plan_item("D", day="2026-01-19"),
        ]

        result = plan_items_for_week(plan, date(2026, 1, 14))

        assert [p.recipe_id for p in result] == ["B", "C"]

    def test_filters_slots(self, make_plan_item):
        """Test the enabled slot filter."""
        plan = [
            make_plan_item("A", meal_slot=0),
            make_plan_item("B", meal_slot=2),
            make_plan_item("C", meal_slot=3),
        ]

        result = plan_items_for_week(plan, date(2026, 1, 12), enabled_slots=[0, 2])

        assert [p.recipe_id for p in result] == ["A", "B"]

    def test_missing_day_is_excluded(self, make_plan_item):
        """Test items without a day."""
        item = make_plan_item("A").model_copy(update={"day": None})

        assert plan_items_for_week([item], date(2026, 1, 12)) == []
