"""Meal plan selection and shopping list aggregation."""

from recipebook.plan.shopping_list import (
    build_shopping_list_from_plan,
    carry_over_checked,
    clear_checked,
    sort_shopping_items,
    toggle_item,
)
from recipebook.plan.week import (
    DEFAULT_SLOTS,
    SLOT_LABELS,
    WeekRange,
    parse_enabled_slots,
    plan_items_for_week,
    serialize_enabled_slots,
    start_of_week,
    to_iso_day,
    week_range,
)

__all__ = [
    "DEFAULT_SLOTS",
    "SLOT_LABELS",
    "WeekRange",
    "build_shopping_list_from_plan",
    "carry_over_checked",
    "clear_checked",
    "parse_enabled_slots",
    "plan_items_for_week",
    "serialize_enabled_slots",
    "sort_shopping_items",
    "start_of_week",
    "to_iso_day",
    "toggle_item",
    "week_range",
]
