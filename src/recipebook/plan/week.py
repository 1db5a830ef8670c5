"""Week ranges and meal slots for selecting the plan items of one week."""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from recipebook.logging_config import get_logger
from recipebook.schemas import MealPlanItem

logger = get_logger(__name__)


# =============================================================================
# Meal Slots
# =============================================================================

SLOT_LABELS: dict[int, str] = {
    0: "Frühstück",
    1: "Mittagessen",
    2: "Abendessen",
    3: "Snack",
}

# Just dinner by default
DEFAULT_SLOTS: list[int] = [2]


def _valid_slots(values: Iterable[Any]) -> list[int]:
    return [
        v for v in values if isinstance(v, int) and not isinstance(v, bool) and v in SLOT_LABELS
    ]


def parse_enabled_slots(raw: str | list[int] | None) -> list[int]:
    """
    Parse a household's enabled slots from storage.

    Accepts a list or its JSON string form. Invalid entries are dropped;
    anything unusable yields DEFAULT_SLOTS.
    """
    if not raw:
        return list(DEFAULT_SLOTS)

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring malformed enabled_slots value: {raw!r}")
            return list(DEFAULT_SLOTS)

    if not isinstance(raw, list):
        return list(DEFAULT_SLOTS)

    valid = _valid_slots(raw)
    return valid or list(DEFAULT_SLOTS)


def serialize_enabled_slots(slots: list[int]) -> str:
    """Serialize enabled slots to a JSON string for storage."""
    return json.dumps(slots)


# =============================================================================
# Week Ranges
# =============================================================================


@dataclass(frozen=True)
class WeekRange:
    """The seven ISO days of one calendar week."""

    start: str
    end: str
    days: tuple[str, ...]

    def __contains__(self, day: object) -> bool:
        return day in self.days


def to_iso_day(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def start_of_week(d: date, week_starts_on_monday: bool = True) -> date:
    """First day of the week containing ``d`` (Monday or Sunday)."""
    if week_starts_on_monday:
        offset = d.weekday()
    else:
        offset = (d.weekday() + 1) % 7
    return d - timedelta(days=offset)


def week_range(d: date, week_starts_on_monday: bool = True) -> WeekRange:
    start = start_of_week(d, week_starts_on_monday)
    days = tuple(to_iso_day(start + timedelta(days=i)) for i in range(7))
    return WeekRange(start=days[0], end=days[6], days=days)


def plan_items_for_week(
    plan: Iterable[MealPlanItem],
    anchor: date,
    enabled_slots: list[int] | None = None,
    week_starts_on_monday: bool = True,
) -> list[MealPlanItem]:
    """
    Select the plan items scheduled in the week containing ``anchor``.

    Args:
        plan: Meal plan items, in any order.
        anchor: Any day of the wanted week.
        enabled_slots: If given, only items in these meal slots are kept.
        week_starts_on_monday: Week boundary convention.

    Returns:
        Matching items in their original order.
    """
    week = week_range(anchor, week_starts_on_monday)
    slots = set(enabled_slots) if enabled_slots is not None else None

    selected = []
    for item in plan:
        if item.day not in week:
            continue
        if slots is not None and item.meal_slot not in slots:
            continue
        selected.append(item)

    logger.debug(f"Selected {len(selected)} plan items for week {week.start}..{week.end}")
    return selected
