"""
Build a shopping list from an exported meal plan.

Reads a JSON document of the form::

    {"plan": [{"day": "2026-01-12", "recipe_id": "r1"}, ...],
     "recipes": [{"id": "r1", "ingredients": "200 g Nudeln\\n..."}, ...]}

and prints the aggregated shopping list as JSON.

Run with: recipebook-shopping-list plan.json --week 2026-01-12
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from recipebook.config import get_settings
from recipebook.logging_config import LoggingContext, configure_logging, get_logger
from recipebook.plan.shopping_list import build_shopping_list_from_plan
from recipebook.plan.week import parse_enabled_slots, plan_items_for_week
from recipebook.schemas import MealPlanItem

logger = get_logger(__name__)


def _load_export(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object with 'plan' and 'recipes'")
    return data


def build_from_export(
    data: dict[str, Any],
    week: date | None = None,
    slots: list[int] | None = None,
) -> list[dict[str, Any]]:
    """Aggregate an export document into JSON-ready shopping items."""
    recipes_by_id = {
        str(r["id"]): r for r in data.get("recipes", []) if isinstance(r, dict) and "id" in r
    }
    plan: list[Any] = list(data.get("plan", []))

    if week is not None:
        valid = []
        for entry in plan:
            try:
                valid.append(MealPlanItem.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping invalid meal plan item: {e.error_count()} validation error(s)")
        plan = plan_items_for_week(
            valid,
            week,
            enabled_slots=slots,
            week_starts_on_monday=get_settings().week_starts_on_monday,
        )

    items = build_shopping_list_from_plan(plan, recipes_by_id)
    return [item.model_dump(by_alias=True) for item in items]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build a shopping list from a meal plan export")
    parser.add_argument("input", type=Path, help="JSON file with 'plan' and 'recipes'")
    parser.add_argument(
        "--week", "-w", type=date.fromisoformat, help="Only use the week containing this day"
    )
    parser.add_argument(
        "--slots", "-s", type=str, help="Meal slots to include as JSON list, e.g. [0,2]"
    )
    parser.add_argument("--household", type=str, help="Household id for log context")
    parser.add_argument("--log-level", type=str, default=None, help="Override LOG_LEVEL")

    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level or get_settings().log_level)

    try:
        data = _load_export(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {args.input}: {e}")
        return 1

    slots = parse_enabled_slots(args.slots) if args.slots else None

    with LoggingContext(household_id=args.household):
        items = build_from_export(data, week=args.week, slots=slots)

    json.dump(items, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
