"""Shopping list generation from meal plans."""

import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from pydantic import ValidationError

from recipebook.config import get_settings
from recipebook.ids import make_id
from recipebook.logging_config import LoggingContext, get_logger
from recipebook.normalize.ingredients import (
    IngredientLine,
    collation_key,
    format_quantity,
    normalize_ingredient_name,
    parse_ingredient_line,
)
from recipebook.schemas import MealPlanItem, Recipe, ShoppingItem

logger = get_logger(__name__)

# Separators used when quantities for the same ingredient cannot be summed
FIRST_VARIANT_SEPARATOR = " / "
FURTHER_VARIANT_SEPARATOR = "; "


@dataclass
class _PlannedLine:
    recipe_id: str
    line: str


# =============================================================================
# Input Coercion
# =============================================================================


def _coerce_plan_item(item: MealPlanItem | Mapping[str, Any]) -> MealPlanItem | None:
    if isinstance(item, MealPlanItem):
        return item
    try:
        return MealPlanItem.model_validate(item)
    except ValidationError as e:
        logger.warning(f"Skipping invalid meal plan item: {e.error_count()} validation error(s)")
        return None


def _coerce_recipe(recipe: Recipe | Mapping[str, Any]) -> Recipe | None:
    if isinstance(recipe, Recipe):
        return recipe
    try:
        return Recipe.model_validate(recipe)
    except ValidationError as e:
        logger.warning(f"Skipping invalid recipe: {e.error_count()} validation error(s)")
        return None


def _expand_plan(
    plan: Iterable[MealPlanItem | Mapping[str, Any]],
    recipes_by_id: Mapping[str, Recipe | Mapping[str, Any]],
) -> list[_PlannedLine]:
    """Collect the ingredient lines of every planned recipe, once per assignment."""
    lines: list[_PlannedLine] = []

    for entry in plan:
        item = _coerce_plan_item(entry)
        if item is None:
            continue

        raw_recipe = recipes_by_id.get(item.recipe_id)
        if raw_recipe is None:
            # Recipe may have been deleted after it was planned
            logger.debug(f"Recipe {item.recipe_id} not found, skipping plan item")
            continue

        recipe = _coerce_recipe(raw_recipe)
        if recipe is None:
            continue

        lines.extend(_PlannedLine(recipe.id, line) for line in recipe.ingredient_lines())

    return lines


# =============================================================================
# Merging
# =============================================================================


def _same_unit(a: str | None, b: str | None) -> bool:
    return (a or "") == (b or "")


def _merge_into(
    existing: ShoppingItem,
    parsed: IngredientLine,
    recipe_id: str,
    has_variants: bool,
) -> bool:
    """
    Merge a further occurrence of an ingredient into its shopping item.

    Returns:
        True if the item's text now lists more than one variant.
    """
    if recipe_id not in existing.source_recipe_ids:
        existing.source_recipe_ids.append(recipe_id)

    if existing.qty is not None and parsed.qty is not None and _same_unit(existing.unit, parsed.unit):
        existing.qty = existing.qty + parsed.qty
        text = f"{format_quantity(existing.qty)} {existing.unit or ''} {parsed.name}"
        # The rewritten text is a single line again
        existing.text = " ".join(text.split())
        return False

    # Units differ or a quantity is missing: keep every original line
    separator = FURTHER_VARIANT_SEPARATOR if has_variants else FIRST_VARIANT_SEPARATOR
    existing.text = f"{existing.text}{separator}{parsed.raw}"
    return True


def sort_shopping_items(items: Iterable[ShoppingItem]) -> list[ShoppingItem]:
    """Order items unchecked first, then alphabetically by normalized name."""
    return sorted(items, key=lambda item: (item.checked, collation_key(item.norm)))


def build_shopping_list_from_plan(
    plan: Iterable[MealPlanItem | Mapping[str, Any]],
    recipes_by_id: Mapping[str, Recipe | Mapping[str, Any]],
    *,
    id_factory: Callable[[], str] | None = None,
) -> list[ShoppingItem]:
    """
    Build a deduplicated shopping list from a week's meal plan.

    Every ingredient line of every planned recipe is parsed and merged by its
    normalized name. Quantities with the same unit are summed; otherwise the
    original lines are kept side by side in the item's text.

    Args:
        plan: Meal plan items (models or mappings with at least ``recipe_id``).
        recipes_by_id: Recipe lookup keyed by recipe id.
        id_factory: Callable producing new item ids. Defaults to ``make_id``
            with the configured prefix.

    Returns:
        Fresh, unchecked ShoppingItems sorted by normalized name.
    """
    if id_factory is None:
        id_factory = partial(make_id, get_settings().shopping_item_id_prefix)

    with LoggingContext(rebuild_id=uuid.uuid4().hex):
        planned_lines = _expand_plan(plan, recipes_by_id)

        by_norm: dict[str, ShoppingItem] = {}
        with_variants: set[str] = set()

        for entry in planned_lines:
            parsed = parse_ingredient_line(entry.line)
            if parsed is None:
                continue

            norm = normalize_ingredient_name(parsed.name)
            if not norm:
                logger.debug(f"Dropping ingredient line without a usable name: {entry.line!r}")
                continue

            existing = by_norm.get(norm)
            if existing is None:
                by_norm[norm] = ShoppingItem(
                    id=id_factory(),
                    text=parsed.raw,
                    norm=norm,
                    qty=parsed.qty,
                    unit=parsed.unit,
                    checked=False,
                    source_recipe_ids=[entry.recipe_id],
                )
                continue

            if _merge_into(existing, parsed, entry.recipe_id, norm in with_variants):
                with_variants.add(norm)
            else:
                with_variants.discard(norm)

        items = sort_shopping_items(by_norm.values())

        logger.info(
            f"Built shopping list: {len(planned_lines)} ingredient lines, {len(items)} items",
            extra={"extra_data": {"ingredient_lines": len(planned_lines), "items": len(items)}},
        )

    return items


# =============================================================================
# List Operations
# =============================================================================


def toggle_item(items: Iterable[ShoppingItem], item_id: str) -> list[ShoppingItem]:
    """Return a copy of the list with the given item's checked flag flipped."""
    return [
        item.model_copy(update={"checked": not item.checked}) if item.id == item_id else item
        for item in items
    ]


def clear_checked(items: Iterable[ShoppingItem]) -> list[ShoppingItem]:
    """Return the list without checked items."""
    return [item for item in items if not item.checked]


def carry_over_checked(
    previous: Iterable[ShoppingItem],
    rebuilt: Iterable[ShoppingItem],
) -> list[ShoppingItem]:
    """
    Keep items ticked across a rebuild.

    Rebuilt items whose normalized name was checked in the previous list are
    marked checked; the result is re-sorted so they move to the end.
    """
    checked_norms = {item.norm for item in previous if item.checked}

    merged = [
        item.model_copy(update={"checked": True}) if item.norm in checked_norms else item
        for item in rebuilt
    ]
    return sort_shopping_items(merged)
