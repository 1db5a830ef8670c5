"""Pytest configuration and shared fixtures."""

import itertools

import pytest

from recipebook.schemas import MealPlanItem, Recipe

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "cli: marks tests that run the command line entry point")


# =============================================================================
# Meal Plan Fixtures
# =============================================================================


@pytest.fixture
def make_recipe():
    """Factory for recipes with a given ingredients text."""

    def _make(recipe_id: str, ingredients: str, title: str | None = None) -> Recipe:
        return Recipe(id=recipe_id, title=title or recipe_id, ingredients=ingredients)

    return _make


@pytest.fixture
def make_plan_item():
    """Factory for plan items; ids are generated per call."""
    counter = itertools.count(1)

    def _make(recipe_id: str, day: str = "2026-01-12", meal_slot: int = 2) -> MealPlanItem:
        return MealPlanItem(
            id=f"p{next(counter)}",
            household_id="h1",
            day=day,
            meal_slot=meal_slot,
            recipe_id=recipe_id,
            status="planned",
        )

    return _make


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: item-1, item-2, ..."""
    counter = itertools.count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture
def noodle_week(make_recipe, make_plan_item):
    """Two recipes on two days sharing noodles."""
    recipes = {
        "A": make_recipe("A", "200 g Nudeln\n1 x Tomaten"),
        "B": make_recipe("B", "100 g Nudeln"),
    }
    plan = [
        make_plan_item("A", day="2026-01-12"),
        make_plan_item("B", day="2026-01-13"),
    ]
    return plan, recipes


@pytest.fixture
def week_export():
    """JSON-style export document as produced by the app."""
    return {
        "plan": [
            {"id": "p1", "household_id": "h1", "day": "2026-01-12", "meal_slot": 2, "recipe_id": "r1", "status": "planned"},
            {"id": "p2", "household_id": "h1", "day": "2026-01-14", "meal_slot": 1, "recipe_id": "r2", "status": "cooked"},
            {"id": "p3", "household_id": "h1", "day": "2026-01-20", "meal_slot": 2, "recipe_id": "r2", "status": "planned"},
        ],
        "recipes": [
            {"id": "r1", "title": "Pasta", "ingredients": "200 g Nudeln\n1 l Milch", "tags": ["schnell"]},
            {"id": "r2", "title": "Auflauf", "ingredients": "100 g Nudeln\n500 ml Milch", "photo_path": None},
        ],
    }
