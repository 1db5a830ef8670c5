"""Pydantic schemas for meal-plan input and shopping-list output."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _identifier(v: Any) -> Any:
    """Accept numeric ids from JSON exports."""
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class MealPlanItem(BaseModel):
    """
    One recipe assigned to a day (and meal slot) of the plan.

    Only ``recipe_id`` decides whether an item is usable. The other fields
    are descriptive: values of an unexpected type are blanked instead of
    rejecting the item.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    household_id: str | None = None
    day: str | None = Field(None, description="ISO day, YYYY-MM-DD")
    meal_slot: int | None = Field(2, description="0=Frühstück, 1=Mittag, 2=Abend, 3=Snack")
    recipe_id: str
    status: Any = Field("planned", description="planned, prepped or cooked")

    @field_validator("recipe_id", mode="before")
    @classmethod
    def coerce_recipe_id(cls, v: Any) -> Any:
        return _identifier(v)

    @field_validator("id", "household_id", mode="before")
    @classmethod
    def coerce_optional_identifier(cls, v: Any) -> str | None:
        if v is None:
            return None
        return str(v)

    @field_validator("day", mode="before")
    @classmethod
    def coerce_day(cls, v: Any) -> str | None:
        """Store dates as ISO day strings; anything else is no day."""
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        if isinstance(v, str):
            return v
        return None

    @field_validator("meal_slot", mode="before")
    @classmethod
    def coerce_meal_slot(cls, v: Any) -> int | None:
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return None


class Recipe(BaseModel):
    """Recipe with a free-text, one-ingredient-per-line ingredients field."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: Any = None
    ingredients: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        return _identifier(v)

    @field_validator("ingredients", mode="before")
    @classmethod
    def default_ingredients(cls, v: Any) -> str:
        """Treat missing ingredients as an empty text."""
        if v is None:
            return ""
        return v

    def ingredient_lines(self) -> list[str]:
        """Trimmed, non-blank lines of the ingredients text."""
        lines = (line.strip() for line in self.ingredients.splitlines())
        return [line for line in lines if line]


class ShoppingItem(BaseModel):
    """A single deduplicated, display-ready shopping list entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    norm: str
    qty: float | None = None
    unit: str | None = None
    checked: bool = False
    source_recipe_ids: list[str] = Field(default_factory=list, alias="sourceRecipeIds")
