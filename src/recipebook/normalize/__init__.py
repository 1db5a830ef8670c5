"""Parse and normalize free-text ingredient lines."""

from recipebook.normalize.ingredients import (
    IngredientLine,
    collation_key,
    format_quantity,
    normalize_ingredient_name,
    parse_ingredient_line,
)

__all__ = [
    "IngredientLine",
    "collation_key",
    "format_quantity",
    "normalize_ingredient_name",
    "parse_ingredient_line",
]
