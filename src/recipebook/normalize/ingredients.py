"""Ingredient line parsing and name normalization."""

import math
import re
import unicodedata
from dataclasses import dataclass

# =============================================================================
# Patterns
# =============================================================================

# Leading quantity, optional multiplier, optional short unit, rest is the name.
#   "250 g Nudeln" -> 250, "g", "Nudeln"
#   "1,5 l Milch"  -> 1.5, "l", "Milch"
#   "2 x Eier"     -> 2, "eier", "" (the name then falls back to the raw line)
# The unit is any run of at most 6 letters, not a fixed vocabulary, so short
# words directly after the number are taken as units too.
# [^\W\d_] is "letters only" and covers umlauts, ß and other accented letters.
INGREDIENT_LINE_PATTERN = re.compile(
    r"^\s*(\d+(?:[.,]\d+)?)\s*(?:x|×)?\s*([^\W\d_]{1,6})?\s*(.*)$"
)

PARENTHESIZED_PATTERN = re.compile(r"\([^)]*\)")

# Anything that is not a letter, digit or space. \w also admits "_", so it is
# listed explicitly.
NON_NAME_CHARS_PATTERN = re.compile(r"[^\w ]|_")


@dataclass
class IngredientLine:
    """Structured form of one free-text ingredient line."""

    qty: float | None
    unit: str | None
    name: str
    raw: str


# =============================================================================
# Parsing Functions
# =============================================================================


def parse_ingredient_line(line: str) -> IngredientLine | None:
    """
    Parse a single ingredient line into quantity, unit and name.

    Handles formats like:
    - "250 g Nudeln"
    - "1,5 l Milch" (comma as decimal separator)
    - "0.5 l Sahne"
    - "Salz & Pfeffer" (no quantity, the whole line becomes the name)

    Returns:
        IngredientLine, or None for blank lines.
    """
    raw = line.strip()
    if not raw:
        return None

    match = INGREDIENT_LINE_PATTERN.match(raw)
    if not match:
        return IngredientLine(qty=None, unit=None, name=raw, raw=raw)

    qty = float(match.group(1).replace(",", "."))
    unit = match.group(2).lower() if match.group(2) else None
    name = (match.group(3) or "").strip() or raw

    return IngredientLine(
        qty=qty if math.isfinite(qty) else None,
        unit=unit,
        name=name,
        raw=raw,
    )


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name into the shopping list dedup key.

    - Lowercase
    - Drop parenthesized notes such as "(optional)"
    - Replace punctuation and symbols with spaces
    - Collapse whitespace
    """
    if not name:
        return ""

    name = name.lower()
    name = PARENTHESIZED_PATTERN.sub("", name)
    name = NON_NAME_CHARS_PATTERN.sub(" ", name)

    return " ".join(name.split())


def format_quantity(qty: float) -> str:
    """Format a summed quantity for display ("300", "1.5")."""
    if qty.is_integer():
        return str(int(qty))
    return repr(qty)


def collation_key(text: str) -> tuple[str, str]:
    """
    Sort key that orders accented letters next to their base letter.

    "äpfel" sorts between "apfel" and "birnen" instead of after "z".
    """
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return folded, text
