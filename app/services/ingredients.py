"""
FitTrack API - Ingredient Line Parser.

Turns free-text recipe lines such as ``"2 cups basmati rice"`` or
``"1 1/2 tbsp olive oil"`` into a structured (food, quantity, measure)
triple. Parsing is best-effort and never raises: anything it cannot
read becomes a quantity of 1 measured in ``"unit"``.
"""

import re
from dataclasses import dataclass
from fractions import Fraction


DEFAULT_QUANTITY = 1.0
DEFAULT_MEASURE = "unit"

# Spelling found in recipe text -> canonical measure keyword
UNIT_ALIASES = {
    "cups": "cup",
    "cup": "cup",
    "tbsp": "tbsp",
    "tsp": "tsp",
    "oz": "oz",
    "lbs": "lb",
    "lb": "lb",
    "grams": "g",
    "gram": "g",
    "g": "g",
    "kg": "kg",
    "ml": "ml",
    "l": "l",
    "pieces": "piece",
    "piece": "piece",
    "cloves": "clove",
    "clove": "clove",
    "whole": "whole",
    "large": "large",
    "medium": "medium",
    "small": "small",
    "scoops": "scoop",
    "scoop": "scoop",
    "pao": "pao",
    "ratti": "ratti",
    "tola": "tola",
}

_QUANTITY_PATTERN = re.compile(
    r"^\s*(?P<qty>\d+\s+\d+\s*/\s*\d+|\d+\s*/\s*\d+|\d+(?:\.\d+)?)"
)

# Longest spellings first so "cups" wins over "cup" and "lbs" over "l".
_UNIT_PATTERN = re.compile(
    r"\d+(?:\.\d+)?\s*(?P<unit>"
    + "|".join(sorted(UNIT_ALIASES, key=len, reverse=True))
    + r")\b\.?",
    re.IGNORECASE,
)

_EMPTY_PARENS = re.compile(r"\(\s*\)")


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured view of one ingredient line."""

    food: str
    quantity: float
    measure: str


def parse_quantity(token: str) -> float:
    """
    Read an integer, decimal, fraction (``1/2``) or mixed number (``1 1/2``).

    Returns ``DEFAULT_QUANTITY`` for zero, negative or unreadable values.
    """
    token = " ".join(token.split())
    try:
        if "/" in token:
            whole = Fraction(0)
            if " " in token.split("/")[0].strip():
                whole_part, token = token.split(" ", 1)
                whole = Fraction(int(whole_part))
            numerator, denominator = (int(part) for part in token.replace(" ", "").split("/"))
            value = float(whole + Fraction(numerator, denominator))
        else:
            value = float(token)
    except (ValueError, ZeroDivisionError):
        return DEFAULT_QUANTITY

    if value <= 0:
        return DEFAULT_QUANTITY
    return value


def _clean_food(text: str) -> str:
    text = _EMPTY_PARENS.sub("", text)
    return " ".join(text.split()).strip(" ,;-")


def parse_ingredient_line(line: str) -> ParsedIngredient:
    """
    Parse a free-text ingredient line.

    Args:
        line: Raw ingredient text, e.g. ``"3 cloves garlic, minced"``.

    Returns:
        ParsedIngredient: Food name, quantity and lower-case measure.
    """
    text = (line or "").strip()

    qty_match = _QUANTITY_PATTERN.match(text)
    if not qty_match:
        return ParsedIngredient(food=text, quantity=DEFAULT_QUANTITY, measure=DEFAULT_MEASURE)

    quantity = parse_quantity(qty_match.group("qty"))
    remainder = text[qty_match.end():]
    measure = DEFAULT_MEASURE

    # First unit after any number, starting at the quantity itself
    unit_match = _UNIT_PATTERN.search(text, qty_match.end() - 1)
    if unit_match:
        measure = UNIT_ALIASES[unit_match.group("unit").lower()]
        if unit_match.start() < qty_match.end():
            remainder = text[unit_match.end():]
        else:
            remainder = text[qty_match.end():unit_match.start()] + " " + text[unit_match.end():]

    food = _clean_food(remainder) or text
    return ParsedIngredient(food=food, quantity=quantity, measure=measure)
