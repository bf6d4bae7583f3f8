"""
FitTrack API - Shopping List Aggregation.

Builds a categorized shopping list from a plan's meals by parsing every
ingredient line, categorizing the food and merging duplicates.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

from app.services.grocery_categories import CategoryTable, get_category_table
from app.services.ingredients import parse_ingredient_line


logger = logging.getLogger(__name__)


@dataclass
class ShoppingListEntry:
    """Aggregated shopping list line."""

    food: str
    quantity: float
    measure: str
    category: str
    checked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _ingredients_of(meal: Any) -> List[str]:
    if isinstance(meal, dict):
        ingredients = meal.get("ingredients")
    else:
        ingredients = getattr(meal, "ingredients", None)
    return [line for line in (ingredients or []) if isinstance(line, str)]


def build_shopping_list(
    meals: Iterable[Any],
    table: Optional[CategoryTable] = None
) -> List[ShoppingListEntry]:
    """
    Aggregate the ingredients of ``meals`` into shopping list entries.

    Entries are keyed by lower-cased food name. A repeated food adds its
    quantity only when the measure matches exactly; with a different
    measure the first-seen entry is kept as-is. The result is sorted by
    category, keeping first-seen order inside a category.

    Args:
        meals: Meal documents, payloads or dicts carrying ``ingredients``.
        table: Category table; defaults to the configured one.

    Returns:
        List[ShoppingListEntry]: Entries with ``checked`` False.
    """
    table = table or get_category_table()
    entries: Dict[str, ShoppingListEntry] = {}
    dropped = 0

    for meal in meals:
        for line in _ingredients_of(meal):
            parsed = parse_ingredient_line(line)
            if not parsed.food:
                continue

            key = parsed.food.lower()
            existing = entries.get(key)
            if existing is None:
                entries[key] = ShoppingListEntry(
                    food=parsed.food,
                    quantity=parsed.quantity,
                    measure=parsed.measure,
                    category=table.categorize(parsed.food),
                )
            elif existing.measure == parsed.measure:
                existing.quantity += parsed.quantity
            else:
                dropped += 1

    if dropped:
        logger.debug(f"Skipped {dropped} ingredient lines with conflicting measures")

    return sorted(entries.values(), key=lambda entry: entry.category)
