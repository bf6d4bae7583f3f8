"""FitTrack API - Services Package."""

from .gemini import gemini_service, GeminiService, GeminiNotConfiguredError
from .ingredients import ParsedIngredient, parse_ingredient_line
from .grocery_categories import CategoryTable, categorize_ingredient, get_category_table
from .shopping_list import ShoppingListEntry, build_shopping_list

__all__ = [
    "gemini_service",
    "GeminiService",
    "GeminiNotConfiguredError",
    "ParsedIngredient",
    "parse_ingredient_line",
    "CategoryTable",
    "categorize_ingredient",
    "get_category_table",
    "ShoppingListEntry",
    "build_shopping_list",
]
