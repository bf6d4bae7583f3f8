"""
FitTrack API - Grocery Category Tables.

Keyword tables that sort a food name into a shopping-aisle category.
A table is an ordered list of ``(category, keywords)`` pairs: the first
category with a keyword contained in the (lower-cased) food name wins,
and anything unmatched lands in the table's fallback label.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

from settings import settings


@dataclass(frozen=True)
class CategoryTable:
    """Ordered keyword table with a fallback label."""

    name: str
    categories: Sequence[Tuple[str, Sequence[str]]]
    fallback: str

    def labels(self) -> FrozenSet[str]:
        """Every label this table can return."""
        return frozenset([label for label, _ in self.categories] + [self.fallback])

    def categorize(self, food: str) -> str:
        lowered = (food or "").lower()
        for label, keywords in self.categories:
            if any(keyword in lowered for keyword in keywords):
                return label
        return self.fallback


GENERIC_TABLE = CategoryTable(
    name="generic",
    categories=(
        ("Meat & Poultry", (
            "chicken", "beef", "mutton", "lamb", "turkey", "pork", "mince",
            "qeema", "liver", "bacon", "sausage", "steak", "goat",
        )),
        ("Fish & Seafood", (
            "fish", "salmon", "tuna", "cod", "tilapia", "prawn", "shrimp",
            "crab", "lobster", "sardine", "mackerel",
        )),
        ("Nuts & Seeds", (
            "almond", "walnut", "cashew", "peanut", "pistachio", "pecan",
            "hazelnut", "raisin", "chia seed", "flax", "sunflower seed",
            "pumpkin seed", "sesame", "mixed nuts",
        )),
        ("Produce", (
            "onion", "tomato", "potato", "garlic", "ginger", "spinach",
            "carrot", "cucumber", "lettuce", "bell pepper", "capsicum",
            "broccoli", "cauliflower", "cabbage", "mushroom", "zucchini",
            "eggplant", "brinjal", "okra", "green peas", "matar", "kale",
            "celery", "cilantro", "mint", "sweet corn", "radish", "beetroot",
            "pumpkin", "squash", "leek", "asparagus", "green chili",
        )),
        ("Eggs & Dairy", (
            "egg", "milk", "yogurt", "yoghurt", "curd", "cream", "cheese",
            "paneer", "butter", "ghee",
        )),
        ("Legumes", (
            "lentil", "daal", "dal", "chickpea", "bean", "chana", "moong",
            "masoor", "tofu", "edamame", "hummus",
        )),
        ("Grains", (
            "rice", "oat", "flour", "bread", "pasta", "noodle", "quinoa",
            "barley", "couscous", "roti", "naan", "tortilla", "wheat",
            "cereal", "granola", "paratha", "semolina",
        )),
        ("Fruits", (
            "apple", "banana", "orange", "mango", "berry", "berries",
            "grape", "lemon", "lime", "avocado", "pineapple", "melon",
            "papaya", "pomegranate", "guava", "kiwi", "peach", "pear",
            "dates", "fruit",
        )),
        ("Oils", (
            "oil", "cooking spray",
        )),
        ("Spices", (
            "salt", "pepper", "cumin", "turmeric", "paprika", "chili",
            "chilli", "masala", "coriander", "cinnamon", "cardamom", "clove",
            "oregano", "basil", "thyme", "rosemary", "bay leaf", "nutmeg",
            "seasoning", "spice",
        )),
        ("Pantry", (
            "sugar", "honey", "jaggery", "syrup", "vinegar", "sauce", "soy",
            "stock", "broth", "ketchup", "mustard", "paste", "baking",
            "cocoa", "protein powder",
        )),
    ),
    fallback="Other",
)


PAKISTAN_TABLE = CategoryTable(
    name="pakistan",
    categories=(
        ("Sabzi Mandi (Vegetables)", (
            "aloo", "potato", "tomato", "onion", "pyaz", "garlic", "lehsun",
            "ginger", "adrak", "karela", "bhindi", "okra", "tori", "palak",
            "spinach", "gobi", "cauliflower", "matar", "peas", "beans",
            "cucumber", "kheera", "carrot", "gajar", "cabbage", "band gobi",
            "capsicum", "shimla mirch", "lettuce", "mushroom", "zucchini",
            "brinjal", "baingan", "eggplant", "radish", "mooli", "turnip",
            "shalgam",
        )),
        ("Phal (Fruits)", (
            "apple", "seb", "banana", "kela", "orange", "santra", "mango",
            "aam", "grapes", "angoor", "pomegranate", "anar", "guava",
            "amrood", "papaya", "watermelon", "tarbooz", "melon", "kharbooza",
            "lemon", "nimbu", "lime",
        )),
        ("Gosht/Murgi (Meat & Poultry)", (
            "chicken", "murgi", "beef", "gosht", "mutton", "lamb", "bakra",
            "qeema", "mince", "liver", "kaleji",
        )),
        ("Machli (Fish & Seafood)", (
            "fish", "machli", "rohu", "pomfret", "surmai", "prawns", "jhinga",
            "shrimp",
        )),
        ("Anday/Dairy (Eggs & Dairy)", (
            "egg", "anda", "milk", "doodh", "yogurt", "dahi", "cream", "malai",
            "cheese", "paneer", "butter", "makhan", "ghee",
        )),
        ("Daal/Lentils", (
            "daal", "dal", "lentil", "masoor", "chana", "moong", "urad",
            "rajma", "kidney beans", "lobiya", "chickpeas", "cholay",
        )),
        ("Chawal/Atta (Grains)", (
            "rice", "chawal", "basmati", "atta", "flour", "wheat", "roti",
            "bread", "paratha", "naan", "oats", "daliya", "semolina", "suji",
        )),
        ("Masalay (Spices)", (
            "salt", "namak", "pepper", "kali mirch", "turmeric", "haldi",
            "cumin", "zeera", "coriander", "dhania", "chili", "mirch",
            "garam masala", "cardamom", "elaichi", "cinnamon", "dalchini",
            "cloves", "laung", "bay leaf", "tej patta",
        )),
        ("Tel/Cooking Oils", (
            "oil", "tel", "desi ghee", "olive oil", "cooking oil",
            "mustard oil", "sarson ka tel", "vegetable oil",
        )),
        ("Dry Fruits/Mewa", (
            "almond", "badam", "walnut", "akhrot", "cashew", "kaju", "peanut",
            "moongphali", "raisin", "kishmish", "dates", "khajoor", "coconut",
            "nariyal", "seeds", "chia",
        )),
        ("Kiryana (Pantry)", (
            "sugar", "cheeni", "honey", "shahad", "jaggery", "gur", "vinegar",
            "soya sauce", "tomato paste", "sauce",
        )),
    ),
    fallback="Other Items",
)


CATEGORY_TABLES = {
    GENERIC_TABLE.name: GENERIC_TABLE,
    PAKISTAN_TABLE.name: PAKISTAN_TABLE,
}


def get_category_table(name: Optional[str] = None) -> CategoryTable:
    """
    Look up a category table by name.

    Args:
        name: Table name; defaults to the ``SHOPPING_CATEGORY_TABLE`` setting.

    Raises:
        ValueError: Unknown table name.
    """
    key = (name or settings.SHOPPING_CATEGORY_TABLE).lower()
    try:
        return CATEGORY_TABLES[key]
    except KeyError:
        raise ValueError(
            f"Unknown shopping category table '{key}'. "
            f"Choose one of: {', '.join(sorted(CATEGORY_TABLES))}"
        ) from None


def categorize_ingredient(food: str, table: Optional[CategoryTable] = None) -> str:
    """Return the aisle category for ``food``."""
    return (table or get_category_table()).categorize(food)
