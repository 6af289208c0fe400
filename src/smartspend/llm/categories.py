"""Fixed spending categories with their display color and icon."""
from enum import Enum
from typing import Dict, List


class Category(str, Enum):
    """Closed set of spending categories; order is the display tie-break order."""
    FOOD = "Food & Dining"
    SHOPPING = "Clothing & Shopping"
    HEALTH = "Health & Wellness"
    TRANSPORT = "Travel & Transport"
    UTILITIES = "Utilities & Bills"
    ENTERTAINMENT = "Entertainment"
    HOUSING = "Housing & Rent"
    MISC = "Miscellaneous"

    def __str__(self) -> str:
        return self.value


CATEGORY_COLORS: Dict[Category, str] = {
    Category.FOOD: "#F87171",
    Category.SHOPPING: "#60A5FA",
    Category.HEALTH: "#34D399",
    Category.TRANSPORT: "#FBBF24",
    Category.UTILITIES: "#A78BFA",
    Category.ENTERTAINMENT: "#F472B6",
    Category.HOUSING: "#FB923C",
    Category.MISC: "#94A3B8",
}

CATEGORY_ICONS: Dict[Category, str] = {
    Category.FOOD: "🍽️",
    Category.SHOPPING: "🛍️",
    Category.HEALTH: "🩺",
    Category.TRANSPORT: "🚗",
    Category.UTILITIES: "⚡",
    Category.ENTERTAINMENT: "🎬",
    Category.HOUSING: "🏠",
    Category.MISC: "…",
}

FALLBACK_COLOR = CATEGORY_COLORS[Category.MISC]

CATEGORY_ORDER: Dict[Category, int] = {category: index for index, category in enumerate(Category)}


def category_names() -> List[str]:
    """Category labels in enumeration order."""
    return [category.value for category in Category]
