"""Deterministic keyword-driven analyzer used offline and as fallback."""

from __future__ import annotations

from ..models import DetectedItem, ScanResult

# (keyword, estimated cost, confidence). Order defines output order.
_FOOD_KEYWORDS: tuple[tuple[str, float, float], ...] = (
    ("apple", 2.49, 0.88),
    ("banana", 1.29, 0.95),
    ("milk", 3.99, 0.92),
    ("bread", 2.79, 0.85),
    ("chicken", 5.99, 0.78),
    ("rice", 3.49, 0.82),
    ("tomato", 2.99, 0.87),
    ("cheese", 4.49, 0.80),
    ("egg", 2.99, 0.90),
    ("yogurt", 1.99, 0.85),
)

# Returned when no keyword matches so the item list is never empty.
_DEFAULT_ITEMS: tuple[DetectedItem, ...] = (
    DetectedItem(name="Mixed Groceries", confidence=0.70, estimated_cost=12.99),
    DetectedItem(name="Fresh Produce", confidence=0.65, estimated_cost=8.49),
)

# First rule with any matching name wins.
_NUTRITION_RULES: tuple[tuple[frozenset[str], str], ...] = (
    (
        frozenset({"banana", "apple"}),
        "High in potassium, vitamin C, and fiber. Great for heart health and "
        "digestion. Natural sugars provide quick energy.",
    ),
    (
        frozenset({"milk", "cheese"}),
        "Rich in calcium and protein. Good for bone health and muscle "
        "development. Contains essential vitamins A and D.",
    ),
    (
        frozenset({"chicken", "egg"}),
        "Excellent source of lean protein and essential amino acids. Supports "
        "muscle building and repair.",
    ),
)
_DEFAULT_NUTRITION = (
    "Balanced mix of nutrients including carbohydrates, proteins, and healthy "
    "fats. Provides sustained energy and essential vitamins."
)

# First rule whose names are all present wins.
_RECIPE_RULES: tuple[tuple[frozenset[str], tuple[str, ...]], ...] = (
    (
        frozenset({"banana", "milk"}),
        ("Banana Smoothie", "Overnight Oats", "Banana Pancakes"),
    ),
    (
        frozenset({"apple"}),
        ("Apple Crisp", "Waldorf Salad", "Apple Cinnamon Oatmeal"),
    ),
    (
        frozenset({"chicken"}),
        ("Grilled Chicken Salad", "Chicken Stir Fry", "Chicken Soup"),
    ),
    (
        frozenset({"rice"}),
        ("Fried Rice", "Rice Bowl", "Stuffed Peppers"),
    ),
)
_DEFAULT_RECIPES = ("Quick Stir Fry", "Hearty Soup", "Nutritious Salad")


def extract_items(text: str) -> tuple[DetectedItem, ...]:
    """Match the keyword table against the text (case-insensitive)."""
    lowered = text.lower()
    items = tuple(
        DetectedItem(
            name=keyword.capitalize(),
            confidence=confidence,
            estimated_cost=cost,
        )
        for keyword, cost, confidence in _FOOD_KEYWORDS
        if keyword in lowered
    )
    return items or _DEFAULT_ITEMS


def nutrition_summary(items: tuple[DetectedItem, ...]) -> str:
    names = {item.name.lower() for item in items}
    for keywords, summary in _NUTRITION_RULES:
        if names & keywords:
            return summary
    return _DEFAULT_NUTRITION


def recipe_suggestions(items: tuple[DetectedItem, ...]) -> tuple[str, ...]:
    names = {item.name.lower() for item in items}
    for keywords, recipes in _RECIPE_RULES:
        if keywords <= names:
            return recipes
    return _DEFAULT_RECIPES


def mock_analyze(text: str) -> ScanResult:
    """Build a ScanResult from keyword heuristics alone.

    Pure function: no I/O, and the same text always yields the same result.
    """
    items = extract_items(text)
    return ScanResult(
        recognized_text=text,
        detected_items=items,
        nutritional_analysis=nutrition_summary(items),
        recipe_suggestions=recipe_suggestions(items),
        total_estimated_cost=sum(item.estimated_cost for item in items),
    )
