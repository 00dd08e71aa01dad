"""Barcode product lookup backed by a static product table."""

from __future__ import annotations

from dataclasses import dataclass

from .models import NutritionFacts


@dataclass(frozen=True)
class ProductInfo:
    name: str
    brand: str
    price: float
    nutrition: NutritionFacts


_PRODUCTS: dict[str, ProductInfo] = {
    "123456789": ProductInfo(
        name="Organic Bananas",
        brand="Fresh & Easy",
        price=1.29,
        nutrition=NutritionFacts(
            calories=105, protein=1.3, carbs=27.0, fat=0.4, fiber=3.1, sugar=14.4
        ),
    ),
    "987654321": ProductInfo(
        name="Whole Milk",
        brand="Dairy Farm",
        price=3.99,
        nutrition=NutritionFacts(
            calories=150, protein=8.0, carbs=12.0, fat=8.0, fiber=0.0, sugar=12.0
        ),
    ),
}


def lookup_product(barcode: str) -> ProductInfo | None:
    """Return the product registered for ``barcode``, or None."""
    return _PRODUCTS.get(barcode.strip())
