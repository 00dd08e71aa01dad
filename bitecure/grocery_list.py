"""Saved grocery list entries derived from scan results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .models import NutritionFacts, ScanResult


@dataclass(frozen=True)
class GroceryItem:
    """An item the user kept from a scan."""

    name: str
    estimated_cost: float
    scanned_text: str
    timestamp: str  # ISO8601
    nutrition: NutritionFacts | None = None


def to_grocery_items(
    result: ScanResult, now: datetime | None = None
) -> list[GroceryItem]:
    """Convert every detected item of a scan into a grocery list entry.

    All entries share one timestamp and the scan's recognized text.
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return [
        GroceryItem(
            name=item.name,
            estimated_cost=item.estimated_cost,
            scanned_text=result.recognized_text,
            timestamp=timestamp,
            nutrition=item.nutrition,
        )
        for item in result.detected_items
    ]
