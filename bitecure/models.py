"""Data models for grocery scan results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionFacts:
    """Per-item nutrition facts. Any field may be missing."""

    calories: int | None = None
    protein: float | None = None  # g
    carbs: float | None = None  # g
    fat: float | None = None  # g
    fiber: float | None = None  # g
    sugar: float | None = None  # g


@dataclass(frozen=True)
class DetectedItem:
    """A single grocery item recognized in the scanned text."""

    name: str
    confidence: float  # 0.0〜1.0
    estimated_cost: float
    category: str | None = None  # fruit, vegetable, dairy, meat, grain, other
    nutrition: NutritionFacts | None = None


@dataclass(frozen=True)
class ScanResult:
    """Normalized output of one grocery text analysis."""

    recognized_text: str
    detected_items: tuple[DetectedItem, ...]
    nutritional_analysis: str
    recipe_suggestions: tuple[str, ...]
    total_estimated_cost: float
    health_insights: tuple[str, ...] = ()


@dataclass(frozen=True)
class GroceryAnalysis:
    """Structured payload returned by a language model."""

    detected_items: tuple[DetectedItem, ...]
    nutritional_analysis: str
    recipe_suggestions: tuple[str, ...]
    total_estimated_cost: float
    health_insights: tuple[str, ...] = ()

    def to_scan_result(self, recognized_text: str) -> ScanResult:
        return ScanResult(
            recognized_text=recognized_text,
            detected_items=self.detected_items,
            nutritional_analysis=self.nutritional_analysis,
            recipe_suggestions=self.recipe_suggestions,
            total_estimated_cost=self.total_estimated_cost,
            health_insights=self.health_insights,
        )
