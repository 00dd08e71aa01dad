"""Prompt construction and parsing of the model's structured reply."""

from __future__ import annotations

import json
from typing import Any

from ..errors import DecodingError
from ..models import DetectedItem, GroceryAnalysis, NutritionFacts

SYSTEM_PROMPT = (
    "You are a nutrition expert and grocery analyst. Analyze the provided "
    "grocery text and return a JSON response with detected items, "
    "nutritional analysis, and recipe suggestions."
)

_PROMPT = """\
Analyze this grocery-related text and provide a JSON response with the following structure:

{{
    "detectedItems": [
        {{
            "name": "Item name",
            "confidence": 0.95,
            "estimatedCost": 2.49,
            "category": "fruit/vegetable/dairy/meat/grain/other",
            "nutritionalInfo": {{
                "calories": 100,
                "protein": 5.0,
                "carbs": 20.0,
                "fat": 2.0,
                "fiber": 3.0,
                "sugar": 15.0
            }}
        }}
    ],
    "nutritionalAnalysis": "Overall nutritional summary",
    "recipeSuggestions": ["Recipe 1", "Recipe 2", "Recipe 3"],
    "totalEstimatedCost": 15.47,
    "healthInsights": ["Health insight 1", "Health insight 2"]
}}

Text to analyze: {text}

Please provide realistic cost estimates based on average US grocery prices, \
accurate nutritional information, and creative recipe suggestions that use \
the detected items.
"""

_FLOAT_FIELDS = ("protein", "carbs", "fat", "fiber", "sugar")


def build_prompt(text: str) -> str:
    """Embed recognized text into the analysis instructions."""
    return _PROMPT.format(text=text)


def build_messages(text: str) -> list[dict[str, str]]:
    """Build the two-message chat payload for one analysis request."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(text)},
    ]


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if present."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first and last fence lines
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def parse_analysis(content: str) -> GroceryAnalysis:
    """Decode the model's message content into a GroceryAnalysis.

    The content is itself a JSON document embedded as a string in the chat
    reply. A surrounding markdown fence is tolerated; anything else that is
    not the expected JSON object raises DecodingError.
    """
    try:
        data = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise DecodingError(f"analysis content is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodingError("analysis content must be a JSON object")

    raw_items = _require(data, "detectedItems", list)
    return GroceryAnalysis(
        detected_items=tuple(_parse_item(item) for item in raw_items),
        nutritional_analysis=_require(data, "nutritionalAnalysis", str),
        recipe_suggestions=_string_list(data, "recipeSuggestions"),
        total_estimated_cost=_number(data, "totalEstimatedCost"),
        health_insights=_string_list(data, "healthInsights"),
    )


def _parse_item(raw: Any) -> DetectedItem:
    if not isinstance(raw, dict):
        raise DecodingError("each detected item must be a JSON object")

    nutrition = raw.get("nutritionalInfo")
    return DetectedItem(
        name=_require(raw, "name", str),
        confidence=_number(raw, "confidence"),
        estimated_cost=_number(raw, "estimatedCost"),
        category=_require(raw, "category", str),
        nutrition=None if nutrition is None else _parse_nutrition(nutrition),
    )


def _parse_nutrition(raw: Any) -> NutritionFacts:
    if not isinstance(raw, dict):
        raise DecodingError("nutritionalInfo must be a JSON object")

    values: dict[str, Any] = {}
    calories = raw.get("calories")
    if calories is not None:
        if isinstance(calories, float) and calories.is_integer():
            calories = int(calories)
        if isinstance(calories, bool) or not isinstance(calories, int):
            raise DecodingError(f"calories must be an integer, got {calories!r}")
        values["calories"] = calories
    for name in _FLOAT_FIELDS:
        if raw.get(name) is not None:
            values[name] = _number(raw, name)
    return NutritionFacts(**values)


def _require(data: dict, key: str, kind: type) -> Any:
    if key not in data:
        raise DecodingError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, kind):
        raise DecodingError(
            f"field {key!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _number(data: dict, key: str) -> float:
    if key not in data:
        raise DecodingError(f"missing field {key!r}")
    value = data[key]
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodingError(f"field {key!r} must be a number, got {value!r}")
    return float(value)


def _string_list(data: dict, key: str) -> tuple[str, ...]:
    values = _require(data, key, list)
    if not all(isinstance(v, str) for v in values):
        raise DecodingError(f"field {key!r} must be a list of strings")
    return tuple(values)
