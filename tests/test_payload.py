"""Tests for prompt building and analysis payload parsing."""

import json

import pytest

from bitecure.analyzer.payload import (
    SYSTEM_PROMPT,
    build_messages,
    build_prompt,
    parse_analysis,
    strip_code_fence,
)
from bitecure.errors import DecodingError
from bitecure.models import DetectedItem, GroceryAnalysis, NutritionFacts


def _payload(**overrides):
    data = {
        "detectedItems": [
            {
                "name": "Organic Bananas",
                "confidence": 0.97,
                "estimatedCost": 1.29,
                "category": "fruit",
                "nutritionalInfo": {
                    "calories": 105,
                    "protein": 1.3,
                    "carbs": 27.0,
                    "fat": 0.4,
                    "fiber": 3.1,
                    "sugar": 14.4,
                },
            },
            {
                "name": "Greek Yogurt",
                "confidence": 0.81,
                "estimatedCost": 5.49,
                "category": "dairy",
                "nutritionalInfo": {"calories": 100, "protein": 17.0},
            },
            {
                "name": "Sourdough",
                "confidence": 0.6,
                "estimatedCost": 4.0,
                "category": "grain",
            },
        ],
        "nutritionalAnalysis": "Good balance of carbs and protein.",
        "recipeSuggestions": ["Parfait", "Banana Bread", "Toast"],
        "totalEstimatedCost": 11.0,
        "healthInsights": ["Yogurt adds probiotics"],
    }
    data.update(overrides)
    return data


class TestBuildMessages:
    def test_two_messages(self):
        messages = build_messages("MILK 3.99")
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == SYSTEM_PROMPT
        assert "nutrition expert and grocery analyst" in SYSTEM_PROMPT

    def test_prompt_embeds_text_and_schema(self):
        prompt = build_prompt("EGGS DOZEN 2.99")
        assert "Text to analyze: EGGS DOZEN 2.99" in prompt
        for key in (
            '"detectedItems"',
            '"nutritionalInfo"',
            '"recipeSuggestions"',
            '"totalEstimatedCost"',
            '"healthInsights"',
        ):
            assert key in prompt

    def test_prompt_keeps_braces_in_text(self):
        prompt = build_prompt("{weird} receipt")
        assert "Text to analyze: {weird} receipt" in prompt


class TestStripCodeFence:
    def test_plain_json_unchanged(self):
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'


class TestParseAnalysis:
    def test_full_payload(self):
        analysis = parse_analysis(json.dumps(_payload()))
        assert isinstance(analysis, GroceryAnalysis)
        assert analysis.detected_items[0] == DetectedItem(
            name="Organic Bananas",
            confidence=0.97,
            estimated_cost=1.29,
            category="fruit",
            nutrition=NutritionFacts(
                calories=105, protein=1.3, carbs=27.0, fat=0.4, fiber=3.1, sugar=14.4
            ),
        )
        assert analysis.nutritional_analysis == "Good balance of carbs and protein."
        assert analysis.recipe_suggestions == ("Parfait", "Banana Bread", "Toast")
        assert analysis.total_estimated_cost == 11.0
        assert analysis.health_insights == ("Yogurt adds probiotics",)

    def test_partial_nutrition_keeps_missing_fields_empty(self):
        analysis = parse_analysis(json.dumps(_payload()))
        nutrition = analysis.detected_items[1].nutrition
        assert nutrition == NutritionFacts(calories=100, protein=17.0)
        assert nutrition.fat is None
        assert analysis.detected_items[2].nutrition is None

    def test_null_nutrition_fields(self):
        payload = _payload()
        payload["detectedItems"][0]["nutritionalInfo"] = {"calories": None, "fat": 1}
        analysis = parse_analysis(json.dumps(payload))
        assert analysis.detected_items[0].nutrition == NutritionFacts(fat=1.0)

    def test_integral_float_calories(self):
        payload = _payload()
        payload["detectedItems"][0]["nutritionalInfo"] = {"calories": 105.0}
        analysis = parse_analysis(json.dumps(payload))
        assert analysis.detected_items[0].nutrition.calories == 105
        assert isinstance(analysis.detected_items[0].nutrition.calories, int)

    def test_markdown_fenced_payload(self):
        content = "```json\n" + json.dumps(_payload(), indent=2) + "\n```"
        analysis = parse_analysis(content)
        assert len(analysis.detected_items) == 3

    def test_not_json(self):
        with pytest.raises(DecodingError, match="not valid JSON"):
            parse_analysis("Here are your groceries: bananas and milk.")

    def test_trailing_commentary_fails(self):
        with pytest.raises(DecodingError):
            parse_analysis(json.dumps(_payload()) + "\nHope this helps!")

    def test_not_an_object(self):
        with pytest.raises(DecodingError, match="JSON object"):
            parse_analysis("[1, 2, 3]")

    @pytest.mark.parametrize(
        "missing",
        [
            "detectedItems",
            "nutritionalAnalysis",
            "recipeSuggestions",
            "totalEstimatedCost",
            "healthInsights",
        ],
    )
    def test_missing_top_level_field(self, missing):
        payload = _payload()
        del payload[missing]
        with pytest.raises(DecodingError, match=missing):
            parse_analysis(json.dumps(payload))

    @pytest.mark.parametrize("missing", ["name", "confidence", "estimatedCost", "category"])
    def test_missing_item_field(self, missing):
        payload = _payload()
        del payload["detectedItems"][0][missing]
        with pytest.raises(DecodingError, match=missing):
            parse_analysis(json.dumps(payload))

    def test_string_cost_rejected(self):
        payload = _payload(totalEstimatedCost="11.00")
        with pytest.raises(DecodingError, match="totalEstimatedCost"):
            parse_analysis(json.dumps(payload))

    def test_bool_confidence_rejected(self):
        payload = _payload()
        payload["detectedItems"][0]["confidence"] = True
        with pytest.raises(DecodingError, match="confidence"):
            parse_analysis(json.dumps(payload))

    def test_fractional_calories_rejected(self):
        payload = _payload()
        payload["detectedItems"][0]["nutritionalInfo"] = {"calories": 10.5}
        with pytest.raises(DecodingError, match="calories"):
            parse_analysis(json.dumps(payload))

    def test_non_string_recipe_rejected(self):
        payload = _payload(recipeSuggestions=["Toast", 3])
        with pytest.raises(DecodingError, match="recipeSuggestions"):
            parse_analysis(json.dumps(payload))
