"""
Pytest fixtures for recovery and recommendation tests.
"""

import json

import pytest

from recommendations.completion_client import CompletionResult
from recommendations.config import RecommendationsConfig
from recommendations.models import RecommendationRequest


def _meal(name: str, calories: int) -> dict:
    return {
        "name": name,
        "description": f"{name} meal",
        "prepTime": 5,
        "cookTime": 10,
        "servings": 1,
        "difficulty": "Easy",
        "ingredients": [{"name": name.lower(), "amount": "1", "unit": "cup"}],
        "instructions": ["Prepare", "Serve"],
        "nutrition": {"calories": calories, "protein": 10, "carbs": 20, "fat": 5, "fiber": 3},
        "tips": ["Keep it simple"],
        "tags": ["quick"],
    }


@pytest.fixture
def three_day_plan():
    """A plan with the three days the prompt asks for."""
    return {
        "weeklyPlan": {
            "monday": {"breakfast": _meal("Oats", 150), "lunch": _meal("Salad", 200)},
            "tuesday": {"breakfast": _meal("Eggs", 140), "lunch": _meal("Soup", 100)},
            "wednesday": {"breakfast": _meal("Yogurt", 120), "lunch": _meal("Wrap", 300)},
        },
        "shoppingList": {"proteins": [{"name": "eggs", "quantity": "1 dozen"}]},
        "macroSummary": {"Alex": {"dailyTotals": {"calories": 1200}}},
    }


@pytest.fixture
def three_day_plan_text(three_day_plan):
    return json.dumps(three_day_plan)


@pytest.fixture
def truncated_plan_text(three_day_plan_text):
    """The plan cut off in the middle of a key, as a token limit would."""
    cut = three_day_plan_text.index('"shoppingList"') + len('"shopp')
    return three_day_plan_text[:cut]


@pytest.fixture
def sample_config():
    """Config with a dummy key and no retry delay."""
    return RecommendationsConfig(
        api_key="test-key-1234567890",
        max_retries=2,
        retry_delay=0.0,
    )


@pytest.fixture
def sample_request():
    return RecommendationRequest.model_validate(
        {
            "familyMembers": [
                {"name": "Alex", "goal": "cutting", "targetCalories": 1800},
                {"name": "Sam", "goal": "bulking", "targetCalories": 2800},
            ],
            "pantryItems": [{"name": "rice", "quantity": 2}],
            "preferences": {"cuisineType": "Japanese", "dietaryRestrictions": "no pork"},
            "nutritionPlan": "high protein",
        }
    )


@pytest.fixture
def make_completion():
    """Factory for CompletionResult objects."""

    def _make(content: str, finish_reason: str = "stop") -> CompletionResult:
        return CompletionResult(
            content=content,
            finish_reason=finish_reason,
            model="test-model",
            input_tokens=100,
            output_tokens=200,
        )

    return _make
