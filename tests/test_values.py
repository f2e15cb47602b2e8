"""
Tests for the tagged JsonValue view.
"""

import pytest

from recovery import JsonKind, JsonValue, ShapeError


@pytest.fixture
def plan():
    return JsonValue(
        {
            "weeklyPlan": {
                "monday": {
                    "breakfast": {"name": "Oats", "nutrition": {"calories": 150}},
                    "snacks": [{"name": "Apple"}, {"name": "Nuts"}],
                    "vegan": True,
                    "notes": None,
                }
            }
        }
    )


class TestKinds:
    """Tests for kind tagging."""

    @pytest.mark.parametrize(
        "raw, kind",
        [
            ({}, JsonKind.OBJECT),
            ([], JsonKind.ARRAY),
            ("x", JsonKind.STRING),
            (1, JsonKind.NUMBER),
            (1.5, JsonKind.NUMBER),
            (True, JsonKind.BOOLEAN),
            (None, JsonKind.NULL),
        ],
    )
    def test_kind(self, raw, kind):
        assert JsonValue(raw).kind == kind

    def test_rejects_non_json_values(self):
        with pytest.raises(TypeError):
            JsonValue(object())


class TestAccessors:
    """Accessors fail loudly on shape mismatch."""

    def test_nested_get(self, plan):
        calories = plan.get("weeklyPlan").get("monday").get("breakfast").get("nutrition").get("calories")
        assert calories.as_number() == 150
        assert calories.path == "$.weeklyPlan.monday.breakfast.nutrition.calories"

    def test_array_access(self, plan):
        snacks = plan.get("weeklyPlan").get("monday").get("snacks")
        assert snacks.at(1).get("name").as_str() == "Nuts"
        assert snacks.at(-1).get("name").as_str() == "Nuts"
        assert [snack.get("name").as_str() for snack in snacks] == ["Apple", "Nuts"]
        assert len(snacks) == 2

    def test_missing_key_raises(self, plan):
        with pytest.raises(ShapeError) as exc_info:
            plan.get("weeklyPlan").get("tuesday")
        assert exc_info.value.path == "$.weeklyPlan.tuesday"
        assert exc_info.value.actual == "missing"

    def test_index_out_of_range_raises(self, plan):
        with pytest.raises(ShapeError, match=r"snacks\[5\]"):
            plan.get("weeklyPlan").get("monday").get("snacks").at(5)

    def test_wrong_kind_raises(self, plan):
        monday = plan.get("weeklyPlan").get("monday")
        with pytest.raises(ShapeError) as exc_info:
            monday.get("breakfast").as_array()
        assert exc_info.value.expected == "array"
        assert exc_info.value.actual == "object"

    def test_boolean_is_not_a_number(self, plan):
        vegan = plan.get("weeklyPlan").get("monday").get("vegan")
        assert vegan.as_bool() is True
        with pytest.raises(ShapeError):
            vegan.as_number()

    def test_null_is_explicit(self, plan):
        notes = plan.get("weeklyPlan").get("monday").get("notes")
        assert notes.is_null
        with pytest.raises(ShapeError):
            notes.as_str()

    def test_object_helpers(self, plan):
        monday = plan.get("weeklyPlan").get("monday")
        assert monday.has("breakfast")
        assert not monday.has("dinner")
        assert monday.keys() == ["breakfast", "snacks", "vegan", "notes"]
        assert dict(monday.items())["vegan"] == JsonValue(True)
