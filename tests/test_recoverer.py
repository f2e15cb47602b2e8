"""
Tests for the recovery pipeline.
"""

import json
import logging
import time

import pytest

from recovery import (
    COUNTS,
    RecoveryError,
    RecoveryStatus,
    recover_json,
    strict_parse,
)


NESTED = {
    "plan": {
        "monday": {
            "meals": [
                {"name": "Oats {quick}", "tags": ["a,b", "c]"]},
                {"name": 'Soup "hot"', "kcal": 120, "vegan": False},
            ],
            "ok": True,
        },
        "note": None,
    },
    "days": ["monday", "tuesday"],
}


class TestStrictParse:
    """Tests for the strict parser."""

    def test_parses_standard_json(self):
        assert strict_parse('{"a": [1, 2.5, null]}') == {"a": [1, 2.5, None]}

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            strict_parse('{"a": NaN}')

    def test_rejects_trailing_comma(self):
        with pytest.raises(ValueError):
            strict_parse('{"a": 1,}')


class TestFastPath:
    """Valid input must never go through repair."""

    def test_valid_object(self):
        text = json.dumps(NESTED)
        result = recover_json(text)
        assert result.status == RecoveryStatus.PARSED
        assert result.value == json.loads(text)
        assert result.repaired_text is None
        assert result.was_repaired is False

    def test_valid_array(self):
        result = recover_json('[{"a": 1}, {"b": 2}]')
        assert result.status == RecoveryStatus.PARSED
        assert result.value == [{"a": 1}, {"b": 2}]

    def test_surrounding_whitespace(self):
        result = recover_json('\n  {"a": 1}  \n')
        assert result.status == RecoveryStatus.PARSED
        assert result.value == {"a": 1}

    def test_repair_never_runs_on_valid_input(self, monkeypatch):
        def _fail(*args, **kwargs):
            raise AssertionError("repair ran on valid input")

        monkeypatch.setattr("recovery.recoverer.repair_truncated_json", _fail)
        assert recover_json(json.dumps(NESTED)).value == NESTED


class TestExtraction:
    """Objects wrapped in prose or fences are extracted exactly."""

    @pytest.mark.parametrize(
        "wrapper",
        [
            "Here is the plan:\n{}\nEnjoy!",
            "```json\n{}\n```",
            "Sure thing!\n```\n{}\n```\nAnything else?",
        ],
    )
    def test_embedded_object(self, wrapper):
        text = wrapper.replace("{}", json.dumps(NESTED))
        result = recover_json(text)
        assert result.status == RecoveryStatus.PARSED
        assert result.value == NESTED


class TestRepair:
    """Tests for truncated and malformed input."""

    def test_trailing_comma_and_missing_bracket(self):
        result = recover_json('{"a": 1, "b": [1, 2,}')
        assert result.status == RecoveryStatus.REPAIRED
        assert result.value == {"a": 1, "b": [1, 2]}
        assert result.repaired_text == '{"a": 1, "b": [1, 2]}'
        assert result.was_repaired is True

    def test_trailing_comma_only(self):
        result = recover_json('{"a": 1, "b": [1, 2,]}')
        assert result.value == {"a": 1, "b": [1, 2]}
        assert result.repaired_text == '{"a": 1, "b": [1, 2]}'

    def test_truncated_weekly_plan(self):
        text = (
            '{"weeklyPlan": {"monday": {"breakfast": {"name": "Oats", '
            '"nutrition": {"calories": 150, "pr'
        )
        result = recover_json(text)
        assert result.status == RecoveryStatus.REPAIRED
        nutrition = result.value["weeklyPlan"]["monday"]["breakfast"]["nutrition"]
        assert "pr" not in nutrition
        assert json.loads(result.canonical_text) == result.value

    def test_truncated_plan_fixture(self, truncated_plan_text, three_day_plan):
        result = recover_json(truncated_plan_text)
        assert result.ok
        assert result.value["weeklyPlan"] == three_day_plan["weeklyPlan"]
        assert "shoppingList" not in result.value

    def test_every_truncation_point_recovers(self):
        text = json.dumps(NESTED)
        for cut in range(1, len(text)):
            result = recover_json(text[:cut])
            assert result.ok, f"cut at {cut}: {text[:cut]!r} -> {result.repaired_text!r}"
            assert isinstance(result.value, dict)

    def test_repair_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="recovery"):
            recover_json('{"a": [1, 2')
        assert "needed repair" in caplog.text

    def test_long_embedded_value_repairs_in_linear_time(self):
        text = '{"img": "' + "A" * 40000 + '", "b": [1, 2'
        started = time.perf_counter()
        result = recover_json(text)
        elapsed = time.perf_counter() - started
        assert result.status == RecoveryStatus.REPAIRED
        assert result.value["b"] == [1, 2]
        assert elapsed < 2.0

    def test_counts_strategy_fails_on_interleaved_nesting(self):
        text = '{"a": [1, {"b": 2'
        assert recover_json(text).value == {"a": [1, {"b": 2}]}
        assert recover_json(text, strategy=COUNTS).status == RecoveryStatus.UNRECOVERABLE


class TestFailures:
    """Failures are reported, never raised, and nothing is fabricated."""

    def test_no_json_found(self):
        result = recover_json("Sorry, I cannot help with that.")
        assert result.status == RecoveryStatus.NO_JSON_FOUND
        assert result.ok is False
        assert result.value is None

    def test_bare_json_string_is_not_a_structure(self):
        result = recover_json('"Sorry, I cannot help with that."')
        assert result.status == RecoveryStatus.NO_JSON_FOUND

    def test_empty_input(self):
        assert recover_json("").status == RecoveryStatus.NO_JSON_FOUND

    def test_single_quotes_are_unrecoverable_by_default(self):
        result = recover_json("{'a': 'b',}")
        assert result.status == RecoveryStatus.UNRECOVERABLE
        assert result.candidate == "{'a': 'b',}"
        assert result.repaired_text == "{'a': 'b'}"
        assert result.error

    def test_single_quotes_with_normalization(self):
        result = recover_json("{'a': 'b',}", normalize_quotes=True)
        assert result.status == RecoveryStatus.REPAIRED
        assert result.value == {"a": "b"}

    def test_runaway_nesting_is_unrecoverable(self):
        result = recover_json('{"a": ' + "[" * 50000)
        assert result.status == RecoveryStatus.UNRECOVERABLE
        assert result.value is None
        assert "too deep" in result.error

    def test_unknown_strategy_is_rejected_even_for_valid_input(self):
        with pytest.raises(ValueError, match="Unsupported repair strategy: guess"):
            recover_json('{"a": 1}', strategy="guess")

    def test_unwrap_raises_on_failure(self):
        with pytest.raises(RecoveryError, match="no_json_found"):
            recover_json("nothing here").unwrap()

    def test_canonical_text_raises_on_failure(self):
        with pytest.raises(RecoveryError):
            recover_json("nothing here").canonical_text

    def test_failure_keeps_raw_for_diagnostics(self):
        raw = 'prefix {"a": 1 "b": 2}'
        result = recover_json(raw)
        assert result.status == RecoveryStatus.UNRECOVERABLE
        summary = result.to_dict()
        assert summary["status"] == "unrecoverable"
        assert summary["raw_length"] == len(raw)
        assert result.raw == raw


class TestCanonicalText:
    """Tests for re-serialization of recovered values."""

    def test_round_trips(self):
        result = recover_json('{"name": "Crème brûlée", "n": [1, 2')
        assert json.loads(result.canonical_text) == {"name": "Crème brûlée", "n": [1, 2]}
        assert "Crème" in result.canonical_text

    def test_unwrap_returns_value(self):
        assert recover_json('{"a": 1}').unwrap() == {"a": 1}
