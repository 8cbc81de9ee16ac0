"""Tests for score extraction from free-form judge output."""

import json
import time
from typing import Any

import pytest

from skill_ab.judge.domain.extraction import (
    ScoreExtractionError,
    extract_score_record,
    extract_trailing_json_object,
    parse_score_record,
    score_record_to_json,
)
from skill_ab.judge.domain.score import DIMENSIONS


def _side(value: Any = 5) -> dict[str, Any]:
    return {d: value for d in DIMENSIONS}


def _payload(control: dict[str, Any] | None = None, treatment: dict[str, Any] | None = None) -> str:
    return json.dumps(
        {
            "control": control if control is not None else _side(5),
            "treatment": treatment if treatment is not None else _side(7),
        }
    )


class TestExtractTrailingJsonObject:
    def test_returns_none_without_braces(self) -> None:
        assert extract_trailing_json_object(text="no json here") is None

    def test_returns_last_balanced_span(self) -> None:
        text = 'Template: {"a": N}\nAnswer: {"b": {"c": 1}} done.'

        assert extract_trailing_json_object(text=text) == '{"b": {"c": 1}}'

    def test_braces_inside_strings_ignored(self) -> None:
        text = 'x {"note": "use } carefully", "v": 1} y'

        assert extract_trailing_json_object(text=text) == '{"note": "use } carefully", "v": 1}'

    def test_unclosed_opener_skipped(self) -> None:
        text = '{"x": 1} and a stray { brace'

        assert extract_trailing_json_object(text=text) == '{"x": 1}'

    def test_non_json_braces_ignored(self) -> None:
        text = 'Format: {"a": N}\nfunction f() { return "oops; }\nAnswer: {"b": 2}'

        assert extract_trailing_json_object(text=text) == '{"b": 2}'

    def test_long_run_of_unclosed_braces_is_fast(self) -> None:
        text = '{ "x' * 20_000 + _payload()

        started = time.perf_counter()
        span = extract_trailing_json_object(text=text)
        elapsed = time.perf_counter() - started

        assert span == _payload()
        assert elapsed < 1.0

    def test_deeply_nested_unclosed_prefix(self) -> None:
        text = '{"a": ' * 2_000 + _payload()

        assert extract_trailing_json_object(text=text) == _payload()


class TestExtractScoreRecord:
    def test_plain_json(self) -> None:
        record = extract_score_record(text=_payload())

        assert record.control.accuracy == 5.0
        assert record.treatment.specificity == 7.0

    def test_json_wrapped_in_prose_and_fences(self) -> None:
        text = f"Here is my evaluation:\n```json\n{_payload()}\n```\nHope this helps!"

        assert extract_score_record(text=text) == extract_score_record(text=_payload())

    def test_extraction_is_idempotent(self) -> None:
        wrapped = f"Scores below.\n{_payload()}\n"
        span = extract_trailing_json_object(text=wrapped)

        assert span is not None
        assert extract_score_record(text=span) == extract_score_record(text=wrapped)

    def test_echoed_template_then_answer_uses_answer(self) -> None:
        template = '{"control": {"accuracy": N}, "treatment": {"accuracy": N}}'
        text = f"Format: {template}\n\nMy scores: {_payload()}"

        record = extract_score_record(text=text)

        assert record.treatment.accuracy == 7.0

    def test_prose_only_raises(self) -> None:
        with pytest.raises(ScoreExtractionError, match="no JSON object"):
            extract_score_record(text="Response B is clearly better.")

    def test_unquoted_keys_are_not_json(self) -> None:
        with pytest.raises(ScoreExtractionError, match="no JSON object"):
            extract_score_record(text="{control: 5}")

    def test_missing_side_raises(self) -> None:
        with pytest.raises(ScoreExtractionError, match="'treatment'"):
            extract_score_record(text=json.dumps({"control": _side()}))

    def test_missing_dimension_raises(self) -> None:
        partial = _side()
        del partial["specificity"]

        with pytest.raises(ScoreExtractionError, match="specificity"):
            extract_score_record(text=_payload(treatment=partial))

    @pytest.mark.parametrize("value", [None, "high", True, [], {}])
    def test_null_or_non_numeric_counts_as_zero(self, value: Any) -> None:
        record = extract_score_record(text=_payload(control=_side(value)))

        assert record.control.accuracy == 0.0

    def test_numeric_string_accepted(self) -> None:
        record = extract_score_record(text=_payload(control=_side("8.5")))

        assert record.control.completeness == 8.5

    @pytest.mark.parametrize("value,expected", [(-3, 0.0), (14, 10.0), (10, 10.0)])
    def test_values_clamped(self, value: float, expected: float) -> None:
        record = extract_score_record(text=_payload(control=_side(value)))

        assert record.control.best_practices == expected


class TestParseScoreRecord:
    def test_returns_none_on_failure(self) -> None:
        assert parse_score_record(text="nothing") is None

    def test_returns_record_on_success(self) -> None:
        assert parse_score_record(text=_payload()) is not None


class TestScoreRecordToJson:
    def test_absent_record_is_empty_object(self) -> None:
        assert score_record_to_json(record=None) == {}

    def test_record_has_both_sides_and_all_dimensions(self) -> None:
        data = score_record_to_json(record=extract_score_record(text=_payload()))

        assert set(data) == {"control", "treatment"}
        assert set(data["control"]) == set(DIMENSIONS)
