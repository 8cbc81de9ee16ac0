"""Tests for DimensionScores and ScoreRecord."""

import pytest
from pydantic import ValidationError

from skill_ab.judge.domain.score import DIMENSIONS, DimensionScores


class TestDimensionScores:
    def test_five_fixed_dimensions(self) -> None:
        assert DIMENSIONS == (
            "accuracy",
            "completeness",
            "best_practices",
            "error_avoidance",
            "specificity",
        )

    def test_get_by_name(self) -> None:
        scores = DimensionScores(**{d: float(i) for i, d in enumerate(DIMENSIONS)})

        assert scores.get("error_avoidance") == 3.0

    def test_get_unknown_dimension_raises(self) -> None:
        scores = DimensionScores(**{d: 1.0 for d in DIMENSIONS})

        with pytest.raises(KeyError):
            scores.get("style")

    @pytest.mark.parametrize("value", [-0.1, 10.1])
    def test_out_of_range_rejected(self, value: float) -> None:
        with pytest.raises(ValidationError):
            DimensionScores(**{d: value for d in DIMENSIONS})

    def test_is_frozen(self) -> None:
        scores = DimensionScores(**{d: 1.0 for d in DIMENSIONS})

        with pytest.raises(ValidationError):
            scores.accuracy = 2.0  # type: ignore[misc]
