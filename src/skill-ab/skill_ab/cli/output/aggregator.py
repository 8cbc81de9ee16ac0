"""Aggregator — folds judged trials into per-dimension and overall statistics."""

import statistics
from dataclasses import dataclass
from enum import StrEnum

from skill_ab.core.errors import SkillAbError
from skill_ab.evaluation.domain.trial import Trial
from skill_ab.judge.domain.score import DIMENSIONS, ScoreRecord

STRONG_THRESHOLD = 2.0
MODERATE_THRESHOLD = 0.5


class Impact(StrEnum):
    STRONG_POSITIVE = "STRONG+"
    MODERATE_POSITIVE = "MODERATE+"
    NEUTRAL = "NEUTRAL"
    MODERATE_NEGATIVE = "MODERATE-"
    STRONG_NEGATIVE = "STRONG-"


INTERPRETATIONS: dict[Impact, str] = {
    Impact.STRONG_POSITIVE: "STRONG POSITIVE — skill significantly improves responses",
    Impact.MODERATE_POSITIVE: "MODERATE POSITIVE — skill noticeably improves responses",
    Impact.NEUTRAL: "NEUTRAL — skill has minimal measurable impact",
    Impact.MODERATE_NEGATIVE: "MODERATE NEGATIVE — skill may be hurting responses",
    Impact.STRONG_NEGATIVE: "STRONG NEGATIVE — skill is degrading response quality",
}


class AggregationError(SkillAbError):
    """Raised when no trial produced a valid score."""

    def __init__(self, attempted: int) -> None:
        self.attempted = attempted
        super().__init__(
            f"Failed to aggregate results: no valid trial scores"
            f" ({attempted} trial(s) attempted)"
        )


@dataclass(frozen=True)
class DimensionSummary:
    """Mean control and treatment score for one dimension."""

    dimension: str
    control: float
    treatment: float
    delta: float
    impact: Impact


@dataclass(frozen=True)
class OverallSummary:
    """Dimension-mean-first overall score per side."""

    control: float
    treatment: float
    delta: float
    impact: Impact
    interpretation: str


@dataclass(frozen=True)
class AggregateReport:
    """Terminal artifact of an evaluation; computed once, never mutated."""

    valid_trials: int
    attempted_trials: int
    dimensions: list[DimensionSummary]
    overall: OverallSummary


def classify_delta(delta: float) -> Impact:
    """Bucket a treatment-minus-control delta on the 0-10 scale.

    Each threshold belongs to the bucket nearer zero on the negative side and
    to the bucket further from zero on the positive side: 2.0 is STRONG+, 0.5
    is MODERATE+, -0.5 is NEUTRAL and -2.0 is MODERATE-.
    """
    if delta >= STRONG_THRESHOLD:
        return Impact.STRONG_POSITIVE
    if delta >= MODERATE_THRESHOLD:
        return Impact.MODERATE_POSITIVE
    if delta >= -MODERATE_THRESHOLD:
        return Impact.NEUTRAL
    if delta >= -STRONG_THRESHOLD:
        return Impact.MODERATE_NEGATIVE
    return Impact.STRONG_NEGATIVE


def interpret(impact: Impact) -> str:
    return INTERPRETATIONS[impact]


def aggregate(trials: list[Trial], attempted: int | None = None) -> AggregateReport:
    """Compute the AggregateReport over every trial that carries a score.

    ``attempted`` defaults to len(trials).

    Raises:
        AggregationError: if no trial carries a score.
    """
    scores: list[ScoreRecord] = [t.score for t in trials if t.score is not None]
    attempted_trials = len(trials) if attempted is None else attempted
    if not scores:
        raise AggregationError(attempted=attempted_trials)

    dimensions: list[DimensionSummary] = []
    for dimension in DIMENSIONS:
        control = statistics.mean(s.control.get(dimension) for s in scores)
        treatment = statistics.mean(s.treatment.get(dimension) for s in scores)
        delta = treatment - control
        dimensions.append(
            DimensionSummary(
                dimension=dimension,
                control=control,
                treatment=treatment,
                delta=delta,
                impact=classify_delta(delta=delta),
            )
        )

    overall_control = statistics.mean(d.control for d in dimensions)
    overall_treatment = statistics.mean(d.treatment for d in dimensions)
    overall_delta = overall_treatment - overall_control
    overall_impact = classify_delta(delta=overall_delta)

    return AggregateReport(
        valid_trials=len(scores),
        attempted_trials=attempted_trials,
        dimensions=dimensions,
        overall=OverallSummary(
            control=overall_control,
            treatment=overall_treatment,
            delta=overall_delta,
            impact=overall_impact,
            interpretation=interpret(impact=overall_impact),
        ),
    )
