"""DimensionScores and ScoreRecord — structured output of one judgment."""

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

DIMENSIONS: Final[tuple[str, ...]] = (
    "accuracy",
    "completeness",
    "best_practices",
    "error_avoidance",
    "specificity",
)

MIN_SCORE: Final[float] = 0.0
MAX_SCORE: Final[float] = 10.0


class DimensionScores(BaseModel):
    """One side's score on each of the five fixed dimensions (0-10)."""

    model_config = ConfigDict(frozen=True)

    accuracy: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    completeness: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    best_practices: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    error_avoidance: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    specificity: float = Field(ge=MIN_SCORE, le=MAX_SCORE)

    def get(self, dimension: str) -> float:
        if dimension not in DIMENSIONS:
            raise KeyError(dimension)
        return float(getattr(self, dimension))


class ScoreRecord(BaseModel):
    """Control and treatment scores for one trial.

    A ScoreRecord is always complete; an unusable judgment produces no record
    at all rather than a partial one.
    """

    model_config = ConfigDict(frozen=True)

    control: DimensionScores
    treatment: DimensionScores
