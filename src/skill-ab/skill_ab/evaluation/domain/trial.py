"""Trial and RunOutcome — one prompt run through control and treatment."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from skill_ab.judge.domain.score import ScoreRecord

type Role = Literal["control", "treatment"]


def error_sentinel(role: Role) -> str:
    """Response text recorded in place of a failed run."""
    return f"ERROR: {role} failed"


class RunOutcome(BaseModel):
    """The response of one side of a trial, or the sentinel if it failed."""

    model_config = ConfigDict(frozen=True)

    role: Role
    response: str
    failed: bool = False
    reason: str | None = None
    cost_usd: float | None = None
    duration_ms: int | None = None

    @classmethod
    def failure(cls, role: Role, reason: str) -> "RunOutcome":
        return cls(role=role, response=error_sentinel(role), failed=True, reason=reason)


class Trial(BaseModel):
    """One evaluation prompt with its control and treatment outcomes.

    Created by the trial runner without a score. The judge's result is
    attached with with_score(), which returns a new Trial.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    prompt: str = Field(min_length=1)
    control: RunOutcome
    treatment: RunOutcome
    score: ScoreRecord | None = None

    def with_score(self, score: ScoreRecord | None) -> "Trial":
        return self.model_copy(update={"score": score})
