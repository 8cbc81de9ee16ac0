"""EvaluationRequest and ExecutionConfig — the parameters of one A/B run."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator

# Control run, treatment run and one judgment per trial.
CALLS_PER_TRIAL = 3

DEFAULT_ALLOWED_TOOLS: tuple[str, ...] = ("Read", "Write", "Edit", "Bash", "Glob", "Grep")

type JudgeBackend = Literal["agent", "litellm"]


class ExecutionConfig(BaseModel, frozen=True):
    """How trials are scheduled and bounded."""

    max_concurrent: int = Field(default=1, ge=1)
    timeout_seconds: float = Field(default=600.0, gt=0)
    deadline_seconds: float | None = Field(default=None, gt=0)
    seed: int | None = None
    allowed_tools: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_TOOLS))
    judge_backend: JudgeBackend = "agent"
    judge_temperature: float = Field(default=0.0, ge=0.0)


class EvaluationRequest(BaseModel, frozen=True):
    """Root parameters for an evaluation; immutable once constructed."""

    skill_dir: Path
    trials: int = Field(default=3, ge=1)
    model: str = Field(default="haiku", min_length=1)
    judge_model: str = Field(default="sonnet", min_length=1)
    budget_usd: float = Field(default=2.00, gt=0)
    output_dir: Path | None = None
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)

    @property
    def run_budget_usd(self) -> float:
        """Per-invocation cap: the total split over every call of every trial."""
        return self.budget_usd / (self.trials * CALLS_PER_TRIAL)

    @property
    def trial_budget_usd(self) -> float:
        return self.run_budget_usd * CALLS_PER_TRIAL

    @model_validator(mode="after")
    def _check_run_budget(self) -> "EvaluationRequest":
        if self.run_budget_usd <= 0:
            raise ValueError("per-run budget must be positive")
        return self
