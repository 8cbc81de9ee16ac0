"""EvaluationSummary — every trial of a finished run, ready for aggregation."""

from pydantic import BaseModel, Field

from skill_ab.evaluation.domain.trial import Trial


class EvaluationSummary(BaseModel, frozen=True):
    """Immutable outcome of an evaluation run.

    ``trials`` holds every trial that was started, scored or not, sorted by
    index. Trials never started because the budget or deadline ran out are
    listed in ``skipped_trials``.
    """

    run_id: str = Field(min_length=1)
    skill_name: str = Field(min_length=1)
    trials: list[Trial]
    skipped_trials: list[int] = Field(default_factory=list)
    spent_usd: float = 0.0
    elapsed_seconds: float = 0.0

    @property
    def attempted(self) -> int:
        return len(self.trials)

    @property
    def valid(self) -> int:
        return sum(1 for t in self.trials if t.score is not None)
