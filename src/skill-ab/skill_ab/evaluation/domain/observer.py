"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during an evaluation run.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def evaluation_started(
        self,
        run_id: str,
        skill_name: str,
        total_trials: int,
        max_concurrent: int,
        run_budget_usd: float,
    ) -> None: ...

    def evaluation_completed(
        self,
        run_id: str,
        attempted: int,
        valid: int,
        spent_usd: float,
        elapsed_seconds: float,
    ) -> None: ...

    def evaluation_progress(self, run_id: str, completed: int, total: int) -> None: ...

    def trial_started(self, run_id: str, trial_index: int, prompt: str) -> None: ...

    def trial_run_failed(
        self, run_id: str, trial_index: int, role: str, reason: str
    ) -> None: ...

    def trial_completed(
        self,
        run_id: str,
        trial_index: int,
        control_failed: bool,
        treatment_failed: bool,
    ) -> None: ...

    def trial_judged(self, run_id: str, trial_index: int, scored: bool) -> None: ...

    def trial_skipped(self, run_id: str, trial_index: int, reason: str) -> None: ...
