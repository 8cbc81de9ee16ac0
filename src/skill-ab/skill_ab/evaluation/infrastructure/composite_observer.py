"""CompositeEvaluationObserver — fans out all events to a list of observers."""

from skill_ab.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def evaluation_started(
        self,
        run_id: str,
        skill_name: str,
        total_trials: int,
        max_concurrent: int,
        run_budget_usd: float,
    ) -> None:
        for obs in self._observers:
            obs.evaluation_started(
                run_id=run_id,
                skill_name=skill_name,
                total_trials=total_trials,
                max_concurrent=max_concurrent,
                run_budget_usd=run_budget_usd,
            )

    def evaluation_completed(
        self,
        run_id: str,
        attempted: int,
        valid: int,
        spent_usd: float,
        elapsed_seconds: float,
    ) -> None:
        for obs in self._observers:
            obs.evaluation_completed(
                run_id=run_id,
                attempted=attempted,
                valid=valid,
                spent_usd=spent_usd,
                elapsed_seconds=elapsed_seconds,
            )

    def evaluation_progress(self, run_id: str, completed: int, total: int) -> None:
        for obs in self._observers:
            obs.evaluation_progress(run_id=run_id, completed=completed, total=total)

    def trial_started(self, run_id: str, trial_index: int, prompt: str) -> None:
        for obs in self._observers:
            obs.trial_started(run_id=run_id, trial_index=trial_index, prompt=prompt)

    def trial_run_failed(
        self, run_id: str, trial_index: int, role: str, reason: str
    ) -> None:
        for obs in self._observers:
            obs.trial_run_failed(
                run_id=run_id, trial_index=trial_index, role=role, reason=reason
            )

    def trial_completed(
        self,
        run_id: str,
        trial_index: int,
        control_failed: bool,
        treatment_failed: bool,
    ) -> None:
        for obs in self._observers:
            obs.trial_completed(
                run_id=run_id,
                trial_index=trial_index,
                control_failed=control_failed,
                treatment_failed=treatment_failed,
            )

    def trial_judged(self, run_id: str, trial_index: int, scored: bool) -> None:
        for obs in self._observers:
            obs.trial_judged(run_id=run_id, trial_index=trial_index, scored=scored)

    def trial_skipped(self, run_id: str, trial_index: int, reason: str) -> None:
        for obs in self._observers:
            obs.trial_skipped(run_id=run_id, trial_index=trial_index, reason=reason)
