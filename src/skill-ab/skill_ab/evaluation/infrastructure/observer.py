"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog

_PROMPT_PREVIEW_CHARS = 80


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluation_started(
        self,
        run_id: str,
        skill_name: str,
        total_trials: int,
        max_concurrent: int,
        run_budget_usd: float,
    ) -> None:
        self._log.info(
            "evaluation.started",
            run_id=run_id,
            skill_name=skill_name,
            total_trials=total_trials,
            max_concurrent=max_concurrent,
            run_budget_usd=round(run_budget_usd, 4),
        )

    def evaluation_completed(
        self,
        run_id: str,
        attempted: int,
        valid: int,
        spent_usd: float,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "evaluation.completed",
            run_id=run_id,
            attempted=attempted,
            valid=valid,
            spent_usd=round(spent_usd, 4),
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def evaluation_progress(self, run_id: str, completed: int, total: int) -> None:
        self._log.info(
            "evaluation.progress",
            run_id=run_id,
            completed=completed,
            total=total,
            percent=round(100.0 * completed / total, 1) if total else 0.0,
        )

    def trial_started(self, run_id: str, trial_index: int, prompt: str) -> None:
        self._log.info(
            "evaluation.trial.started",
            run_id=run_id,
            trial_index=trial_index,
            prompt=prompt[:_PROMPT_PREVIEW_CHARS],
        )

    def trial_run_failed(
        self, run_id: str, trial_index: int, role: str, reason: str
    ) -> None:
        self._log.warning(
            "evaluation.trial.run_failed",
            run_id=run_id,
            trial_index=trial_index,
            role=role,
            reason=reason,
        )

    def trial_completed(
        self,
        run_id: str,
        trial_index: int,
        control_failed: bool,
        treatment_failed: bool,
    ) -> None:
        self._log.info(
            "evaluation.trial.completed",
            run_id=run_id,
            trial_index=trial_index,
            control_failed=control_failed,
            treatment_failed=treatment_failed,
        )

    def trial_judged(self, run_id: str, trial_index: int, scored: bool) -> None:
        self._log.info(
            "evaluation.trial.judged",
            run_id=run_id,
            trial_index=trial_index,
            scored=scored,
        )

    def trial_skipped(self, run_id: str, trial_index: int, reason: str) -> None:
        self._log.warning(
            "evaluation.trial.skipped",
            run_id=run_id,
            trial_index=trial_index,
            reason=reason,
        )
