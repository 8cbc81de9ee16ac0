"""Structlog implementation of the JudgeObserver port."""

import structlog


class StructlogJudgeObserver:
    """Delegates judge domain events to structlog.

    Satisfies the JudgeObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_scoring_started(self, trial_index: int, model: str) -> None:
        self._log.info("judge.scoring_started", trial_index=trial_index, model=model)

    def judge_scoring_completed(self, trial_index: int, duration_ms: int) -> None:
        self._log.info(
            "judge.scoring_completed",
            trial_index=trial_index,
            duration_ms=duration_ms,
        )

    def judge_scoring_failed(self, trial_index: int, reason: str) -> None:
        self._log.error("judge.scoring_failed", trial_index=trial_index, reason=reason)

    def judge_extraction_failed(
        self, trial_index: int, reason: str, raw_excerpt: str
    ) -> None:
        self._log.warning(
            "judge.extraction_failed",
            trial_index=trial_index,
            reason=reason,
            raw_excerpt=raw_excerpt,
        )

    def judge_high_temperature_warned(self, temperature: float) -> None:
        self._log.warning(
            "judge.high_temperature_warned",
            temperature=temperature,
            message="Judge temperature > 0.0 may produce non-deterministic scoring",
        )
