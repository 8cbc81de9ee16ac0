"""JudgeObserver port — domain events emitted during judge invocations."""

from typing import Protocol


class JudgeObserver(Protocol):
    """Observer port for judge domain events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def judge_scoring_started(self, trial_index: int, model: str) -> None: ...

    def judge_scoring_completed(self, trial_index: int, duration_ms: int) -> None: ...

    def judge_scoring_failed(self, trial_index: int, reason: str) -> None: ...

    def judge_extraction_failed(
        self, trial_index: int, reason: str, raw_excerpt: str
    ) -> None: ...

    def judge_high_temperature_warned(self, temperature: float) -> None: ...
