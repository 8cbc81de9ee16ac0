"""Judge Protocol — structural interface for all judge implementations."""

from typing import Protocol

from skill_ab.evaluation.domain.trial import Trial
from skill_ab.judge.domain.score import ScoreRecord


class Judge(Protocol):
    """Structural interface satisfied by any judge implementation.

    score() returns None when the judgment is unusable; it never raises for
    invocation or extraction failures.
    """

    async def score(self, trial: Trial) -> ScoreRecord | None: ...
