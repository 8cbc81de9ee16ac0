"""AgentJudge — judge implementation that reuses the agent under test's client."""

import time

from skill_ab.agent.domain.agent import Agent
from skill_ab.agent.infrastructure.errors import AgentInvocationError
from skill_ab.evaluation.domain.trial import Trial
from skill_ab.judge.domain.extraction import ScoreExtractionError, extract_score_record
from skill_ab.judge.domain.observer import JudgeObserver
from skill_ab.judge.domain.score import ScoreRecord
from skill_ab.judge.infrastructure.prompt import build_judge_prompt

_EXCERPT_CHARS = 200


class AgentJudge:
    """Scores a trial by invoking the agent, acting as evaluator, exactly once.

    Invocation and extraction failures both yield None: the trial drops out of
    aggregation and the run continues.
    """

    def __init__(
        self,
        agent: Agent,
        model: str,
        budget_usd: float,
        observer: JudgeObserver,
    ) -> None:
        self._agent = agent
        self._model = model
        self._budget_usd = budget_usd
        self._observer = observer

    async def score(self, trial: Trial) -> ScoreRecord | None:
        self._observer.judge_scoring_started(trial_index=trial.index, model=self._model)

        start = time.monotonic()
        try:
            result = await self._agent.invoke(
                prompt=build_judge_prompt(trial=trial),
                model=self._model,
                budget_usd=self._budget_usd,
                label=f"judge-{trial.index}",
            )
        except AgentInvocationError as exc:
            self._observer.judge_scoring_failed(
                trial_index=trial.index, reason=exc.reason
            )
            return None

        return record_or_none(
            raw=result.response,
            trial_index=trial.index,
            started_at=start,
            observer=self._observer,
        )


def record_or_none(
    raw: str, trial_index: int, started_at: float, observer: JudgeObserver
) -> ScoreRecord | None:
    """Extract a ScoreRecord from raw judge output, reporting the outcome."""
    try:
        record = extract_score_record(text=raw)
    except ScoreExtractionError as exc:
        observer.judge_extraction_failed(
            trial_index=trial_index,
            reason=exc.reason,
            raw_excerpt=raw[-_EXCERPT_CHARS:],
        )
        return None

    observer.judge_scoring_completed(
        trial_index=trial_index,
        duration_ms=int((time.monotonic() - started_at) * 1000),
    )
    return record
