"""LiteLLMJudge — judge implementation that calls a model through LiteLLM."""

import time

import litellm

from skill_ab.evaluation.domain.trial import Trial
from skill_ab.judge.domain.observer import JudgeObserver
from skill_ab.judge.domain.score import ScoreRecord
from skill_ab.judge.infrastructure.agent_judge import record_or_none
from skill_ab.judge.infrastructure.prompt import build_judge_prompt

_SYSTEM_PROMPT = (
    "You are an impartial expert reviewer comparing two responses to the same"
    " developer request. Respond with the requested JSON object and nothing else."
)


class LiteLLMJudge:
    """Judge backend for evaluator models reachable through LiteLLM.

    The response is still run through brace-span extraction rather than a
    structured response_format, so providers without JSON mode work too.
    """

    def __init__(
        self,
        model: str,
        observer: JudgeObserver,
        temperature: float = 0.0,
        timeout_seconds: float | None = None,
    ) -> None:
        self._model = model
        self._observer = observer
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds

        if temperature > 0.0:
            self._observer.judge_high_temperature_warned(temperature=temperature)

    async def score(self, trial: Trial) -> ScoreRecord | None:
        self._observer.judge_scoring_started(trial_index=trial.index, model=self._model)

        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=self._model,
                temperature=self._temperature,
                timeout=self._timeout_seconds,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": build_judge_prompt(trial=trial)},
                ],
            )
        except Exception as exc:
            self._observer.judge_scoring_failed(trial_index=trial.index, reason=str(exc))
            return None

        raw_content = response.choices[0].message.content or ""
        return record_or_none(
            raw=raw_content,
            trial_index=trial.index,
            started_at=start,
            observer=self._observer,
        )
