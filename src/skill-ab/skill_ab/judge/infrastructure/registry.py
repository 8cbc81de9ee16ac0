"""Judge registry — maps the configured backend name to a Judge."""

import litellm

from skill_ab.agent.domain.agent import Agent
from skill_ab.config.domain.request import EvaluationRequest
from skill_ab.config.infrastructure.errors import ConfigValidationError
from skill_ab.judge.domain.judge import Judge
from skill_ab.judge.domain.observer import JudgeObserver
from skill_ab.judge.infrastructure.agent_judge import AgentJudge
from skill_ab.judge.infrastructure.litellm import LiteLLMJudge


def create_judge(
    request: EvaluationRequest, agent: Agent, observer: JudgeObserver
) -> Judge:
    """Return the Judge selected by request.execution.judge_backend.

    Raises:
        ConfigValidationError: if the backend name is not known.
    """
    backend = request.execution.judge_backend
    if backend == "agent":
        return AgentJudge(
            agent=agent,
            model=request.judge_model,
            budget_usd=request.run_budget_usd,
            observer=observer,
        )
    if backend == "litellm":
        litellm.suppress_debug_info = True
        return LiteLLMJudge(
            model=request.judge_model,
            observer=observer,
            temperature=request.execution.judge_temperature,
            timeout_seconds=request.execution.timeout_seconds,
        )
    raise ConfigValidationError(f"unsupported judge backend '{backend}'")
