"""Tests for AgentJudge."""

import json

from skill_ab.agent.infrastructure.errors import AgentInvocationError
from skill_ab.judge.domain.score import DIMENSIONS
from skill_ab.judge.infrastructure.agent_judge import AgentJudge
from tests.agent.fake_agent import FakeAgent, make_result
from tests.evaluation.trial_factory import make_trial
from tests.judge.fake_observer import FakeJudgeObserver


def _scores_json(control: float = 4, treatment: float = 8) -> str:
    return json.dumps(
        {
            "control": {d: control for d in DIMENSIONS},
            "treatment": {d: treatment for d in DIMENSIONS},
        }
    )


def _make_judge(agent: FakeAgent) -> tuple[AgentJudge, FakeJudgeObserver]:
    observer = FakeJudgeObserver()
    judge = AgentJudge(agent=agent, model="sonnet", budget_usd=0.2, observer=observer)
    return judge, observer


class TestAgentJudgeScore:
    async def test_returns_record(self) -> None:
        agent = FakeAgent(result=make_result(response=f"Verdict:\n{_scores_json()}"))
        judge, observer = _make_judge(agent=agent)

        record = await judge.score(trial=make_trial(index=3))

        assert record is not None
        assert record.control.accuracy == 4.0
        assert record.treatment.accuracy == 8.0
        assert observer.scoring_started[0].trial_index == 3
        assert len(observer.scoring_completed) == 1

    async def test_invokes_exactly_once_with_judge_model_and_no_workspace(self) -> None:
        agent = FakeAgent(result=make_result(response=_scores_json()))
        judge, _ = _make_judge(agent=agent)

        await judge.score(trial=make_trial(index=2))

        assert len(agent.calls) == 1
        call = agent.calls[0]
        assert call.model == "sonnet"
        assert call.budget_usd == 0.2
        assert call.label == "judge-2"
        assert call.cwd is None
        assert call.plugin_dir is None

    async def test_invocation_failure_returns_none(self) -> None:
        agent = FakeAgent(side_effects=[AgentInvocationError(reason="rate limited")])
        judge, observer = _make_judge(agent=agent)

        assert await judge.score(trial=make_trial()) is None
        assert observer.scoring_failed[0].reason == "rate limited"

    async def test_unparseable_output_returns_none(self) -> None:
        agent = FakeAgent(result=make_result(response="B is better, trust me."))
        judge, observer = _make_judge(agent=agent)

        assert await judge.score(trial=make_trial()) is None
        assert observer.extraction_failed[0].raw_excerpt == "B is better, trust me."
        assert observer.scoring_completed == []

    async def test_raw_excerpt_is_bounded(self) -> None:
        agent = FakeAgent(result=make_result(response="x" * 1000))
        judge, observer = _make_judge(agent=agent)

        await judge.score(trial=make_trial())

        assert len(observer.extraction_failed[0].raw_excerpt) == 200
