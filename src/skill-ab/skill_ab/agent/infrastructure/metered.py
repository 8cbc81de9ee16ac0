"""MeteredAgent — Agent decorator that reports every call's cost to a ledger."""

from pathlib import Path

from skill_ab.agent.domain.agent import Agent
from skill_ab.agent.domain.result import AgentResult
from skill_ab.evaluation.domain.budget import SpendLedger


class MeteredAgent:
    """Wraps an Agent so prompt generation, trial runs and judging all count
    against the same SpendLedger.

    Satisfies the Agent protocol structurally.
    """

    def __init__(self, inner: Agent, ledger: SpendLedger) -> None:
        self._inner = inner
        self._ledger = ledger

    async def invoke(
        self,
        prompt: str,
        model: str,
        budget_usd: float,
        cwd: Path | None = None,
        plugin_dir: Path | None = None,
        allowed_tools: list[str] | None = None,
        label: str = "agent",
    ) -> AgentResult:
        result = await self._inner.invoke(
            prompt=prompt,
            model=model,
            budget_usd=budget_usd,
            cwd=cwd,
            plugin_dir=plugin_dir,
            allowed_tools=allowed_tools,
            label=label,
        )
        self._ledger.record(cost_usd=result.cost_usd)
        return result
