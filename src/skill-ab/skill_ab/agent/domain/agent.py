"""Agent Protocol — structural interface for all agent implementations."""

from pathlib import Path
from typing import Protocol

from skill_ab.agent.domain.result import AgentResult


class Agent(Protocol):
    """Structural interface satisfied by any agent implementation.

    A single instance serves every call of an evaluation: control runs,
    treatment runs, prompt generation and judging. Per-call parameters carry
    everything that differs between those roles. ``plugin_dir`` is what turns a
    control call into a treatment call.

    Implementations raise AgentInvocationError on any failure and never retry.
    """

    async def invoke(
        self,
        prompt: str,
        model: str,
        budget_usd: float,
        cwd: Path | None = None,
        plugin_dir: Path | None = None,
        allowed_tools: list[str] | None = None,
        label: str = "agent",
    ) -> AgentResult: ...
