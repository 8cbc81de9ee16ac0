"""AgentObserver port — domain events emitted during agent invocations."""

from typing import Protocol


class AgentObserver(Protocol):
    """Observer port for agent domain events.

    ``label`` names the role of the call, e.g. ``trial-2-control`` or
    ``judge-2``, so that events can be correlated without extra context.
    """

    def agent_invocation_started(self, label: str, model: str) -> None: ...

    def agent_invocation_completed(
        self,
        label: str,
        duration_ms: int,
        num_turns: int,
        cost_usd: float | None,
    ) -> None: ...

    def agent_invocation_failed(self, label: str, reason: str) -> None: ...
