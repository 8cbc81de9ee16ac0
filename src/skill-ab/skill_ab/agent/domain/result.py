"""AgentResult value object — the outcome of a single agent invocation."""

from pydantic import BaseModel, ConfigDict


class UsageMetrics(BaseModel, frozen=True):
    """Token usage reported by the SDK for one invocation."""

    model_config = ConfigDict(frozen=True)

    input_tokens: int | None
    output_tokens: int | None


class AgentResult(BaseModel, frozen=True):
    """Immutable value object capturing the outcome of one agent invocation."""

    model_config = ConfigDict(frozen=True)

    response: str
    cost_usd: float | None
    duration_ms: int
    num_turns: int
    usage: UsageMetrics | None = None
