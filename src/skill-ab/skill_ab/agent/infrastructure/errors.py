"""Error types raised by agent infrastructure."""

from skill_ab.core.errors import SkillAbError


class AgentInvocationError(SkillAbError):
    """Raised when the agent cannot be invoked or returns an unusable response."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        self.reason = reason
        super().__init__(f"Failed to invoke agent: {reason}", retriable=retriable)
