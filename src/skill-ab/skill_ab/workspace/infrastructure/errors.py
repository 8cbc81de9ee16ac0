"""Error types raised by workspace infrastructure."""

from skill_ab.core.errors import SkillAbError


class WorkspaceError(SkillAbError):
    """Raised when a scratch workspace cannot be created or seeded."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to create workspace: {reason}")
