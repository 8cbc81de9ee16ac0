"""Base exception class for all skill-ab-specific errors."""


class SkillAbError(Exception):
    """Base class for all skill-ab errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
