"""Error types raised by config infrastructure."""

from pathlib import Path

from skill_ab.core.errors import SkillAbError


class MissingEnvVarsError(SkillAbError):
    """Raised when a settings file references unset environment variables."""

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        var_list = ", ".join(sorted(missing_vars))
        super().__init__(
            f"Failed to load config: missing environment variables: {var_list}"
        )


class ConfigValidationError(SkillAbError):
    """Raised when settings or options fail validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate config: {reason}")


class ConfigLoadError(SkillAbError):
    """Raised when the settings file cannot be opened or parsed."""

    def __init__(self, path: Path, reason: str = "file not found") -> None:
        super().__init__(f"Failed to load config: {reason}: {path}")
