"""Error types raised while locating and parsing a skill bundle."""

from pathlib import Path

from skill_ab.core.errors import SkillAbError


class SkillNotFoundError(SkillAbError):
    """Raised when the skill directory has no SKILL.md."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to load skill: SKILL.md not found at {path}")


class SkillParseError(SkillAbError):
    """Raised when SKILL.md exists but is unreadable or carries no skill name."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse skill {path}: {reason}")


class PluginDirNotFoundError(SkillAbError):
    """Raised when no ancestor of the skill directory is a plugin root."""

    def __init__(self, skill_dir: Path) -> None:
        super().__init__(
            f"Failed to locate plugin directory: no .claude-plugin/plugin.json"
            f" above {skill_dir}"
        )
