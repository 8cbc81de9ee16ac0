"""SkillMetadata — the typed view of a skill bundle's SKILL.md."""

from pydantic import BaseModel, Field


class SkillMetadata(BaseModel, frozen=True):
    """Immutable metadata extracted once from a skill bundle.

    Missing sections are empty strings or empty lists rather than errors, so
    downstream consumers never need to special-case a sparse SKILL.md.
    """

    name: str = Field(min_length=1)
    description: str = ""
    when_to_use: str = ""
    common_mistakes: str = ""
    core_patterns: str = ""
    trigger_phrases: list[str] = Field(default_factory=list)
    when_to_use_bullets: list[str] = Field(default_factory=list)
