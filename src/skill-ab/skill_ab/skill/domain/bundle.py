"""SkillBundle — a located skill directory and the plugin that ships it."""

from pathlib import Path

from pydantic import BaseModel

from skill_ab.skill.domain.metadata import SkillMetadata


class SkillBundle(BaseModel, frozen=True):
    """A parsed skill together with the plugin root handed to treatment runs."""

    skill_dir: Path
    plugin_dir: Path
    metadata: SkillMetadata
