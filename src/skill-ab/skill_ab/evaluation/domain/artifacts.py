"""ArtifactStore port — durable per-trial evidence for auditing a run."""

from typing import Protocol

from skill_ab.judge.domain.score import ScoreRecord
from skill_ab.skill.domain.metadata import SkillMetadata


class ArtifactStore(Protocol):
    def save_metadata(self, metadata: SkillMetadata) -> None: ...

    def save_prompts(self, prompts: list[str]) -> None: ...

    def save_trial_responses(
        self, index: int, prompt: str, control: str, treatment: str
    ) -> None: ...

    def save_trial_scores(self, index: int, score: ScoreRecord | None) -> None: ...
