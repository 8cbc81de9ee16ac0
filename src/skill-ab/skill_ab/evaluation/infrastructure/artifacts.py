"""FileArtifactStore — writes run evidence under an evaluation directory."""

import json
from pathlib import Path

from skill_ab.judge.domain.extraction import score_record_to_json
from skill_ab.judge.domain.score import ScoreRecord
from skill_ab.skill.domain.metadata import SkillMetadata

RESULTS_DIRNAME = "results"


class FileArtifactStore:
    """Satisfies the ArtifactStore protocol with plain files.

    Layout::

        <eval_dir>/metadata.json
        <eval_dir>/prompts.txt
        <eval_dir>/results/trial-<i>-prompt.txt
        <eval_dir>/results/trial-<i>-control.txt
        <eval_dir>/results/trial-<i>-treatment.txt
        <eval_dir>/results/trial-<i>-scores.json
    """

    def __init__(self, eval_dir: Path) -> None:
        self._eval_dir = eval_dir
        self._results_dir = eval_dir / RESULTS_DIRNAME
        self._results_dir.mkdir(parents=True, exist_ok=True)

    @property
    def eval_dir(self) -> Path:
        return self._eval_dir

    @property
    def results_dir(self) -> Path:
        return self._results_dir

    def save_metadata(self, metadata: SkillMetadata) -> None:
        data = metadata.model_dump(
            include={"name", "description", "when_to_use", "common_mistakes", "core_patterns"}
        )
        self._write(self._eval_dir / "metadata.json", json.dumps(data, indent=2))

    def save_prompts(self, prompts: list[str]) -> None:
        self._write(self._eval_dir / "prompts.txt", "\n".join(prompts) + "\n")

    def save_trial_responses(
        self, index: int, prompt: str, control: str, treatment: str
    ) -> None:
        self._write(self._trial_path(index, "prompt.txt"), prompt + "\n")
        self._write(self._trial_path(index, "control.txt"), control + "\n")
        self._write(self._trial_path(index, "treatment.txt"), treatment + "\n")

    def save_trial_scores(self, index: int, score: ScoreRecord | None) -> None:
        self._write(
            self._trial_path(index, "scores.json"),
            json.dumps(score_record_to_json(record=score), indent=2),
        )

    def _trial_path(self, index: int, suffix: str) -> Path:
        return self._results_dir / f"trial-{index}-{suffix}"

    def _write(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")
