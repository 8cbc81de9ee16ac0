"""HarnessSettings — defaults read from an optional YAML settings file."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from skill_ab.config.domain.request import JudgeBackend


class HarnessSettings(BaseModel, frozen=True):
    """Every field is optional; unset fields fall through to built-in defaults."""

    model_config = ConfigDict(extra="forbid")

    trials: int | None = None
    model: str | None = None
    judge_model: str | None = None
    budget_usd: float | None = None
    output_dir: Path | None = None
    max_concurrent: int | None = None
    timeout_seconds: float | None = None
    deadline_seconds: float | None = None
    seed: int | None = None
    allowed_tools: list[str] | None = None
    judge_backend: JudgeBackend | None = None
    judge_temperature: float | None = None
