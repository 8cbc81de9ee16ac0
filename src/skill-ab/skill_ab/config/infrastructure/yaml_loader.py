"""YAML settings loader and request assembly."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skill_ab.config.domain.observer import ConfigObserver
from skill_ab.config.domain.request import EvaluationRequest
from skill_ab.config.domain.settings import HarnessSettings
from skill_ab.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

_EXECUTION_FIELDS = (
    "max_concurrent",
    "timeout_seconds",
    "deadline_seconds",
    "seed",
    "allowed_tools",
    "judge_backend",
    "judge_temperature",
)


class YamlSettingsLoader:
    """Loads HarnessSettings from a YAML file, substituting ${ENV_VAR}s."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> HarnessSettings:
        """
        Load and validate a settings file.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} reference is unset (all collected).
            ConfigValidationError: if the settings violate the schema.
        """
        raw = _parse_yaml(path=path)
        missing: list[str] = []
        interpolated = _interpolate(data=raw, missing=missing)
        if missing:
            raise MissingEnvVarsError(missing)

        try:
            settings = HarnessSettings.model_validate(interpolated or {})
        except ValidationError as exc:
            raise ConfigValidationError(str(exc)) from exc

        self._observer.config_loaded(path=path)
        return settings


def build_request(
    skill_dir: Path,
    settings: HarnessSettings | None = None,
    overrides: dict[str, Any] | None = None,
    observer: ConfigObserver | None = None,
) -> EvaluationRequest:
    """Merge built-in defaults, file settings and explicit overrides.

    Overrides whose value is None are treated as "not given".

    Raises:
        ConfigValidationError: if the merged values are invalid.
    """
    merged: dict[str, Any] = {}
    if settings is not None:
        merged.update(settings.model_dump(exclude_none=True))
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    execution = {k: merged.pop(k) for k in _EXECUTION_FIELDS if k in merged}
    try:
        request = EvaluationRequest.model_validate(
            {**merged, "skill_dir": skill_dir, "execution": execution}
        )
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc

    if observer is not None and request.execution.judge_temperature > 0.0:
        observer.config_judge_temperature_warning(
            temperature=request.execution.judge_temperature
        )
    return request


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason="invalid YAML") from exc


def _interpolate(data: Any, missing: list[str]) -> Any:
    """Return a copy of data with ${ENV_VAR}s substituted; record unset names."""
    if isinstance(data, str):

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in os.environ:
                if name not in missing:
                    missing.append(name)
                return match.group(0)
            return os.environ[name]

        return _ENV_VAR_PATTERN.sub(_substitute, data)
    if isinstance(data, list):
        return [_interpolate(data=item, missing=missing) for item in data]
    if isinstance(data, dict):
        return {key: _interpolate(data=value, missing=missing) for key, value in data.items()}
    return data
