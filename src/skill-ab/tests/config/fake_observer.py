"""Fake ConfigObserver for use in tests — records events without mocking."""

from pathlib import Path


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[Path] = []
        self.warnings: list[float] = []

    def config_loaded(self, path: Path) -> None:
        self.loaded.append(path)

    def config_judge_temperature_warning(self, temperature: float) -> None:
        self.warnings.append(temperature)
