"""ConfigObserver port — events emitted while resolving run configuration."""

from pathlib import Path
from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, path: Path) -> None: ...

    def config_judge_temperature_warning(self, temperature: float) -> None: ...
