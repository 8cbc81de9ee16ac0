"""PromptObserver port — events emitted while building the evaluation prompt pool."""

from typing import Protocol


class PromptObserver(Protocol):
    """Observer port for prompt generation events."""

    def prompt_generation_completed(self, generated: int, requested: int) -> None: ...

    def prompt_generation_degraded(
        self, generated: int, requested: int, reason: str
    ) -> None: ...

    def prompts_selected(self, count: int, pool_size: int) -> None: ...
