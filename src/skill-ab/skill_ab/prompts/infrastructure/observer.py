"""Structlog implementation of the PromptObserver port."""

import structlog


class StructlogPromptObserver:
    """Delegates prompt generation events to structlog.

    Satisfies the PromptObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def prompt_generation_completed(self, generated: int, requested: int) -> None:
        self._log.info(
            "prompts.generation_completed", generated=generated, requested=requested
        )

    def prompt_generation_degraded(
        self, generated: int, requested: int, reason: str
    ) -> None:
        self._log.warning(
            "prompts.generation_degraded",
            generated=generated,
            requested=requested,
            reason=reason,
            message="topping up with fallback prompts",
        )

    def prompts_selected(self, count: int, pool_size: int) -> None:
        self._log.info("prompts.selected", count=count, pool_size=pool_size)
