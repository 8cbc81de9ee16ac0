"""PromptGenerator — builds the pool of evaluation prompts for a skill."""

import random

from skill_ab.agent.domain.agent import Agent
from skill_ab.agent.infrastructure.errors import AgentInvocationError
from skill_ab.prompts.domain.observer import PromptObserver
from skill_ab.prompts.domain.selection import (
    fallback_prompts,
    merge_pools,
    parse_prompt_lines,
    select_prompts,
)
from skill_ab.skill.domain.metadata import SkillMetadata


def build_generation_prompt(metadata: SkillMetadata, count: int) -> str:
    """Return the instruction asking the agent for count candidate prompts."""
    return (
        f"Given this skill metadata, generate exactly {count} realistic evaluation"
        " prompts that a developer would ask. Each prompt should test whether the"
        " skill improves Claude's response. Output one prompt per line, no"
        " numbering, no quotes.\n\n"
        f"Skill: {metadata.name}\n"
        f"Description: {metadata.description}\n"
        f"When to use: {metadata.when_to_use}"
    )


class PromptGenerator:
    """Asks the agent for realistic prompts, falling back to templated ones.

    The fallback pool is the correctness backstop: whatever the agent returns,
    generate() always yields exactly ``count`` non-empty prompts.
    """

    def __init__(
        self,
        agent: Agent,
        model: str,
        budget_usd: float,
        observer: PromptObserver,
        rng: random.Random | None = None,
    ) -> None:
        self._agent = agent
        self._model = model
        self._budget_usd = budget_usd
        self._observer = observer
        self._rng = rng

    async def generate(self, metadata: SkillMetadata, count: int) -> list[str]:
        """Return exactly count prompts for the given skill."""
        pool = await self.build_pool(metadata=metadata, count=count)
        selected = select_prompts(pool=pool, count=count, rng=self._rng)
        self._observer.prompts_selected(count=len(selected), pool_size=len(pool))
        return selected

    async def build_pool(self, metadata: SkillMetadata, count: int) -> list[str]:
        """Return the candidate pool: generated prompts, topped up if short."""
        requested = count * 2
        generated: list[str] = []
        reason = ""
        try:
            result = await self._agent.invoke(
                prompt=build_generation_prompt(metadata=metadata, count=requested),
                model=self._model,
                budget_usd=self._budget_usd,
                label="prompt-generation",
            )
            generated = parse_prompt_lines(raw=result.response)
        except AgentInvocationError as exc:
            reason = exc.reason

        if len(generated) >= count:
            self._observer.prompt_generation_completed(
                generated=len(generated), requested=requested
            )
            return generated

        self._observer.prompt_generation_degraded(
            generated=len(generated),
            requested=requested,
            reason=reason or f"only {len(generated)} usable prompt(s)",
        )
        return merge_pools(generated, fallback_prompts(metadata=metadata))
