"""Prompt pool parsing, fallback construction and selection."""

import random
import re

from skill_ab.skill.domain.metadata import SkillMetadata

# Leading "1.", "2)", "-", "*" or "•" list markers.
_LIST_MARKER_PATTERN = re.compile(r"^(?:\d+[.)]|[-*•])\s+")
_WRAPPING_QUOTES = "\"'“”"


def parse_prompt_lines(raw: str) -> list[str]:
    """Split a generated prompt list into clean, distinct, non-empty prompts."""
    prompts: list[str] = []
    for line in raw.splitlines():
        cleaned = _LIST_MARKER_PATTERN.sub("", line.strip()).strip()
        cleaned = cleaned.strip(_WRAPPING_QUOTES).strip()
        if cleaned and cleaned not in prompts:
            prompts.append(cleaned)
    return prompts


def fallback_prompts(metadata: SkillMetadata) -> list[str]:
    """Prompts derived from the skill alone; never empty.

    Trigger phrases and When-to-Use bullets come first because they are the
    most skill-specific; the name-templated prompts close the list and are
    always present.
    """
    name = metadata.name
    candidates = [f"I want to {phrase}" for phrase in metadata.trigger_phrases]
    candidates.extend(metadata.when_to_use_bullets)
    candidates.extend(
        [
            f"How do I use {name} effectively?",
            f"Show me best practices for {name}",
            f"Help me implement a project using {name}",
            f"Help me with {name}",
        ]
    )
    return merge_pools(candidates)


def merge_pools(*pools: list[str]) -> list[str]:
    """Concatenate pools, dropping blanks and duplicates while keeping order."""
    merged: list[str] = []
    for pool in pools:
        for prompt in pool:
            stripped = prompt.strip()
            if stripped and stripped not in merged:
                merged.append(stripped)
    return merged


def select_prompts(
    pool: list[str], count: int, rng: random.Random | None = None
) -> list[str]:
    """Pick exactly count prompts from pool.

    With an rng the pool is shuffled first; either way prompts are taken by
    modular index, so a count larger than the pool repeats prompts instead of
    failing.

    Raises:
        ValueError: if pool is empty or count is negative.
    """
    if not pool:
        raise ValueError("cannot select prompts from an empty pool")
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    ordered = rng.sample(pool, k=len(pool)) if rng is not None else list(pool)
    return [ordered[i % len(ordered)] for i in range(count)]
