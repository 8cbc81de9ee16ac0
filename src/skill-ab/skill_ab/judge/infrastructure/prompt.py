"""The evaluator prompt shared by every judge backend."""

from skill_ab.evaluation.domain.trial import Trial
from skill_ab.judge.domain.score import DIMENSIONS

_RUBRIC = """\
- accuracy: are the facts, APIs and commands correct?
- completeness: does the response cover everything the prompt asks for?
- best_practices: does it follow current idiomatic practice for the domain?
- error_avoidance: does it steer clear of common mistakes and pitfalls?
- specificity: is it concrete and actionable rather than generic?"""


def _json_template() -> str:
    side = ", ".join(f'"{d}": N' for d in DIMENSIONS)
    return f'{{\n  "control": {{{side}}},\n  "treatment": {{{side}}}\n}}'


def build_judge_prompt(trial: Trial) -> str:
    """Return the single evaluator prompt for one control/treatment pair."""
    return (
        "You are evaluating two AI responses to the same prompt. Score each on"
        " 5 dimensions (0-10 scale).\n\n"
        f"PROMPT: {trial.prompt}\n\n"
        f"RESPONSE A (control):\n{trial.control.response}\n\n"
        f"RESPONSE B (treatment):\n{trial.treatment.response}\n\n"
        f"Dimensions:\n{_RUBRIC}\n\n"
        "Score each response on these dimensions. Output ONLY valid JSON with"
        f" this exact structure:\n{_json_template()}"
    )
