"""Extraction of a ScoreRecord from free-form judge output.

Judges wrap their JSON in prose and markdown fences, and sometimes restate
the rubric's JSON template before answering. Extraction therefore takes the
*last* top-level JSON object in the response and validates it as a whole.
"""

import json
import math
from typing import Any

from skill_ab.core.errors import SkillAbError
from skill_ab.judge.domain.score import (
    DIMENSIONS,
    MAX_SCORE,
    MIN_SCORE,
    DimensionScores,
    ScoreRecord,
)

SIDES = ("control", "treatment")

_DECODER = json.JSONDecoder()


class ScoreExtractionError(SkillAbError):
    """Raised when judge output holds no complete, valid score object."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to extract scores: {reason}")


def extract_trailing_json_object(text: str) -> str | None:
    """Return the last top-level JSON object embedded in text, or None.

    Openers are tried right to left. An object nested inside a later-found
    one is skipped, and an opener that does not start a valid object (prose
    braces, templates, truncated output) is ignored. Every attempt stops at
    the first syntax error, so runs of stray braces stay cheap.
    """
    best: tuple[int, int] | None = None
    start = text.rfind("{")
    while start != -1:
        end = _decoded_object_end(text=text, start=start)
        if end is not None and (best is None or end > best[1]):
            best = (start, end)
        start = text.rfind("{", 0, start)
    if best is None:
        return None
    return text[best[0] : best[1]]


def extract_score_record(text: str) -> ScoreRecord:
    """Parse judge output into a complete ScoreRecord.

    A dimension key that is present with a null or non-numeric value counts as
    0; numeric values are clamped into [0, 10]. A missing key at any level
    rejects the whole record.

    Raises:
        ScoreExtractionError: if no complete score object can be recovered.
    """
    span = extract_trailing_json_object(text=text)
    if span is None:
        raise ScoreExtractionError(reason="no JSON object in judge response")

    data = json.loads(span)
    sides: dict[str, DimensionScores] = {}
    for side in SIDES:
        raw_side = data.get(side)
        if not isinstance(raw_side, dict):
            raise ScoreExtractionError(reason=f"missing '{side}' object")
        missing = [d for d in DIMENSIONS if d not in raw_side]
        if missing:
            raise ScoreExtractionError(
                reason=f"'{side}' is missing dimension(s): {', '.join(missing)}"
            )
        sides[side] = DimensionScores(
            **{d: _coerce_score(raw_side[d]) for d in DIMENSIONS}
        )

    return ScoreRecord(control=sides["control"], treatment=sides["treatment"])


def parse_score_record(text: str) -> ScoreRecord | None:
    """Like extract_score_record, but returns None instead of raising."""
    try:
        return extract_score_record(text=text)
    except ScoreExtractionError:
        return None


def score_record_to_json(record: ScoreRecord | None) -> dict[str, Any]:
    """Serialize a record for per-trial artifacts; absent records become {}."""
    if record is None:
        return {}
    return record.model_dump()


def _decoded_object_end(text: str, start: int) -> int | None:
    try:
        _, end = _DECODER.raw_decode(text, start)
    except (json.JSONDecodeError, RecursionError):
        return None
    return end


def _coerce_score(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return MIN_SCORE
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return MIN_SCORE
    else:
        return MIN_SCORE
    if math.isnan(number):
        return MIN_SCORE
    return min(max(number, MIN_SCORE), MAX_SCORE)
