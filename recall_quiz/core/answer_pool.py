"""Selection of distinct wrong answers from real data, padded with fallback values."""

from __future__ import annotations

from collections.abc import Iterable
import random

from recall_quiz.constants.quiz_constants import WRONG_ANSWER_COUNT
from recall_quiz.core.models import has_value


def _trimmed(values: Iterable[str]) -> list[str]:
    return [value.strip() for value in values if value is not None]


def select_wrong_answers(
    correct: str,
    pool: Iterable[str],
    fallback: Iterable[str],
    count: int = WRONG_ANSWER_COUNT,
    rng: random.Random | None = None,
) -> list[str]:
    """Pick ``count`` distinct wrong answers for ``correct``.

    Real values from ``pool`` always come first (in shuffled order); the fallback
    vocabulary only tops up what the pool cannot supply. The result is shorter
    than ``count`` when pool and fallback together run dry, and callers treat
    that as "skip this question".
    """
    rng = rng or random.Random()
    correct = correct.strip()

    # Values are compared trimmed; dict.fromkeys keeps first-seen order for seeded shuffles.
    candidates = [
        value
        for value in dict.fromkeys(_trimmed(pool))
        if has_value(value) and value != correct
    ]
    rng.shuffle(candidates)

    if len(candidates) < count:
        chosen = set(candidates)
        extras = [
            value
            for value in dict.fromkeys(_trimmed(fallback))
            if has_value(value) and value != correct and value not in chosen
        ]
        rng.shuffle(extras)
        candidates.extend(extras)

    return candidates[:count]
