"""Assembles the ordered question set for one quiz session."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import random

from recall_quiz.constants.quiz_constants import DEFAULT_QUESTION_COUNT, MIN_NAMED_PROFILES
from recall_quiz.core.models import MemoryEntry, PersonProfile, QuizQuestion
from recall_quiz.core.question_factory import QuestionFactory

logger = logging.getLogger(__name__)


def compose_questions(
    profiles: Sequence[PersonProfile],
    memories: Sequence[MemoryEntry],
    target_count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """Blend profile- and memory-sourced questions into at most ``target_count``.

    Memory questions take at most ``max(1, target_count // 3)`` slots and the rest
    go to profile questions. An empty list means no quiz is available: fewer than
    two named profiles are on the roster.
    """
    rng = rng or random.Random()
    valid_profiles = [profile for profile in profiles if profile.is_named]
    if len(valid_profiles) < MIN_NAMED_PROFILES:
        logger.info(
            "No quiz available: %d named profile(s), need at least %d",
            len(valid_profiles),
            MIN_NAMED_PROFILES,
        )
        return []
    if target_count <= 0:
        return []

    factory = QuestionFactory(rng)
    profile_questions: list[QuizQuestion] = []
    for profile in valid_profiles:
        profile_questions.extend(factory.from_profile(profile, valid_profiles))

    memory_questions: list[QuizQuestion] = []
    for entry in memories:
        if entry.is_quizzable:
            memory_questions.extend(factory.from_memory(entry, valid_profiles, memories))

    rng.shuffle(profile_questions)
    rng.shuffle(memory_questions)

    memory_slots = min(len(memory_questions), max(1, target_count // 3))
    profile_slots = min(len(profile_questions), target_count - memory_slots)

    combined = profile_questions[:profile_slots] + memory_questions[:memory_slots]
    rng.shuffle(combined)

    logger.debug(
        "Composed %d question(s): %d from profiles (of %d), %d from memories (of %d)",
        len(combined[:target_count]),
        profile_slots,
        len(profile_questions),
        memory_slots,
        len(memory_questions),
    )
    return combined[:target_count]
