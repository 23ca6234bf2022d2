"""Turns roster profiles and memory board entries into quiz questions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import random

from recall_quiz.constants.fallback_vocabulary import (
    FALLBACK_FACTS,
    FALLBACK_LOCATIONS,
    FALLBACK_NAMES,
    FALLBACK_RELATIONSHIPS,
    format_month_year,
    nearby_month_labels,
)
from recall_quiz.constants.quiz_constants import (
    MEMORY_RECALL_PREFIX_LENGTH,
    WRONG_ANSWER_COUNT,
)
from recall_quiz.core.answer_pool import select_wrong_answers
from recall_quiz.core.models import (
    EntryKind,
    MemoryEntry,
    PersonProfile,
    QuestionCategory,
    QuizQuestion,
    has_value,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class _ProfileField:
    category: QuestionCategory
    read: Callable[[PersonProfile], str]
    fallback: tuple[str, ...]
    prompt: str


_PROFILE_FIELDS: tuple[_ProfileField, ...] = (
    _ProfileField(QuestionCategory.WHO, lambda p: p.name, FALLBACK_NAMES, "Who is this?"),
    _ProfileField(
        QuestionCategory.RELATIONSHIP,
        lambda p: p.relationship,
        FALLBACK_RELATIONSHIPS,
        "What is your relationship with {name}?",
    ),
    _ProfileField(
        QuestionCategory.LOCATION,
        lambda p: p.location,
        FALLBACK_LOCATIONS,
        "Where does {name} live?",
    ),
    _ProfileField(
        QuestionCategory.FUN_FACT,
        lambda p: p.fun_fact,
        FALLBACK_FACTS,
        "What is a fun fact about {name}?",
    ),
)

MEMORY_WHO_PROMPT = "Who is this memory about?"
MEMORY_RECALL_PROMPT = "What is a memory you have of {name}?"
VOICE_WHO_PROMPT = "Whose voice is this?"
VOICE_WHEN_PROMPT = "When was this recording made?"
VOICE_PEOPLE_PROMPT = "Who is in this memory?"


def recall_snippet(text: str) -> str:
    """Leading slice of a memory's text shown as a recall answer."""
    return text[:MEMORY_RECALL_PREFIX_LENGTH].strip()


class QuestionFactory:
    """Builds zero or more questions per profile or memory entry.

    A question is only emitted when it can offer four distinct, non-empty options;
    anything sparser is dropped silently.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def from_profile(
        self,
        subject: PersonProfile,
        all_profiles: Sequence[PersonProfile],
    ) -> list[QuizQuestion]:
        if not subject.is_named:
            return []

        others = [p for p in all_profiles if p.is_named and p.id != subject.id]
        questions: list[QuizQuestion] = []
        for profile_field in _PROFILE_FIELDS:
            correct = profile_field.read(subject)
            if not has_value(correct):
                continue
            question = self._build(
                category=profile_field.category,
                subject_name=subject.name.strip(),
                correct=correct,
                pool=[profile_field.read(other) for other in others],
                fallback=profile_field.fallback,
                prompt=profile_field.prompt.format(name=subject.name.strip()),
                media_ref=subject.photo_ref,
            )
            if question is not None:
                questions.append(question)
        return questions

    def from_memory(
        self,
        entry: MemoryEntry,
        all_profiles: Sequence[PersonProfile],
        all_memories: Sequence[MemoryEntry],
    ) -> list[QuizQuestion]:
        if not entry.is_quizzable:
            return []

        name = entry.person_name.strip()
        known_names = [p.name for p in all_profiles if p.is_named]
        known_names.extend(m.person_name for m in all_memories)
        is_voice = entry.entry_kind is EntryKind.VOICE

        candidates: list[QuizQuestion | None] = [
            self._build(
                category=QuestionCategory.MEMORY_WHO,
                subject_name=name,
                correct=name,
                pool=known_names,
                fallback=FALLBACK_NAMES,
                prompt=MEMORY_WHO_PROMPT,
                media_ref=entry.media_ref if entry.entry_kind is EntryKind.PHOTO else None,
            )
        ]

        if is_voice:
            recorded = format_month_year(entry.created_at)
            other_dates = [
                format_month_year(m.created_at)
                for m in all_memories
                if m.entry_kind is EntryKind.VOICE and m.id != entry.id
            ]
            candidates.append(
                self._build(
                    category=QuestionCategory.VOICE_WHO,
                    subject_name=name,
                    correct=name,
                    pool=known_names,
                    fallback=FALLBACK_NAMES,
                    prompt=VOICE_WHO_PROMPT,
                    media_ref=entry.media_ref,
                    aux_date_text=recorded,
                )
            )
            candidates.append(
                self._build(
                    category=QuestionCategory.VOICE_WHEN,
                    subject_name=name,
                    correct=recorded,
                    pool=other_dates,
                    fallback=nearby_month_labels(entry.created_at),
                    prompt=VOICE_WHEN_PROMPT,
                    media_ref=entry.media_ref,
                )
            )
            candidates.append(
                self._build(
                    category=QuestionCategory.VOICE_PEOPLE,
                    subject_name=name,
                    correct=name,
                    pool=known_names,
                    fallback=FALLBACK_NAMES,
                    prompt=VOICE_PEOPLE_PROMPT,
                    media_ref=entry.media_ref,
                    aux_date_text=recorded,
                )
            )

        if has_value(recall_snippet(entry.text)):
            candidates.append(
                self._build(
                    category=QuestionCategory.MEMORY_RECALL,
                    subject_name=name,
                    correct=recall_snippet(entry.text),
                    pool=[
                        recall_snippet(m.text) for m in all_memories if m.id != entry.id
                    ],
                    fallback=FALLBACK_FACTS,
                    prompt=MEMORY_RECALL_PROMPT.format(name=name),
                )
            )

        return [question for question in candidates if question is not None]

    def _build(
        self,
        category: QuestionCategory,
        subject_name: str,
        correct: str,
        pool: Sequence[str],
        fallback: Sequence[str],
        prompt: str,
        media_ref: str | None = None,
        aux_date_text: str | None = None,
    ) -> QuizQuestion | None:
        correct = correct.strip()
        wrongs = select_wrong_answers(
            correct, pool, fallback, count=WRONG_ANSWER_COUNT, rng=self._rng
        )
        if len(wrongs) < WRONG_ANSWER_COUNT:
            logger.debug(
                "Dropping %s question about %r: only %d distinct wrong answers",
                category.value,
                subject_name,
                len(wrongs),
            )
            return None
        return QuizQuestion.create(
            category=category,
            subject_name=subject_name,
            correct_answer=correct,
            wrong_answers=wrongs,
            prompt_text=prompt,
            rng=self._rng,
            media_ref=media_ref,
            aux_date_text=aux_date_text,
        )
