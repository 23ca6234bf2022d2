"""Domain models for the recall quiz engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import random
from uuid import uuid4

from recall_quiz.constants.messages import (
    FEEDBACK_EXCELLENT,
    FEEDBACK_GOOD,
    FEEDBACK_KEEP_GOING,
)


def has_value(text: str | None) -> bool:
    """Empty or whitespace-only strings count as absent."""
    return bool(text and text.strip())


def _new_id() -> str:
    return uuid4().hex


class EntryKind(str, Enum):
    """Modality of a memory board entry."""

    PHOTO = "photo"
    VOICE = "voice"


class QuestionCategory(str, Enum):
    """What a quiz question asks about; hosts use it for labelling."""

    WHO = "who"
    RELATIONSHIP = "relationship"
    LOCATION = "location"
    FUN_FACT = "funFact"
    MEMORY_WHO = "memoryWho"
    MEMORY_RECALL = "memoryRecall"
    VOICE_WHO = "voiceWho"
    VOICE_WHEN = "voiceWhen"
    VOICE_PEOPLE = "voicePeople"

    @property
    def is_memory_sourced(self) -> bool:
        return self not in _PROFILE_CATEGORIES


_PROFILE_CATEGORIES = frozenset(
    {
        QuestionCategory.WHO,
        QuestionCategory.RELATIONSHIP,
        QuestionCategory.LOCATION,
        QuestionCategory.FUN_FACT,
    }
)


@dataclass(slots=True, frozen=True)
class PersonProfile:
    """Caregiver-entered person on the roster."""

    name: str = ""
    relationship: str = ""
    location: str = ""
    fun_fact: str = ""
    photo_ref: str | None = None
    id: str = field(default_factory=_new_id)

    @property
    def is_named(self) -> bool:
        return has_value(self.name)


@dataclass(slots=True, frozen=True)
class MemoryEntry:
    """Photo or voice memory recorded on the memory board."""

    person_name: str = ""
    text: str = ""
    entry_kind: EntryKind = EntryKind.PHOTO
    media_ref: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    created_from: str = "manual"
    id: str = field(default_factory=_new_id)

    @property
    def is_quizzable(self) -> bool:
        return has_value(self.person_name)


@dataclass(slots=True, frozen=True)
class QuizQuestion:
    """Multiple-choice question with one correct answer and three distractors.

    Build instances through :meth:`create` so the answer order is shuffled once and
    the option invariants are checked.
    """

    category: QuestionCategory
    subject_name: str
    correct_answer: str
    wrong_answers: tuple[str, ...]
    prompt_text: str
    all_answers: tuple[str, ...]
    media_ref: str | None = None
    aux_date_text: str | None = None
    id: str = field(default_factory=_new_id)

    @classmethod
    def create(
        cls,
        category: QuestionCategory,
        subject_name: str,
        correct_answer: str,
        wrong_answers: list[str] | tuple[str, ...],
        prompt_text: str,
        rng: random.Random | None = None,
        media_ref: str | None = None,
        aux_date_text: str | None = None,
    ) -> "QuizQuestion":
        wrongs = tuple(wrong_answers)
        options = [correct_answer, *wrongs]
        if len(wrongs) != 3:
            raise ValueError("A quiz question needs exactly three wrong answers.")
        if any(not has_value(option) for option in options):
            raise ValueError("Answer options cannot be empty.")
        if len(set(options)) != len(options):
            raise ValueError("Answer options must be distinct.")

        (rng or random.Random()).shuffle(options)
        return cls(
            category=category,
            subject_name=subject_name,
            correct_answer=correct_answer,
            wrong_answers=wrongs,
            prompt_text=prompt_text,
            all_answers=tuple(options),
            media_ref=media_ref,
            aux_date_text=aux_date_text,
        )

    @property
    def correct_option_index(self) -> int:
        return self.all_answers.index(self.correct_answer)


@dataclass(slots=True, frozen=True)
class SessionSummary:
    """Final result reported when a quiz session completes."""

    score: int
    reward_earned: int
    total: int
    answered_wrong: tuple[QuizQuestion, ...]

    @property
    def ratio(self) -> float:
        return self.score / max(self.total, 1)

    @property
    def feedback_message(self) -> str:
        if self.ratio >= 0.8:
            return FEEDBACK_EXCELLENT
        if self.ratio >= 0.5:
            return FEEDBACK_GOOD
        return FEEDBACK_KEEP_GOING
