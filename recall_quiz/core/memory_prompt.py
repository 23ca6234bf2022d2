"""Post-quiz follow-up inviting the user to record a memory about missed people."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from recall_quiz.constants.messages import (
    MEMORY_PROMPT_SUBTITLE,
    MEMORY_PROMPT_TITLE,
    MEMORY_PROMPT_WHO_LABEL,
)
from recall_quiz.constants.quiz_constants import PROMPTED_MEMORY_SOURCE
from recall_quiz.core.models import EntryKind, MemoryEntry, QuizQuestion, has_value


@dataclass(slots=True, frozen=True)
class MemoryPrompt:
    """What the "keep a memory" sheet offers after a quiz."""

    title: str
    subtitle: str
    who_label: str
    person_names: tuple[str, ...]


def build_memory_prompt(answered_wrong: Iterable[QuizQuestion]) -> MemoryPrompt:
    names = dict.fromkeys(
        question.subject_name for question in answered_wrong if has_value(question.subject_name)
    )
    return MemoryPrompt(
        title=MEMORY_PROMPT_TITLE,
        subtitle=MEMORY_PROMPT_SUBTITLE,
        who_label=MEMORY_PROMPT_WHO_LABEL,
        person_names=tuple(names),
    )


def create_prompted_memory(
    text: str,
    person_name: str = "",
    media_ref: str | None = None,
    now: datetime | None = None,
) -> MemoryEntry:
    """Create the memory board entry saved from the prompt."""
    if not has_value(text):
        raise ValueError("Memory text cannot be empty.")
    return MemoryEntry(
        person_name=person_name.strip(),
        text=text.strip(),
        entry_kind=EntryKind.PHOTO,
        media_ref=media_ref,
        created_at=now or datetime.now(),
        created_from=PROMPTED_MEMORY_SOURCE,
    )
