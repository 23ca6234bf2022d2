"""Shared fixtures for the recall quiz tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import random

import pytest

from recall_quiz.core.models import (
    EntryKind,
    MemoryEntry,
    PersonProfile,
    QuestionCategory,
    QuizQuestion,
)
from recall_quiz.core.quiz_manager import QuizManager


class ManualAdvance:
    """Scheduled advance that only runs when a test fires it."""

    def __init__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.delay_ms = delay_ms
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def fire(self) -> None:
        if not self._cancelled:
            self.callback()


class ManualScheduler:
    def __init__(self) -> None:
        self.scheduled: list[ManualAdvance] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ManualAdvance:
        pending = ManualAdvance(delay_ms, callback)
        self.scheduled.append(pending)
        return pending

    def fire_latest(self) -> None:
        self.scheduled[-1].fire()


def assert_valid_question(question: QuizQuestion) -> None:
    assert len(question.all_answers) == 4
    assert question.correct_answer in question.all_answers
    assert len(set(question.all_answers)) == 4
    assert all(answer.strip() for answer in question.all_answers)
    assert len(question.wrong_answers) == 3
    assert question.correct_answer not in question.wrong_answers


def make_questions(count: int) -> list[QuizQuestion]:
    rng = random.Random(0)
    return [
        QuizQuestion.create(
            category=QuestionCategory.WHO,
            subject_name=f"Person {index}",
            correct_answer=f"Person {index}",
            wrong_answers=["Margaret", "Robert", "Susan"],
            prompt_text="Who is this?",
            rng=rng,
        )
        for index in range(count)
    ]


def wrong_choice(question: QuizQuestion) -> str:
    return next(answer for answer in question.all_answers if answer != question.correct_answer)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def alice() -> PersonProfile:
    return PersonProfile(
        name="Alice",
        relationship="Daughter",
        location="Nelson",
        fun_fact="Sings in a choir",
        photo_ref="photos/alice.jpg",
    )


@pytest.fixture
def bob() -> PersonProfile:
    return PersonProfile(
        name="Bob",
        relationship="Son",
        location="Whanganui",
        fun_fact="Builds model boats",
        photo_ref="photos/bob.jpg",
    )


@pytest.fixture
def full_profiles(alice: PersonProfile, bob: PersonProfile) -> list[PersonProfile]:
    return [alice, bob]


@pytest.fixture
def voice_memory() -> MemoryEntry:
    return MemoryEntry(
        person_name="Alice",
        text="Singing happy birthday at the bach in Kaiteriteri",
        entry_kind=EntryKind.VOICE,
        media_ref="audio/alice-birthday.m4a",
        created_at=datetime(2024, 3, 5, 18, 30),
    )


@pytest.fixture
def photo_memory() -> MemoryEntry:
    return MemoryEntry(
        person_name="Bob",
        text="Fishing off the wharf with Dad, caught a snapper bigger than his arm",
        entry_kind=EntryKind.PHOTO,
        media_ref="photos/wharf.jpg",
        created_at=datetime(2023, 12, 24, 9, 0),
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def manager(scheduler: ManualScheduler, full_profiles: list[PersonProfile]) -> QuizManager:
    quiz_manager = QuizManager(scheduler=scheduler, rng=random.Random(11))
    quiz_manager.load_profiles(full_profiles)
    return quiz_manager
