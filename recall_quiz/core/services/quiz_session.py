"""State machine driving one run-through of a composed question set."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
import logging

from recall_quiz.core.models import QuizQuestion, SessionSummary

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    EMPTY = "empty"
    PRESENTING = "presenting"
    COMPLETED = "completed"


@dataclass(slots=True, frozen=True)
class SessionSnapshot:
    """Point-in-time view of a session for presentation hosts."""

    state: SessionState
    current_index: int
    total: int
    question: QuizQuestion | None
    pending_selection: str | None
    is_pending_correct: bool | None
    score: int
    reward_earned: int


class QuizSession:
    """Tracks position, the pending selection, score and reward for one quiz.

    Each question accepts exactly one selection. ``advance`` is only valid once a
    selection has been made; there is no going back and no skipping. Invalid calls
    are ignored and reported by returning False.
    """

    def __init__(self, questions: Sequence[QuizQuestion]) -> None:
        self._questions: tuple[QuizQuestion, ...] = tuple(questions)
        self._current_index: int = 0
        self._pending_selection: str | None = None
        self._score: int = 0
        self._reward_earned: int = 0
        self._answered_wrong: list[QuizQuestion] = []
        self._state = SessionState.PRESENTING if self._questions else SessionState.EMPTY

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def questions(self) -> tuple[QuizQuestion, ...]:
        return self._questions

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def pending_selection(self) -> str | None:
        return self._pending_selection

    @property
    def score(self) -> int:
        return self._score

    @property
    def reward_earned(self) -> int:
        return self._reward_earned

    @property
    def answered_wrong(self) -> list[QuizQuestion]:
        return list(self._answered_wrong)

    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETED

    def get_current_question(self) -> QuizQuestion | None:
        if self._state is not SessionState.PRESENTING:
            return None
        return self._questions[self._current_index]

    def select_answer(self, choice: str) -> bool:
        """Record the selection for the current question. Returns True if accepted."""
        question = self.get_current_question()
        if question is None or self._pending_selection is not None:
            logger.debug("Ignoring selection %r in state %s", choice, self._state.value)
            return False

        self._pending_selection = choice
        if choice == question.correct_answer:
            self._score += 1
            self._reward_earned += 1
        else:
            self._answered_wrong.append(question)
        return True

    def is_pending_correct(self) -> bool | None:
        question = self.get_current_question()
        if question is None or self._pending_selection is None:
            return None
        return self._pending_selection == question.correct_answer

    def advance(self) -> bool:
        """Move past the answered question. Returns True if the state changed."""
        if self._state is not SessionState.PRESENTING or self._pending_selection is None:
            logger.debug("Ignoring advance in state %s without a selection", self._state.value)
            return False

        self._pending_selection = None
        if self._current_index + 1 < len(self._questions):
            self._current_index += 1
        else:
            self._current_index = len(self._questions)
            self._state = SessionState.COMPLETED
        return True

    def get_summary(self) -> SessionSummary | None:
        if self._state is not SessionState.COMPLETED:
            return None
        return SessionSummary(
            score=self._score,
            reward_earned=self._reward_earned,
            total=len(self._questions),
            answered_wrong=tuple(self._answered_wrong),
        )

    def get_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self._state,
            current_index=self._current_index,
            total=len(self._questions),
            question=self.get_current_question(),
            pending_selection=self._pending_selection,
            is_pending_correct=self.is_pending_correct(),
            score=self._score,
            reward_earned=self._reward_earned,
        )
