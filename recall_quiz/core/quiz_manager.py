"""Business logic for running recall quizzes, shared between hosts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
import random
from threading import Lock

from recall_quiz.constants.messages import NO_ACTIVE_QUIZ_MESSAGE, QUIZ_NOT_COMPLETE_MESSAGE
from recall_quiz.constants.quiz_constants import (
    AUTO_ADVANCE_DELAY_MS,
    DEFAULT_QUESTION_COUNT,
    FIRST_LEVEL,
)
from recall_quiz.core.memory_prompt import (
    MemoryPrompt,
    build_memory_prompt,
    create_prompted_memory,
)
from recall_quiz.core.models import MemoryEntry, PersonProfile, SessionSummary
from recall_quiz.core.question_composer import compose_questions
from recall_quiz.core.services.advance_scheduler import (
    AdvanceScheduler,
    ScheduledAdvance,
    ThreadedAdvanceScheduler,
)
from recall_quiz.core.services.progress_ledger import ProgressLedger, ProgressSnapshot
from recall_quiz.core.services.quiz_session import QuizSession, SessionSnapshot, SessionState

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionSnapshot | None], None]


class QuizManager:
    """Facade for the question engine, the live QuizSession and progress.

    The roster and memory log are snapshotted when a quiz starts, so later edits
    only affect the next quiz. Every accepted answer schedules one auto-advance
    tagged with its own generation; advancing, ending or restarting the quiz
    cancels it.
    """

    def __init__(
        self,
        scheduler: AdvanceScheduler | None = None,
        progress: ProgressLedger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._lock = Lock()
        self._scheduler = scheduler or ThreadedAdvanceScheduler()
        self._progress = progress or ProgressLedger()
        self._rng = rng or random.Random()

        self._profiles: tuple[PersonProfile, ...] = ()
        self._memories: list[MemoryEntry] = []

        self._session: QuizSession | None = None
        self._session_level: int = FIRST_LEVEL
        self._advance_generation: int = 0
        self._pending_advance: ScheduledAdvance | None = None

        self._question_count: int = DEFAULT_QUESTION_COUNT
        self._auto_advance_delay_ms: int = AUTO_ADVANCE_DELAY_MS
        self._listeners: list[SessionListener] = []

    # --- Roster & Memory Log ---

    def load_profiles(self, profiles: Iterable[PersonProfile]) -> None:
        with self._lock:
            self._profiles = tuple(profiles)

    def get_profiles(self) -> list[PersonProfile]:
        with self._lock:
            return list(self._profiles)

    def load_memories(self, entries: Iterable[MemoryEntry]) -> None:
        with self._lock:
            self._memories = list(entries)

    def add_memory(self, entry: MemoryEntry) -> None:
        with self._lock:
            self._memories.append(entry)

    def get_memories(self) -> list[MemoryEntry]:
        with self._lock:
            return list(self._memories)

    # --- Session Lifecycle ---

    def start_quiz(self, level: int = FIRST_LEVEL, question_count: int | None = None) -> bool:
        """Compose a new quiz and start presenting it.

        Returns False when no quiz is available (fewer than two named people).
        """
        count = self._question_count if question_count is None else question_count
        if count < 1:
            raise ValueError("Question count must be a positive integer.")
        with self._lock:
            if not self._progress.is_unlocked(level):
                raise ValueError(f"Level {level} is still locked.")
            self._cancel_pending_advance()
            questions = compose_questions(
                self._profiles, tuple(self._memories), count, rng=self._rng
            )
            self._session = QuizSession(questions)
            self._session_level = level
            snapshot = self._session.get_snapshot()

        if snapshot.state is SessionState.EMPTY:
            logger.info("Quiz for level %d unavailable: not enough people on the roster", level)
        else:
            logger.info("Started level %d quiz with %d question(s)", level, snapshot.total)
        self._notify(snapshot)
        return snapshot.state is SessionState.PRESENTING

    def end_quiz(self) -> None:
        """Tear down the current session; a pending auto-advance never fires."""
        with self._lock:
            had_session = self._session is not None
            self._cancel_pending_advance()
            self._session = None
        if had_session:
            logger.info("Quiz session ended")
            self._notify(None)

    def has_active_quiz(self) -> bool:
        with self._lock:
            return self._session is not None and self._session.state is SessionState.PRESENTING

    # --- Answering ---

    def select_answer(self, choice: str) -> bool:
        """Submit a choice for the current question. Returns False if already answered."""
        with self._lock:
            session = self._require_session()
            question = session.get_current_question()
            if question is None:
                raise RuntimeError(NO_ACTIVE_QUIZ_MESSAGE)
            if choice not in question.all_answers:
                raise ValueError(f"'{choice}' is not one of the current answer options.")

            accepted = session.select_answer(choice)
            if accepted:
                self._advance_generation += 1
                generation = self._advance_generation
                self._pending_advance = self._scheduler.schedule(
                    self._auto_advance_delay_ms,
                    lambda: self._auto_advance(generation),
                )
            snapshot = session.get_snapshot()

        if accepted:
            self._notify(snapshot)
        return accepted

    def advance(self) -> bool:
        """Advance right away instead of waiting for the auto-advance timer."""
        with self._lock:
            session = self._require_session()
            self._cancel_pending_advance()
            changed, snapshot = self._advance_locked(session)
        if changed:
            self._notify(snapshot)
        return changed

    def _auto_advance(self, generation: int) -> None:
        with self._lock:
            session = self._session
            if session is None or generation != self._advance_generation:
                logger.debug("Discarding stale auto-advance for generation %d", generation)
                return
            self._pending_advance = None
            changed, snapshot = self._advance_locked(session)
        if changed:
            self._notify(snapshot)

    def _advance_locked(self, session: QuizSession) -> tuple[bool, SessionSnapshot]:
        changed = session.advance()
        if changed and session.is_complete():
            summary = session.get_summary()
            if summary is not None:
                self._report_completion(summary)
        return changed, session.get_snapshot()

    def _report_completion(self, summary: SessionSummary) -> None:
        unlocked = self._progress.complete_level(self._session_level)
        self._progress.add_reward(summary.reward_earned, level=self._session_level)
        logger.info(
            "Level %d complete: %d/%d correct, %d reward earned, level %d unlocked",
            self._session_level,
            summary.score,
            summary.total,
            summary.reward_earned,
            unlocked,
        )

    # --- Session Queries ---

    def get_snapshot(self) -> SessionSnapshot | None:
        with self._lock:
            if self._session is None:
                return None
            return self._session.get_snapshot()

    def get_summary(self) -> SessionSummary | None:
        with self._lock:
            if self._session is None:
                return None
            return self._session.get_summary()

    def get_session_level(self) -> int:
        with self._lock:
            return self._session_level

    # --- Post-Quiz Memory Prompt ---

    def get_memory_prompt(self) -> MemoryPrompt:
        with self._lock:
            session = self._require_session()
            if not session.is_complete():
                raise RuntimeError(QUIZ_NOT_COMPLETE_MESSAGE)
            return build_memory_prompt(session.answered_wrong)

    def save_prompted_memory(
        self,
        text: str,
        person_name: str = "",
        media_ref: str | None = None,
    ) -> MemoryEntry:
        entry = create_prompted_memory(text, person_name=person_name, media_ref=media_ref)
        with self._lock:
            self._memories.append(entry)
        logger.info("Saved prompted memory about %r", entry.person_name or "nobody in particular")
        return entry

    # --- Progress ---

    def get_progress(self) -> ProgressSnapshot:
        with self._lock:
            return self._progress.get_snapshot()

    # --- Settings & Listeners ---

    def set_shuffle_seed(self, seed: int | None) -> None:
        with self._lock:
            self._rng.seed(seed)

    def set_question_count(self, count: int) -> None:
        if count < 1:
            raise ValueError("Question count must be a positive integer.")
        with self._lock:
            self._question_count = count

    def set_auto_advance_delay(self, delay_ms: int) -> None:
        if delay_ms < 0:
            raise ValueError("Auto-advance delay cannot be negative.")
        with self._lock:
            self._auto_advance_delay_ms = delay_ms

    def add_listener(self, listener: SessionListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _notify(self, snapshot: SessionSnapshot | None) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)

    # --- Helpers ---

    def _require_session(self) -> QuizSession:
        if self._session is None:
            raise RuntimeError(NO_ACTIVE_QUIZ_MESSAGE)
        return self._session

    def _cancel_pending_advance(self) -> None:
        # A callback already past its own cancel check sees the new generation and bails.
        self._advance_generation += 1
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None
