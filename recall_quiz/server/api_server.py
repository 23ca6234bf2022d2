"""FastAPI server that exposes the roster, memory log and quiz session."""

from __future__ import annotations

from datetime import datetime
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from recall_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from recall_quiz.constants.messages import (
    NO_ACTIVE_QUIZ_MESSAGE,
    NO_QUIZ_AVAILABLE_MESSAGE,
    QUIZ_NOT_COMPLETE_MESSAGE,
)
from recall_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from recall_quiz.constants.quiz_constants import FIRST_LEVEL
from recall_quiz.core.models import (
    EntryKind,
    MemoryEntry,
    PersonProfile,
    QuizQuestion,
    SessionSummary,
)
from recall_quiz.core.quiz_manager import QuizManager
from recall_quiz.core.services.quiz_session import SessionSnapshot, SessionState


class ProfilePayload(BaseModel):
    """Payload schema for one roster entry."""

    id: str | None = None
    name: str = ""
    relationship: str = ""
    location: str = ""
    fun_fact: str = ""
    photo_ref: str | None = None

    def to_profile(self) -> PersonProfile:
        fields = self.model_dump(exclude={"id"})
        if self.id:
            return PersonProfile(id=self.id, **fields)
        return PersonProfile(**fields)


class MemoryPayload(BaseModel):
    """Payload schema for one memory board entry."""

    id: str | None = None
    person_name: str = ""
    text: str = ""
    entry_kind: EntryKind = EntryKind.PHOTO
    media_ref: str | None = None
    created_at: datetime | None = None
    created_from: str = "manual"

    def to_entry(self) -> MemoryEntry:
        fields = self.model_dump(exclude={"id", "created_at"})
        if self.created_at is not None:
            fields["created_at"] = self.created_at
        if self.id:
            fields["id"] = self.id
        return MemoryEntry(**fields)


class StartQuizPayload(BaseModel):
    """Payload schema for starting a quiz."""

    level: int = Field(default=FIRST_LEVEL, ge=FIRST_LEVEL)
    question_count: int | None = Field(default=None, ge=1)


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    choice: str


class PromptedMemoryPayload(BaseModel):
    """Payload schema for the post-quiz memory prompt."""

    text: str
    person_name: str = ""
    media_ref: str | None = None


def _serialize_profile(profile: PersonProfile) -> dict[str, object]:
    return {
        "id": profile.id,
        "name": profile.name,
        "relationship": profile.relationship,
        "location": profile.location,
        "fun_fact": profile.fun_fact,
        "photo_ref": profile.photo_ref,
    }


def _serialize_memory(entry: MemoryEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "person_name": entry.person_name,
        "text": entry.text,
        "entry_kind": entry.entry_kind.value,
        "media_ref": entry.media_ref,
        "created_at": entry.created_at.isoformat(),
        "created_from": entry.created_from,
    }


def _serialize_question(question: QuizQuestion, reveal: bool) -> dict[str, object]:
    # The correct answer is only sent once the question has been answered.
    return {
        "id": question.id,
        "category": question.category.value,
        "subject_name": question.subject_name,
        "prompt_text": question.prompt_text,
        "options": list(question.all_answers),
        "media_ref": question.media_ref,
        "aux_date_text": question.aux_date_text,
        "correct_answer": question.correct_answer if reveal else None,
    }


def _serialize_snapshot(snapshot: SessionSnapshot | None) -> dict[str, object]:
    if snapshot is None:
        return {"active": False, "state": None, "message": NO_ACTIVE_QUIZ_MESSAGE}
    answered = snapshot.pending_selection is not None
    return {
        "active": snapshot.state is SessionState.PRESENTING,
        "state": snapshot.state.value,
        "current_index": snapshot.current_index,
        "total": snapshot.total,
        "question": (
            _serialize_question(snapshot.question, reveal=answered)
            if snapshot.question is not None
            else None
        ),
        "selected": snapshot.pending_selection,
        "is_correct": snapshot.is_pending_correct,
        "score": snapshot.score,
        "reward_earned": snapshot.reward_earned,
    }


def _serialize_summary(summary: SessionSummary) -> dict[str, object]:
    return {
        "score": summary.score,
        "reward_earned": summary.reward_earned,
        "total": summary.total,
        "feedback": summary.feedback_message,
        "answered_wrong": [
            _serialize_question(question, reveal=True) for question in summary.answered_wrong
        ],
    }


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/about")
    def about() -> dict[str, str]:
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "license": APP_LICENSE,
            "about": APP_ABOUT_TEXT,
        }

    @app.put("/profiles")
    def replace_profiles(
        payload: list[ProfilePayload],
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        manager.load_profiles(item.to_profile() for item in payload)
        return {"count": len(payload)}

    @app.get("/profiles")
    def list_profiles(manager: QuizManager = Depends(quiz_manager_dep)) -> list[dict[str, object]]:
        return [_serialize_profile(profile) for profile in manager.get_profiles()]

    @app.put("/memories")
    def replace_memories(
        payload: list[MemoryPayload],
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        manager.load_memories(item.to_entry() for item in payload)
        return {"count": len(payload)}

    @app.post("/memories", status_code=201)
    def add_memory(
        payload: MemoryPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        entry = payload.to_entry()
        manager.add_memory(entry)
        return _serialize_memory(entry)

    @app.get("/memories")
    def list_memories(manager: QuizManager = Depends(quiz_manager_dep)) -> list[dict[str, object]]:
        return [_serialize_memory(entry) for entry in manager.get_memories()]

    @app.post("/quiz")
    def start_quiz(
        payload: StartQuizPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            available = manager.start_quiz(payload.level, payload.question_count)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        body = _serialize_snapshot(manager.get_snapshot())
        body["available"] = available
        if not available:
            body["message"] = NO_QUIZ_AVAILABLE_MESSAGE
        return body

    @app.get("/quiz")
    def get_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return _serialize_snapshot(manager.get_snapshot())

    @app.post("/quiz/answer")
    def submit_answer(
        payload: AnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            accepted = manager.select_answer(payload.choice)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        body = _serialize_snapshot(manager.get_snapshot())
        body["accepted"] = accepted
        return body

    @app.delete("/quiz")
    def end_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        manager.end_quiz()
        return {"active": False}

    @app.get("/quiz/summary")
    def get_summary(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        summary = manager.get_summary()
        if summary is None:
            raise HTTPException(status_code=409, detail=QUIZ_NOT_COMPLETE_MESSAGE)
        return _serialize_summary(summary)

    @app.get("/quiz/memory-prompt")
    def get_memory_prompt(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            prompt = manager.get_memory_prompt()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {
            "title": prompt.title,
            "subtitle": prompt.subtitle,
            "who_label": prompt.who_label,
            "person_names": list(prompt.person_names),
        }

    @app.post("/quiz/memory-prompt", status_code=201)
    def save_prompted_memory(
        payload: PromptedMemoryPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            entry = manager.save_prompted_memory(
                payload.text,
                person_name=payload.person_name,
                media_ref=payload.media_ref,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _serialize_memory(entry)

    @app.get("/progress")
    def get_progress(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        progress = manager.get_progress()
        return {
            "unlocked_levels": progress.unlocked_levels,
            "total_reward": progress.total_reward,
        }

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="RecallQuizApiServer", daemon=True)
    thread.start()
    return thread
