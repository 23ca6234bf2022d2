"""Tests for the quiz session state machine."""

from __future__ import annotations

from conftest import make_questions, wrong_choice

from recall_quiz.core.services.quiz_session import QuizSession, SessionState


class TestLifecycle:
    def test_empty_session_is_terminal(self):
        session = QuizSession([])

        assert session.state is SessionState.EMPTY
        assert session.get_current_question() is None
        assert session.select_answer("Alice") is False
        assert session.advance() is False
        assert session.get_summary() is None

    def test_starts_on_first_question(self):
        questions = make_questions(3)
        session = QuizSession(questions)

        assert session.state is SessionState.PRESENTING
        assert session.current_index == 0
        assert session.get_current_question() is questions[0]
        assert session.pending_selection is None

    def test_advance_requires_a_selection(self):
        session = QuizSession(make_questions(2))

        assert session.advance() is False
        assert session.current_index == 0

    def test_advance_moves_on_and_clears_selection(self):
        questions = make_questions(2)
        session = QuizSession(questions)

        session.select_answer(questions[0].correct_answer)
        assert session.advance() is True

        assert session.current_index == 1
        assert session.pending_selection is None
        assert session.get_current_question() is questions[1]

    def test_last_advance_completes(self):
        questions = make_questions(1)
        session = QuizSession(questions)

        session.select_answer(questions[0].correct_answer)
        session.advance()

        assert session.state is SessionState.COMPLETED
        assert session.is_complete()
        assert session.get_current_question() is None
        assert session.select_answer(questions[0].correct_answer) is False
        assert session.advance() is False


class TestScoring:
    def test_second_selection_is_ignored(self):
        questions = make_questions(2)
        session = QuizSession(questions)
        first = wrong_choice(questions[0])

        assert session.select_answer(first) is True
        assert session.select_answer(questions[0].correct_answer) is False

        assert session.pending_selection == first
        assert session.score == 0
        assert session.reward_earned == 0
        assert session.answered_wrong == [questions[0]]

    def test_repeated_correct_selection_scores_once(self):
        questions = make_questions(1)
        session = QuizSession(questions)

        session.select_answer(questions[0].correct_answer)
        session.select_answer(questions[0].correct_answer)

        assert session.score == 1
        assert session.reward_earned == 1

    def test_all_correct_run(self):
        questions = make_questions(4)
        session = QuizSession(questions)

        for question in questions:
            session.select_answer(question.correct_answer)
            session.advance()

        summary = session.get_summary()
        assert summary is not None
        assert (summary.score, summary.reward_earned, summary.total) == (4, 4, 4)
        assert summary.answered_wrong == ()

    def test_all_wrong_run_keeps_presentation_order(self):
        questions = make_questions(4)
        session = QuizSession(questions)

        for question in questions:
            session.select_answer(wrong_choice(question))
            session.advance()

        summary = session.get_summary()
        assert summary is not None
        assert summary.score == 0
        assert summary.reward_earned == 0
        assert list(summary.answered_wrong) == questions

    def test_snapshot_reports_pending_result(self):
        questions = make_questions(2)
        session = QuizSession(questions)

        before = session.get_snapshot()
        session.select_answer(questions[0].correct_answer)
        after = session.get_snapshot()

        assert before.is_pending_correct is None
        assert after.pending_selection == questions[0].correct_answer
        assert after.is_pending_correct is True
        assert (after.score, after.total, after.current_index) == (1, 2, 0)
