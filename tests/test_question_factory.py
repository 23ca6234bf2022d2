"""Tests for building questions from profiles and memory entries."""

from __future__ import annotations

from datetime import datetime

from conftest import assert_valid_question

from recall_quiz.constants.fallback_vocabulary import FALLBACK_NAMES, nearby_month_labels
from recall_quiz.core import question_factory
from recall_quiz.core.models import EntryKind, MemoryEntry, PersonProfile, QuestionCategory
from recall_quiz.core.question_factory import QuestionFactory


def _by_category(questions):
    return {question.category: question for question in questions}


class TestFromProfile:
    def test_full_profile_yields_one_question_per_field(self, rng, alice, bob):
        questions = QuestionFactory(rng).from_profile(alice, [alice, bob])

        assert [q.category for q in questions] == [
            QuestionCategory.WHO,
            QuestionCategory.RELATIONSHIP,
            QuestionCategory.LOCATION,
            QuestionCategory.FUN_FACT,
        ]
        for question in questions:
            assert_valid_question(question)
            assert question.subject_name == "Alice"
            assert question.media_ref == "photos/alice.jpg"

    def test_other_profiles_supply_distractors(self, rng, alice, bob):
        questions = _by_category(QuestionFactory(rng).from_profile(alice, [alice, bob]))

        assert "Bob" in questions[QuestionCategory.WHO].wrong_answers
        assert "Son" in questions[QuestionCategory.RELATIONSHIP].wrong_answers
        assert "Whanganui" in questions[QuestionCategory.LOCATION].wrong_answers
        assert "Builds model boats" in questions[QuestionCategory.FUN_FACT].wrong_answers

    def test_prompts_mention_the_subject(self, rng, alice, bob):
        questions = _by_category(QuestionFactory(rng).from_profile(alice, [alice, bob]))

        assert questions[QuestionCategory.WHO].prompt_text == "Who is this?"
        assert (
            questions[QuestionCategory.RELATIONSHIP].prompt_text
            == "What is your relationship with Alice?"
        )
        assert questions[QuestionCategory.LOCATION].prompt_text == "Where does Alice live?"
        assert questions[QuestionCategory.FUN_FACT].prompt_text == "What is a fun fact about Alice?"

    def test_empty_fields_are_skipped(self, rng, bob):
        sparse = PersonProfile(name="Carol", relationship="", location="  ", fun_fact="Knits")

        questions = QuestionFactory(rng).from_profile(sparse, [sparse, bob])

        assert [q.category for q in questions] == [QuestionCategory.WHO, QuestionCategory.FUN_FACT]

    def test_unnamed_profile_is_never_a_subject(self, rng, bob):
        unnamed = PersonProfile(relationship="Neighbour", location="Motueka")

        assert QuestionFactory(rng).from_profile(unnamed, [unnamed, bob]) == []

    def test_unnamed_profiles_do_not_supply_distractors(self, rng, alice):
        unnamed = PersonProfile(relationship="Grandson")

        questions = _by_category(QuestionFactory(rng).from_profile(alice, [alice, unnamed]))

        assert "Grandson" not in questions[QuestionCategory.RELATIONSHIP].wrong_answers


class TestFromMemory:
    def test_photo_memory_asks_who_and_recall(self, rng, full_profiles, photo_memory):
        questions = _by_category(
            QuestionFactory(rng).from_memory(photo_memory, full_profiles, [photo_memory])
        )

        assert set(questions) == {QuestionCategory.MEMORY_WHO, QuestionCategory.MEMORY_RECALL}
        who = questions[QuestionCategory.MEMORY_WHO]
        assert who.correct_answer == "Bob"
        assert who.media_ref == "photos/wharf.jpg"
        assert who.prompt_text == "Who is this memory about?"

        recall = questions[QuestionCategory.MEMORY_RECALL]
        assert recall.correct_answer == photo_memory.text[:60]
        assert len(recall.correct_answer) == 60
        assert recall.prompt_text == "What is a memory you have of Bob?"
        for question in questions.values():
            assert_valid_question(question)

    def test_voice_memory_adds_voice_questions(self, rng, full_profiles, voice_memory):
        questions = _by_category(
            QuestionFactory(rng).from_memory(voice_memory, full_profiles, [voice_memory])
        )

        assert set(questions) == {
            QuestionCategory.MEMORY_WHO,
            QuestionCategory.VOICE_WHO,
            QuestionCategory.VOICE_WHEN,
            QuestionCategory.VOICE_PEOPLE,
            QuestionCategory.MEMORY_RECALL,
        }
        assert questions[QuestionCategory.MEMORY_WHO].media_ref is None
        assert questions[QuestionCategory.VOICE_WHO].media_ref == "audio/alice-birthday.m4a"
        assert questions[QuestionCategory.VOICE_WHO].aux_date_text == "March 2024"
        assert questions[QuestionCategory.VOICE_PEOPLE].correct_answer == "Alice"

        when = questions[QuestionCategory.VOICE_WHEN]
        assert when.correct_answer == "March 2024"
        assert when.aux_date_text is None
        assert set(when.wrong_answers) <= set(nearby_month_labels(voice_memory.created_at))
        for question in questions.values():
            assert_valid_question(question)

    def test_voice_dates_come_from_other_recordings(self, rng, full_profiles, voice_memory):
        older = MemoryEntry(
            person_name="Bob",
            entry_kind=EntryKind.VOICE,
            created_at=datetime(2019, 8, 1),
        )

        questions = _by_category(
            QuestionFactory(rng).from_memory(voice_memory, full_profiles, [voice_memory, older])
        )

        assert "August 2019" in questions[QuestionCategory.VOICE_WHEN].wrong_answers

    def test_voice_memory_without_text_has_no_recall(self, rng, full_profiles):
        entry = MemoryEntry(person_name="Bob", entry_kind=EntryKind.VOICE, media_ref="audio/bob.m4a")

        categories = {
            q.category for q in QuestionFactory(rng).from_memory(entry, full_profiles, [entry])
        }

        assert QuestionCategory.MEMORY_RECALL not in categories
        assert QuestionCategory.VOICE_WHEN in categories

    def test_names_pool_spans_profiles_and_memories(self, rng, full_profiles):
        about_joe = MemoryEntry(person_name="Grandpa Joe", text="Teaching me to whittle")
        about_may = MemoryEntry(person_name="Aunt May", text="Scones every Sunday")

        questions = _by_category(
            QuestionFactory(rng).from_memory(about_joe, full_profiles, [about_joe, about_may])
        )

        who = questions[QuestionCategory.MEMORY_WHO]
        assert sorted(who.wrong_answers) == ["Alice", "Aunt May", "Bob"]
        assert not set(who.wrong_answers) & set(FALLBACK_NAMES)

    def test_recall_distractors_are_other_memory_snippets(self, rng, full_profiles, photo_memory):
        first = MemoryEntry(person_name="Alice", text="Picnic at Rabbit Island")
        second = MemoryEntry(person_name="Alice", text="Watching the fireworks from the hill")

        questions = _by_category(
            QuestionFactory(rng).from_memory(
                photo_memory, full_profiles, [photo_memory, first, second]
            )
        )

        recall = questions[QuestionCategory.MEMORY_RECALL]
        assert "Picnic at Rabbit Island" in recall.wrong_answers
        assert "Watching the fireworks from the hill" in recall.wrong_answers

    def test_padded_person_name_never_duplicates_an_option(self, rng, full_profiles):
        entry = MemoryEntry(person_name="Alice ", text="")

        questions = _by_category(QuestionFactory(rng).from_memory(entry, full_profiles, [entry]))

        who = questions[QuestionCategory.MEMORY_WHO]
        assert who.correct_answer == "Alice"
        assert who.subject_name == "Alice"
        assert "Alice" not in who.wrong_answers
        assert_valid_question(who)

    def test_memory_without_person_is_not_quizzable(self, rng, full_profiles):
        entry = MemoryEntry(text="Somebody's birthday")

        assert QuestionFactory(rng).from_memory(entry, full_profiles, [entry]) == []

    def test_question_without_enough_options_is_dropped(self, rng, full_profiles, monkeypatch):
        monkeypatch.setattr(question_factory, "FALLBACK_FACTS", ("Plays chess",))
        entry = MemoryEntry(person_name="Alice", text="Cups of tea on the porch")

        questions = QuestionFactory(rng).from_memory(entry, full_profiles, [entry])

        assert [q.category for q in questions] == [QuestionCategory.MEMORY_WHO]
