"""Tests for the vocabulary quiz."""

from __future__ import annotations

import random

import pytest

from src.vocabulary.models import Definition, DictionaryEntry, Meaning, SavedWord
from src.vocabulary.quiz import (
    MIN_QUIZ_WORDS,
    QUIZ_LENGTH,
    QuizMode,
    build_options,
    build_quiz,
    result_message,
)


def saved(word: str) -> SavedWord:
    entry = DictionaryEntry(
        word=word,
        meanings=(Meaning("noun", definitions=(Definition(f"meaning of {word}"),)),),
    )
    return SavedWord(word=word, entry=entry)


def saved_words(count: int) -> list[SavedWord]:
    return [saved(f"word{i}") for i in range(count)]


class TestBuildQuiz:
    def test_needs_minimum_words(self) -> None:
        with pytest.raises(ValueError, match=str(MIN_QUIZ_WORDS)):
            build_quiz(saved_words(MIN_QUIZ_WORDS - 1))

    def test_takes_at_most_ten_distinct_words(self) -> None:
        quiz = build_quiz(saved_words(25), rng=random.Random(7))
        words = [q.word.word for q in quiz.questions]
        assert len(words) == QUIZ_LENGTH
        assert len(set(words)) == QUIZ_LENGTH

    def test_small_list_uses_every_word(self) -> None:
        pool = saved_words(6)
        quiz = build_quiz(pool, rng=random.Random(1))
        assert sorted(q.word.word for q in quiz.questions) == sorted(w.word for w in pool)

    def test_multiple_choice_has_one_correct_option(self) -> None:
        quiz = build_quiz(saved_words(8), rng=random.Random(3))
        for question in quiz.questions:
            assert len(question.options) == 4
            correct = [o for o in question.options if o.is_correct]
            assert [o.definition for o in correct] == [question.definition]
            assert len({o.definition for o in question.options}) == 4

    def test_flashcards_have_no_options(self) -> None:
        quiz = build_quiz(saved_words(5), QuizMode.FLASHCARD, rng=random.Random(3))
        assert quiz.mode is QuizMode.FLASHCARD
        assert all(q.options == () for q in quiz.questions)


def test_options_need_four_saved_words() -> None:
    pool = saved_words(3)
    assert build_options(pool[0], pool, random.Random(0)) == ()


class TestQuizProgress:
    def test_score_and_completion(self) -> None:
        quiz = build_quiz(saved_words(5), rng=random.Random(5))

        for _ in quiz.questions:
            right = next(i for i, o in enumerate(quiz.current.options) if o.is_correct)
            wrong = next(i for i, o in enumerate(quiz.current.options) if not o.is_correct)
            choice = right if quiz.index % 2 == 0 else wrong
            assert quiz.choose(choice) is (choice == right)
            assert quiz.asked == quiz.index + 1
            quiz.advance()

        assert quiz.completed
        assert quiz.score == 3
        assert result_message(quiz.score, len(quiz.questions)) == "Good job! Keep practicing."

    def test_each_question_is_answered_once(self) -> None:
        quiz = build_quiz(saved_words(5), QuizMode.FLASHCARD, rng=random.Random(0))
        with pytest.raises(RuntimeError):
            quiz.advance()
        quiz.grade(True)
        with pytest.raises(RuntimeError):
            quiz.grade(True)
        assert quiz.score == 1

    def test_flashcard_self_grading(self) -> None:
        quiz = build_quiz(saved_words(5), QuizMode.FLASHCARD, rng=random.Random(0))
        quiz.grade(False)
        quiz.advance()
        assert quiz.index == 1
        assert quiz.score == 0
        assert not quiz.answered


@pytest.mark.parametrize(
    ("score", "total", "message"),
    [
        (10, 10, "Perfect score! Amazing job!"),
        (5, 10, "Good job! Keep practicing."),
        (4, 10, "Keep studying, you'll get better!"),
    ],
)
def test_result_message(score: int, total: int, message: str) -> None:
    assert result_message(score, total) == message
