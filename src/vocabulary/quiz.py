"""Vocabulary quiz over saved words: multiple choice or flashcards."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from src.vocabulary.models import SavedWord

QUIZ_LENGTH = 10
MIN_QUIZ_WORDS = 5
OPTION_COUNT = 4


class QuizMode(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    FLASHCARD = "flashcard"


@dataclass(frozen=True)
class QuizOption:
    definition: str
    is_correct: bool


@dataclass(frozen=True)
class QuizQuestion:
    word: SavedWord
    options: tuple[QuizOption, ...] = ()

    @property
    def definition(self) -> str:
        return _definition(self.word)


@dataclass
class Quiz:
    """Progress through one round of questions.

    Each question is answered once, then :meth:`advance` moves on. The round
    is completed after the last question has been answered and advanced past.
    """

    mode: QuizMode
    questions: list[QuizQuestion]
    index: int = 0
    score: int = 0
    answered: bool = False
    completed: bool = False

    @property
    def current(self) -> QuizQuestion:
        return self.questions[self.index]

    @property
    def asked(self) -> int:
        """Questions answered so far, used as the score denominator."""
        return self.index + (1 if self.answered else 0)

    def _record(self, correct: bool) -> bool:
        if self.completed or self.answered:
            raise RuntimeError("question already answered")
        self.answered = True
        if correct:
            self.score += 1
        return correct

    def choose(self, option_index: int) -> bool:
        """Answer a multiple-choice question; returns True if the option was right."""
        return self._record(self.current.options[option_index].is_correct)

    def grade(self, knew_it: bool) -> bool:
        """Self-graded flashcard answer."""
        return self._record(knew_it)

    def advance(self) -> None:
        if not self.answered:
            raise RuntimeError("answer the current question first")
        if self.index < len(self.questions) - 1:
            self.index += 1
            self.answered = False
        else:
            self.completed = True


def build_options(
    word: SavedWord, pool: Sequence[SavedWord], rng: random.Random
) -> tuple[QuizOption, ...]:
    """The word's first definition plus three taken from other saved words, shuffled.

    Returns no options when fewer than four words are saved.
    """
    if len(pool) < OPTION_COUNT:
        return ()
    others = [w for w in pool if w.word != word.word]
    distractors = rng.sample(others, min(OPTION_COUNT - 1, len(others)))
    options = [QuizOption(_definition(word), True)]
    options += [QuizOption(_definition(w), False) for w in distractors]
    rng.shuffle(options)
    return tuple(options)


def build_quiz(
    saved_words: Sequence[SavedWord],
    mode: QuizMode = QuizMode.MULTIPLE_CHOICE,
    rng: random.Random | None = None,
) -> Quiz:
    """Shuffle the saved words and quiz on up to ten of them.

    Raises:
        ValueError: Fewer than five words are saved.
    """
    if len(saved_words) < MIN_QUIZ_WORDS:
        raise ValueError(f"You need at least {MIN_QUIZ_WORDS} saved words to take a quiz.")

    rng = rng or random.Random()
    picked = rng.sample(list(saved_words), min(QUIZ_LENGTH, len(saved_words)))
    questions = [
        QuizQuestion(
            word=w,
            options=build_options(w, saved_words, rng) if mode is QuizMode.MULTIPLE_CHOICE else (),
        )
        for w in picked
    ]
    return Quiz(mode=mode, questions=questions)


def result_message(score: int, total: int) -> str:
    if score == total:
        return "Perfect score! Amazing job!"
    if score >= total / 2:
        return "Good job! Keep practicing."
    return "Keep studying, you'll get better!"


def _definition(word: SavedWord) -> str:
    return word.entry.first_definition if word.entry else ""
