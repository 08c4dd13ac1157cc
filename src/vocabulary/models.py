"""Data models for dictionary entries and the saved-word list."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

@dataclass(frozen=True)
class Definition:
    definition: str
    example: str = ""


@dataclass(frozen=True)
class Meaning:
    part_of_speech: str
    definitions: tuple[Definition, ...] = ()
    synonyms: tuple[str, ...] = ()


@dataclass(frozen=True)
class Phonetic:
    text: str = ""
    audio: str = ""


@dataclass(frozen=True)
class DictionaryEntry:
    """First entry returned by the dictionary API for a word."""

    word: str
    phonetics: tuple[Phonetic, ...] = ()
    meanings: tuple[Meaning, ...] = ()

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> DictionaryEntry:
        return cls(
            word=data.get("word", ""),
            phonetics=tuple(
                Phonetic(text=p.get("text") or "", audio=p.get("audio") or "")
                for p in data.get("phonetics") or []
            ),
            meanings=tuple(
                Meaning(
                    part_of_speech=m.get("partOfSpeech") or "",
                    definitions=tuple(
                        Definition(definition=d.get("definition") or "", example=d.get("example") or "")
                        for d in m.get("definitions") or []
                    ),
                    synonyms=tuple(m.get("synonyms") or []),
                )
                for m in data.get("meanings") or []
            ),
        )

    @property
    def phonetic(self) -> str:
        return next((p.text for p in self.phonetics if p.text), "")

    @property
    def audio(self) -> str:
        return next((p.audio for p in self.phonetics if p.audio), "")

    @property
    def part_of_speech(self) -> str:
        return self.meanings[0].part_of_speech if self.meanings else ""

    def _first_definition(self) -> Definition | None:
        if self.meanings and self.meanings[0].definitions:
            return self.meanings[0].definitions[0]
        return None

    @property
    def first_definition(self) -> str:
        first = self._first_definition()
        return first.definition if first else ""

    @property
    def first_example(self) -> str:
        first = self._first_definition()
        return first.example if first else ""


@dataclass
class SavedWord:
    word: str
    entry: DictionaryEntry | None = None
    categories: list[str] = field(default_factory=list)
    saved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Vocabulary:
    """Ordered collection of saved words, unique by case-insensitive spelling.

    Categories are tags managed as a list of their own. A word can carry any
    number of them, and removing a category untags every word that had it.
    """

    def __init__(self) -> None:
        self._words: dict[str, SavedWord] = {}
        self._categories: list[str] = []

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._words

    def add(self, saved: SavedWord) -> bool:
        """Add *saved*; returns False if the word is already present."""
        key = saved.word.lower()
        if key in self._words:
            return False
        self._words[key] = saved
        return True

    def remove(self, word: str) -> None:
        self._words.pop(word.lower(), None)

    def get(self, word: str) -> SavedWord | None:
        return self._words.get(word.lower())

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    def add_category(self, name: str) -> bool:
        """Add a category; blank or duplicate names are ignored and return False."""
        name = name.strip()
        if not name or name in self._categories:
            return False
        self._categories.append(name)
        return True

    def remove_category(self, name: str) -> None:
        """Delete *name* and untag every word that carried it."""
        if name not in self._categories:
            return
        self._categories.remove(name)
        for saved in self._words.values():
            if name in saved.categories:
                saved.categories = [c for c in saved.categories if c != name]

    def toggle_category(self, word: str, name: str) -> bool:
        """Tag or untag *word* with *name*; returns True if the word is now tagged.

        Raises:
            KeyError: *word* is not saved or *name* is not a known category.
        """
        saved = self._words.get(word.lower())
        if saved is None:
            raise KeyError(word)
        if name not in self._categories:
            raise KeyError(name)
        if name in saved.categories:
            saved.categories = [c for c in saved.categories if c != name]
            return False
        saved.categories = [*saved.categories, name]
        return True

    def words(self, category: str | None = None) -> list[SavedWord]:
        """Saved words in insertion order, optionally only those tagged *category*."""
        return [w for w in self._words.values() if category is None or category in w.categories]

    def uncategorized(self) -> list[SavedWord]:
        return [w for w in self._words.values() if not w.categories]
