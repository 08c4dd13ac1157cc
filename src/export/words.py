"""Saved-word export: CSV, JSON and Anki import format."""

from __future__ import annotations

import json
from collections.abc import Sequence

from src.vocabulary.models import DictionaryEntry, SavedWord

CSV_HEADERS = ["Word", "Definition", "Part of Speech", "Pronunciation", "Example"]


def _csv_cell(value: str) -> str:
    return value.replace('"', '""')


def _flatten_commas(value: str) -> str:
    # Commas become spaces so naive spreadsheet imports keep the columns aligned.
    return value.replace(",", " ")


def _entry(saved: SavedWord) -> DictionaryEntry:
    return saved.entry or DictionaryEntry(word=saved.word)


def words_to_csv(saved_words: Sequence[SavedWord]) -> str:
    if not saved_words:
        return ""
    lines = [",".join(CSV_HEADERS)]
    for saved in saved_words:
        entry = _entry(saved)
        row = [
            saved.word,
            _flatten_commas(entry.first_definition),
            entry.part_of_speech,
            entry.phonetic,
            _flatten_commas(entry.first_example),
        ]
        lines.append(",".join(f'"{_csv_cell(cell)}"' for cell in row))
    return "\n".join(lines)


def words_to_json(saved_words: Sequence[SavedWord]) -> str:
    if not saved_words:
        return ""
    data = []
    for saved in saved_words:
        entry = _entry(saved)
        data.append(
            {
                "word": saved.word,
                "phonetic": entry.phonetic,
                "audio": entry.audio,
                "meanings": [
                    {
                        "partOfSpeech": m.part_of_speech,
                        "definitions": [
                            {"definition": d.definition, "example": d.example}
                            for d in m.definitions
                        ],
                        "synonyms": list(m.synonyms),
                    }
                    for m in entry.meanings
                ],
            }
        )
    return json.dumps(data, indent=2, ensure_ascii=False)


def words_to_anki(saved_words: Sequence[SavedWord]) -> str:
    """Tab-separated ``word<TAB>definition<TAB>example`` lines for Anki's importer."""
    return "\n".join(
        f"{s.word}\t{_entry(s).first_definition}\t{_entry(s).first_example}" for s in saved_words
    )


WORD_FORMATS = {
    "csv": (words_to_csv, "text/csv"),
    "json": (words_to_json, "application/json"),
    "anki": (words_to_anki, "text/plain"),
}
