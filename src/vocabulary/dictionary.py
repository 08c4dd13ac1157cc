"""Word definition lookup against the Free Dictionary API."""

from __future__ import annotations

import logging
import string
from urllib.parse import quote

import httpx

from src.config import settings
from src.vocabulary.models import DictionaryEntry

logger = logging.getLogger(__name__)

# Curly quotes and dashes show up in Whisper output next to words.
_STRIP_CHARS = string.punctuation + string.whitespace + "“”‘’…—–"


class DictionaryLookupError(RuntimeError):
    """The dictionary service could not be reached or answered with an error."""


def normalize_word(raw: str) -> str:
    """Trim surrounding punctuation and whitespace and lowercase a subtitle token."""
    return raw.strip(_STRIP_CHARS).lower()


def lookup_word(
    raw_word: str,
    base_url: str | None = None,
    timeout: float = 10.0,
) -> DictionaryEntry | None:
    """Return the first dictionary entry for *raw_word*.

    Returns None when the word is empty or the dictionary has no definition
    for it (HTTP 404).

    Raises:
        DictionaryLookupError: Network failure, any other non-2xx status, or a
            body that is not JSON.
    """
    word = normalize_word(raw_word)
    if not word:
        return None

    url = f"{(base_url or settings.dictionary_api_url).rstrip('/')}/{quote(word)}"
    try:
        r = httpx.get(url, timeout=timeout)
    except httpx.HTTPError as exc:
        raise DictionaryLookupError(f"Dictionary lookup failed: {exc}") from exc

    if r.status_code == 404:
        logger.info("No definition found for %r", word)
        return None
    if not r.is_success:
        raise DictionaryLookupError(f"Dictionary API returned {r.status_code} for {word!r}")

    try:
        data = r.json()
    except ValueError as exc:
        raise DictionaryLookupError("Dictionary API returned invalid JSON") from exc
    if not isinstance(data, list) or not data:
        return None
    return DictionaryEntry.from_payload(data[0])
