"""Speech-to-text client for an OpenAI-compatible transcription endpoint (Groq)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from src.media.errors import ErrorKind, Ok, Result, fail
from src.media.models import Transcript

logger = logging.getLogger(__name__)


def build_form_fields(model: str) -> dict[str, Any]:
    """Multipart fields requesting verbose JSON with word and segment timings."""
    return {
        "model": model,
        "response_format": "verbose_json",
        "timestamp_granularities[]": ["word", "segment"],
    }


def transcribe_audio(
    audio_path: Path,
    api_key: str,
    endpoint: str,
    model: str,
) -> Result[Transcript]:
    """Upload *audio_path* and return the parsed transcript.

    Single attempt, no retry. The request has no timeout and no body size
    limit; the audio of a long video can be tens of megabytes.
    """
    if not api_key:
        return fail(ErrorKind.TRANSCRIPTION_FAILED, "GROQ_API_KEY is not configured")

    try:
        with audio_path.open("rb") as audio_stream:
            response = httpx.post(
                endpoint,
                headers={"Authorization": f"Bearer {api_key}"},
                files={"file": (audio_path.name, audio_stream, "audio/mpeg")},
                data=build_form_fields(model),
                timeout=None,
            )
    except (httpx.HTTPError, OSError) as exc:
        logger.error("Transcription request failed: %s", exc)
        return fail(ErrorKind.TRANSCRIPTION_FAILED, f"Transcription request failed: {exc}")

    if not response.is_success:
        body = response.text.strip()
        logger.error("Transcription API returned %d: %s", response.status_code, body)
        return fail(
            ErrorKind.TRANSCRIPTION_FAILED,
            f"Transcription API returned {response.status_code}: {body or response.reason_phrase}",
        )

    try:
        payload = response.json()
    except ValueError:
        return fail(ErrorKind.TRANSCRIPTION_FAILED, "Transcription API returned invalid JSON")
    if not isinstance(payload, dict):
        return fail(ErrorKind.TRANSCRIPTION_FAILED, "Transcription API returned an unexpected body")

    return Ok(Transcript.from_payload(payload))
