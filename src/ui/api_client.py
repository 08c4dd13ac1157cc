"""HTTP client wrapper for the CapLearn FastAPI backend."""

from __future__ import annotations

import os

import httpx
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:3000")

# Download + transcode + transcription of a 30-minute video can take minutes.
TRANSCRIBE_TIMEOUT = 600.0


def _error_message(r: httpx.Response) -> str:
    try:
        return str(r.json().get("error", r.text))
    except ValueError:
        return r.text


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def upload_video(file_content: bytes, filename: str) -> dict:  # type: ignore[type-arg]
    """Upload a video file and return its transcription, or {} on failure."""
    try:
        r = httpx.post(
            f"{API_URL}/api/subtitles/upload",
            files={"video": (filename, file_content)},
            timeout=TRANSCRIBE_TIMEOUT,
        )
        if r.is_error:
            st.error(f"Transcription failed: {_error_message(r)}")
            return {}
        return r.json().get("transcription", {})  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Upload failed: {e}")
        return {}


def transcribe_youtube(youtube_url: str) -> dict:  # type: ignore[type-arg]
    """Ask the API to download and transcribe a YouTube video."""
    try:
        r = httpx.post(
            f"{API_URL}/api/subtitles/youtube",
            json={"youtubeUrl": youtube_url},
            timeout=TRANSCRIBE_TIMEOUT,
        )
        if r.is_error:
            st.error(f"Transcription failed: {_error_message(r)}")
            return {}
        return r.json().get("transcription", {})  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Request failed: {e}")
        return {}
