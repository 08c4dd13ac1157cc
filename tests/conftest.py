"""Shared fixtures: an isolated upload directory and a test client."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.config import settings


@pytest.fixture(autouse=True)
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the upload directory at a per-test temp dir."""
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", path)
    monkeypatch.setattr(settings, "groq_api_key", "test-key")
    return path


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def client_no_raise() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def verbose_payload() -> dict[str, object]:
    """A verbose_json transcription response with word timings."""
    return {
        "task": "transcribe",
        "language": "english",
        "duration": 4.2,
        "text": " Hello there. General Kenobi.",
        "segments": [
            {
                "id": 0,
                "start": 0.0,
                "end": 1.84,
                "text": " Hello there.",
                "words": [
                    {"word": "Hello", "start": 0.0, "end": 0.52},
                    {"word": "there.", "start": 0.52, "end": 1.84},
                ],
            },
            {"id": 1, "start": 1.84, "end": 4.2, "text": " General Kenobi."},
        ],
    }
