"""Tests for the subtitle endpoints (no external binaries or API keys required)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
from fastapi.testclient import TestClient

from src.config import settings
from src.media.process import CommandOutcome
from tests.fakes import failing_ffmpeg, fake_ffmpeg, fake_yt_dlp, json_response, ok

VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64


def _leftovers(upload_dir: Path) -> list[Path]:
    return sorted(upload_dir.iterdir()) if upload_dir.exists() else []


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200


def test_root_message(client: TestClient) -> None:
    assert client.get("/").json() == {"message": "CapLearn API is running"}


# ---------------------------------------------------------------------------
# Upload endpoint
# ---------------------------------------------------------------------------


def test_upload_requires_file(client: TestClient) -> None:
    response = client.post("/api/subtitles/upload")
    assert response.status_code == 400
    assert response.json() == {"error": "No file uploaded"}


def test_upload_success_returns_subtitles_and_cleans_up(
    client: TestClient, upload_dir: Path, verbose_payload: dict[str, object]
) -> None:
    with (
        patch("src.media.extraction.run_command", side_effect=fake_ffmpeg) as ffmpeg,
        patch("src.media.transcription.httpx.post", return_value=json_response(200, verbose_payload)),
    ):
        response = client.post(
            "/api/subtitles/upload",
            files={"video": ("clip.mp4", VIDEO_BYTES, "video/mp4")},
        )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["success"] is True
    transcription = data["transcription"]
    assert transcription["text"] == " Hello there. General Kenobi."
    assert [s["id"] for s in transcription["segments"]] == [0, 1]
    assert transcription["segments"][0]["words"][1] == {"word": "there.", "start": 0.52, "end": 1.84}
    assert transcription["segments"][1]["words"] == []
    assert "sourceInfo" not in transcription

    # ffmpeg was pointed at the saved upload and a sibling .mp3
    command = ffmpeg.call_args.args[0]
    assert command[command.index("-i") + 1].endswith(".mp4")
    assert command[-1].endswith(".mp4.mp3")

    # Background cleanup has run by the time the test client returns.
    assert _leftovers(upload_dir) == []


def test_upload_oversized_file_rejected_before_extraction(
    client: TestClient, upload_dir: Path
) -> None:
    ffmpeg = MagicMock()
    with (
        patch.object(settings, "max_upload_bytes", 1024),
        patch("src.media.extraction.run_command", ffmpeg),
    ):
        response = client.post(
            "/api/subtitles/upload",
            files={"video": ("big.mp4", b"\x00" * 1025, "video/mp4")},
        )

    assert response.status_code == 400
    assert "exceeds" in response.json()["error"]
    ffmpeg.assert_not_called()
    assert _leftovers(upload_dir) == []


def test_upload_transcode_failure_returns_500_and_removes_partial_output(
    client: TestClient, upload_dir: Path
) -> None:
    with patch("src.media.extraction.run_command", side_effect=failing_ffmpeg):
        response = client.post(
            "/api/subtitles/upload",
            files={"video": ("clip.mp4", VIDEO_BYTES, "video/mp4")},
        )

    assert response.status_code == 500
    body = response.json()
    assert body == {"error": "Failed to convert video to MP3: Invalid data found when processing input"}
    assert _leftovers(upload_dir) == []


def test_upload_transcription_failure_returns_only_error(
    client: TestClient, upload_dir: Path
) -> None:
    error_body = {"error": {"message": "Invalid API Key", "type": "invalid_request_error"}}
    with (
        patch("src.media.extraction.run_command", side_effect=fake_ffmpeg),
        patch("src.media.transcription.httpx.post", return_value=json_response(401, error_body)),
    ):
        response = client.post(
            "/api/subtitles/upload",
            files={"video": ("clip.mp4", VIDEO_BYTES, "video/mp4")},
        )

    assert response.status_code == 500
    body = response.json()
    assert list(body) == ["error"]
    assert "401" in body["error"]
    assert "Invalid API Key" in body["error"]
    assert _leftovers(upload_dir) == []


def test_upload_network_error_returns_500(client: TestClient, upload_dir: Path) -> None:
    with (
        patch("src.media.extraction.run_command", side_effect=fake_ffmpeg),
        patch(
            "src.media.transcription.httpx.post",
            side_effect=httpx.ConnectError("connection refused"),
        ),
    ):
        response = client.post(
            "/api/subtitles/upload",
            files={"video": ("clip.mp4", VIDEO_BYTES, "video/mp4")},
        )

    assert response.status_code == 500
    assert "connection refused" in response.json()["error"]
    assert _leftovers(upload_dir) == []


def test_upload_malformed_transcript_is_server_error(
    client_no_raise: TestClient, upload_dir: Path
) -> None:
    """A transcript missing required keys is a bug, surfaced as a generic 500."""
    with (
        patch("src.media.extraction.run_command", side_effect=fake_ffmpeg),
        patch(
            "src.media.transcription.httpx.post",
            return_value=json_response(200, {"segments": [{"id": 0}]}),
        ),
    ):
        response = client_no_raise.post(
            "/api/subtitles/upload",
            files={"video": ("clip.mp4", VIDEO_BYTES, "video/mp4")},
        )

    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}
    assert _leftovers(upload_dir) == []


# ---------------------------------------------------------------------------
# YouTube endpoint
# ---------------------------------------------------------------------------


def test_youtube_empty_url_is_rejected_before_any_process(client: TestClient) -> None:
    yt_dlp = MagicMock()
    with patch("src.media.acquisition.run_command", yt_dlp):
        response = client.post("/api/subtitles/youtube", json={"youtubeUrl": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "No YouTube URL provided"}
    yt_dlp.assert_not_called()


def test_youtube_missing_body_is_invalid_input(client: TestClient) -> None:
    response = client.post("/api/subtitles/youtube")
    assert response.status_code == 400
    assert "error" in response.json()


def test_youtube_success_includes_source_info(
    client: TestClient, upload_dir: Path, verbose_payload: dict[str, object]
) -> None:
    url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    with (
        patch("src.media.acquisition.run_command", side_effect=fake_yt_dlp()) as yt_dlp,
        patch("src.media.extraction.run_command", side_effect=fake_ffmpeg),
        patch("src.media.transcription.httpx.post", return_value=json_response(200, verbose_payload)),
    ):
        response = client.post("/api/subtitles/youtube", json={"youtubeUrl": url})

    assert response.status_code == 200, response.text
    transcription = response.json()["transcription"]
    assert transcription["sourceInfo"] == {
        "title": "Sample Video",
        "url": url,
        "videoId": "dQw4w9WgXcQ",
    }
    assert len(transcription["segments"]) == 2

    download_cmd = yt_dlp.call_args_list[0].args[0]
    assert download_cmd[0] == settings.yt_dlp_path
    assert download_cmd[-1] == url
    assert "--max-filesize" in download_cmd
    assert _leftovers(upload_dir) == []


def test_youtube_download_without_output_file_fails(client: TestClient, upload_dir: Path) -> None:
    with patch("src.media.acquisition.run_command", return_value=ok()):
        response = client.post(
            "/api/subtitles/youtube", json={"youtubeUrl": "https://youtu.be/abc"}
        )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to download YouTube video: File not found"}
    assert _leftovers(upload_dir) == []


def test_youtube_metadata_failure_aborts_and_removes_download(
    client: TestClient, upload_dir: Path
) -> None:
    download = fake_yt_dlp()

    def yt_dlp(command: list[str]) -> CommandOutcome:
        if "--skip-download" in command:
            return CommandOutcome(1, "", "ERROR: [youtube] abc: Video unavailable")
        return download(command)

    ffmpeg = MagicMock()
    with (
        patch("src.media.acquisition.run_command", side_effect=yt_dlp),
        patch("src.media.extraction.run_command", ffmpeg),
    ):
        response = client.post(
            "/api/subtitles/youtube", json={"youtubeUrl": "https://youtu.be/abc"}
        )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to get video info: ERROR: [youtube] abc: Video unavailable"
    }
    ffmpeg.assert_not_called()
    assert _leftovers(upload_dir) == []
