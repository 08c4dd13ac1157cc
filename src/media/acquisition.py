"""Media acquisition: accept an uploaded video or download one from a URL."""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

from src.media.errors import ErrorKind, Ok, Result, fail
from src.media.models import MediaJob, SourceInfo
from src.media.process import run_command
from src.pipeline_config import DownloadProfile

logger = logging.getLogger(__name__)

_MB = 1024 * 1024


def timestamp_name(prefix: str = "", suffix: str = "") -> str:
    """File name derived from the current time in milliseconds.

    A short random tag keeps names unique across jobs started in the same
    millisecond.
    """
    return f"{prefix}{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}{suffix}"


def ensure_upload_dir(upload_dir: Path) -> Path:
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def accept_upload(job: MediaJob, path: Path, max_bytes: int) -> Result[Path]:
    """Validate an upload already written to *path*.

    The path is tracked by the job, so an oversized file is removed along with
    everything else when the job is released.
    """
    job.files.track(path)
    job.source_path = path

    try:
        size = path.stat().st_size
    except OSError:
        return fail(ErrorKind.INVALID_INPUT, "No file uploaded")

    if size > max_bytes:
        logger.info("Rejected upload %s: %d bytes exceeds %d", path, size, max_bytes)
        job.files.release()
        return fail(
            ErrorKind.PAYLOAD_TOO_LARGE,
            f"File size exceeds the {max_bytes // _MB}MB limit",
        )

    job.local_video_path = path
    return Ok(path)


def download_video(
    job: MediaJob,
    url: str,
    upload_dir: Path,
    yt_dlp_path: str,
    profile: DownloadProfile,
) -> Result[Path]:
    """Download *url* with yt-dlp into a timestamp-named file under *upload_dir*.

    Size and duration caps are enforced by yt-dlp itself. A video rejected by
    the duration filter exits cleanly without writing anything, which is
    reported the same way as a failed download.
    """
    if not url or not url.strip():
        return fail(ErrorKind.INVALID_INPUT, "No YouTube URL provided")
    url = url.strip()
    job.source_url = url

    output_path = job.files.track(
        ensure_upload_dir(upload_dir)
        / timestamp_name("youtube_", f".{profile.output_extension}")
    )

    logger.info("Downloading %s to %s", url, output_path)
    outcome = run_command(
        [
            yt_dlp_path,
            "-f",
            profile.format_selector,
            "--max-filesize",
            f"{profile.max_filesize_mb}M",
            "--match-filter",
            f"duration <= {profile.max_duration_seconds}",
            "-o",
            str(output_path),
            url,
        ]
    )
    if not outcome.ok:
        return fail(
            ErrorKind.DOWNLOAD_FAILED,
            f"Failed to download YouTube video: {outcome.reason()}",
        )
    if not output_path.exists():
        return fail(ErrorKind.DOWNLOAD_FAILED, "Failed to download YouTube video: File not found")

    job.local_video_path = output_path
    return Ok(output_path)


def fetch_source_info(url: str, yt_dlp_path: str) -> Result[SourceInfo]:
    """Ask yt-dlp for the video's title and id without downloading it."""
    outcome = run_command([yt_dlp_path, "--skip-download", "--print", "title", "--print", "id", url])
    if not outcome.ok:
        return fail(ErrorKind.METADATA_FAILED, f"Failed to get video info: {outcome.reason()}")

    lines = [line.strip() for line in outcome.stdout.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        return fail(
            ErrorKind.METADATA_FAILED,
            "Failed to get video info: expected title and id from downloader",
        )

    title, video_id = lines[0], lines[1]
    return Ok(SourceInfo(title=title, url=url, video_id=video_id))
