"""Audio extraction with ffmpeg."""

from __future__ import annotations

import logging
from pathlib import Path

from src.media.errors import ErrorKind, Ok, Result, fail
from src.media.models import MediaJob
from src.media.process import run_command
from src.pipeline_config import DEFAULT_AUDIO_PROFILE, AudioProfile

logger = logging.getLogger(__name__)


def audio_path_for(video_path: Path, profile: AudioProfile = DEFAULT_AUDIO_PROFILE) -> Path:
    """Sibling output path, e.g. ``uploads/171.mp4`` -> ``uploads/171.mp4.mp3``."""
    return video_path.with_name(f"{video_path.name}.{profile.extension}")


def extract_audio(
    job: MediaJob,
    video_path: Path,
    ffmpeg_path: str,
    profile: AudioProfile = DEFAULT_AUDIO_PROFILE,
) -> Result[Path]:
    """Strip the video stream and transcode the audio to *profile*.

    The output is tracked before ffmpeg starts so a partial file left by a
    failed run is still removed.
    """
    output_path = job.files.track(audio_path_for(video_path, profile))

    outcome = run_command(
        [
            ffmpeg_path,
            "-y",
            "-i",
            str(video_path),
            "-vn",
            "-ar",
            str(profile.sample_rate),
            "-ac",
            str(profile.channels),
            "-b:a",
            profile.bitrate,
            str(output_path),
        ]
    )
    if not outcome.ok:
        return fail(
            ErrorKind.TRANSCODE_FAILED,
            f"Failed to convert video to MP3: {outcome.reason()}",
        )

    logger.info("Converted to MP3: %s", output_path)
    job.local_audio_path = output_path
    return Ok(output_path)
