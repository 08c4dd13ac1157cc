"""End-to-end job driver: acquire -> extract -> transcribe.

Each stage returns a tagged result. The first ``Err`` marks the job failed and
short-circuits the remaining stages; file cleanup is left to the job's
``TempFileSet``, which the caller scopes around the whole request.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.config import Settings
from src.media.acquisition import accept_upload, download_video, fetch_source_info
from src.media.errors import Err, Ok, Result
from src.media.extraction import extract_audio
from src.media.models import MediaJob, Transcript
from src.media.transcription import transcribe_audio
from src.pipeline_config import DownloadProfile, JobStatus

logger = logging.getLogger(__name__)


def _failed(job: MediaJob, result: Err) -> Err:
    job.status = JobStatus.FAILED
    logger.warning(
        "%s job failed with %s: %s",
        job.source_kind.value,
        result.error.kind.value,
        result.error.message,
    )
    return result


def _transcode_and_transcribe(
    job: MediaJob, video_path: Path, settings: Settings
) -> Result[Transcript]:
    job.status = JobStatus.EXTRACTING
    logger.info("Extracting audio from %s", video_path)
    audio = extract_audio(job, video_path, settings.ffmpeg_path)
    if isinstance(audio, Err):
        return _failed(job, audio)

    job.status = JobStatus.TRANSCRIBING
    logger.info("Transcribing %s", audio.value)
    transcript = transcribe_audio(
        audio.value,
        api_key=settings.groq_api_key,
        endpoint=settings.transcription_url,
        model=settings.transcription_model,
    )
    if isinstance(transcript, Err):
        return _failed(job, transcript)

    job.status = JobStatus.DONE
    logger.info("Transcription completed: %d segments", len(transcript.value.segments))
    return transcript


def run_upload_job(job: MediaJob, upload_path: Path, settings: Settings) -> Result[Transcript]:
    """Transcribe a video that was uploaded to *upload_path*."""
    logger.info("File uploaded: %s", upload_path)
    job.status = JobStatus.ACQUIRING
    accepted = accept_upload(job, upload_path, settings.max_upload_bytes)
    if isinstance(accepted, Err):
        return _failed(job, accepted)

    return _transcode_and_transcribe(job, accepted.value, settings)


def run_url_job(job: MediaJob, url: str, settings: Settings) -> Result[Transcript]:
    """Download *url*, fetch its title and id, then transcribe it.

    A metadata failure aborts the job even though the download succeeded.
    """
    logger.info("Processing YouTube URL: %s", url)
    job.status = JobStatus.ACQUIRING
    profile = DownloadProfile(
        max_filesize_mb=settings.max_upload_bytes // (1024 * 1024),
        max_duration_seconds=settings.max_duration_seconds,
    )
    downloaded = download_video(job, url, settings.upload_dir, settings.yt_dlp_path, profile)
    if isinstance(downloaded, Err):
        return _failed(job, downloaded)

    info = fetch_source_info(job.source_url or url, settings.yt_dlp_path)
    if isinstance(info, Err):
        return _failed(job, info)
    job.source_info = info.value

    result = _transcode_and_transcribe(job, downloaded.value, settings)
    if isinstance(result, Ok):
        logger.info("Transcribed %r (%s)", info.value.title, info.value.video_id)
    return result
