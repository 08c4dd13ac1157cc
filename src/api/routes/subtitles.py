"""Subtitle endpoints: transcribe an uploaded video or a YouTube URL."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Body, File, UploadFile
from fastapi.responses import JSONResponse

from src.api.formatter import format_subtitles
from src.api.models import ErrorResponse, TranscriptionResponse, YoutubeRequest
from src.config import settings
from src.media.acquisition import ensure_upload_dir, timestamp_name
from src.media.cleanup import TempFileSet
from src.media.errors import Err, ErrorKind, PipelineError
from src.media.models import MediaJob
from src.media.pipeline import run_upload_job, run_url_job
from src.pipeline_config import SourceKind

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_CHUNK_BYTES = 1 << 20

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(error: PipelineError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


async def save_upload_file(upload: UploadFile, destination: Path) -> None:
    """Stream an uploaded file to *destination* in 1 MiB chunks."""
    with destination.open("wb") as out:
        while chunk := await upload.read(UPLOAD_CHUNK_BYTES):
            out.write(chunk)
    await upload.close()


@router.post(
    "/api/subtitles/upload",
    response_model=TranscriptionResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def upload_video(
    background_tasks: BackgroundTasks,
    video: Annotated[UploadFile | None, File()] = None,
) -> TranscriptionResponse | JSONResponse:
    """Transcribe an uploaded video (multipart field ``video``).

    Temporary files are removed before an error response is sent, or after a
    successful response has been delivered.
    """
    if video is None or not video.filename:
        return error_response(PipelineError(ErrorKind.INVALID_INPUT, "No file uploaded"))

    with TempFileSet() as files:
        job = MediaJob(source_kind=SourceKind.UPLOAD, files=files)
        destination = files.track(
            ensure_upload_dir(settings.upload_dir)
            / timestamp_name(suffix=Path(video.filename).suffix)
        )
        await save_upload_file(video, destination)

        result = await asyncio.to_thread(run_upload_job, job, destination, settings)
        if isinstance(result, Err):
            return error_response(result.error)

        response = TranscriptionResponse(transcription=format_subtitles(result.value))
        background_tasks.add_task(files.hand_off())
        return response


@router.post(
    "/api/subtitles/youtube",
    response_model=TranscriptionResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def youtube_video(
    background_tasks: BackgroundTasks,
    payload: Annotated[YoutubeRequest | None, Body()] = None,
) -> TranscriptionResponse | JSONResponse:
    """Download, transcribe and describe a YouTube video (JSON ``{"youtubeUrl": ...}``)."""
    url = payload.youtube_url.strip() if payload is not None else ""
    if not url:
        return error_response(PipelineError(ErrorKind.INVALID_INPUT, "No YouTube URL provided"))

    with TempFileSet() as files:
        job = MediaJob(source_kind=SourceKind.URL, files=files)

        result = await asyncio.to_thread(run_url_job, job, url, settings)
        if isinstance(result, Err):
            return error_response(result.error)

        response = TranscriptionResponse(
            transcription=format_subtitles(result.value, job.source_info)
        )
        background_tasks.add_task(files.hand_off())
        return response
