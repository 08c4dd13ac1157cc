"""Pydantic request/response schemas for the CapLearn API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class YoutubeRequest(_CamelModel):
    """Request body for the /api/subtitles/youtube endpoint."""

    youtube_url: str = Field(default="", alias="youtubeUrl")


class SubtitleWord(_CamelModel):
    word: str
    start: float
    end: float


class SubtitleSegment(_CamelModel):
    """A timed subtitle line with its word timings (possibly empty)."""

    id: int
    start: float
    end: float
    text: str
    words: list[SubtitleWord] = []


class SourceInfoModel(_CamelModel):
    """Where a URL-sourced video came from."""

    title: str
    url: str
    video_id: str = Field(alias="videoId")


class FormattedSubtitles(_CamelModel):
    """Client-facing subtitle data."""

    text: str
    segments: list[SubtitleSegment]
    source_info: SourceInfoModel | None = Field(default=None, alias="sourceInfo")


class TranscriptionResponse(_CamelModel):
    """Response body for both subtitle endpoints on success."""

    success: bool = True
    transcription: FormattedSubtitles


class ErrorResponse(BaseModel):
    """Response body for any failed request."""

    error: str
