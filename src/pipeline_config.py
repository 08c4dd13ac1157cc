"""Pipeline configuration: job enums and fixed media profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceKind(str, Enum):
    """Where a job's video comes from."""

    UPLOAD = "upload"
    URL = "url"


class JobStatus(str, Enum):
    """Stage a job is in; ``done`` and ``failed`` are terminal."""

    ACQUIRING = "acquiring"
    EXTRACTING = "extracting"
    TRANSCRIBING = "transcribing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class AudioProfile:
    """Immutable transcoder output settings.

    Defaults produce stereo 44.1 kHz MP3 at 192 kbps with the video stream
    dropped, which keeps the upload to the transcription service small.
    """

    sample_rate: int = 44100
    channels: int = 2
    bitrate: str = "192k"
    extension: str = "mp3"


@dataclass(frozen=True)
class DownloadProfile:
    """Immutable downloader settings: format selector and caps."""

    format_selector: str = "bestaudio[ext=m4a]/best[ext=mp4]/best"
    max_filesize_mb: int = 100
    max_duration_seconds: int = 1800
    output_extension: str = "mp4"


DEFAULT_AUDIO_PROFILE = AudioProfile()
