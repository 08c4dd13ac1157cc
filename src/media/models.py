"""Data models for media jobs and transcripts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.media.cleanup import TempFileSet
from src.pipeline_config import JobStatus, SourceKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Word:
    """A single transcribed token with its own timing."""

    word: str
    start: float
    end: float


@dataclass(frozen=True)
class Segment:
    """A contiguous span of transcript text with timing information."""

    id: int
    start: float
    end: float
    text: str
    words: tuple[Word, ...] = ()


@dataclass(frozen=True)
class Transcript:
    """Transcript returned by the speech-to-text service."""

    text: str
    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Transcript:
        """Build a transcript from a verbose JSON response.

        Missing required keys raise ``KeyError``; a malformed payload is a bug
        in the upstream contract, not a recoverable failure.

        Whisper-style responses may list word timings at the top level instead
        of per segment. Those words are attached to the segment whose time
        range contains the word's start.
        """
        raw_segments = data.get("segments") or []
        bounds = [(float(seg["start"]), float(seg["end"])) for seg in raw_segments]

        # A word sitting exactly on a boundary belongs to the earlier segment.
        assigned: dict[int, list[Word]] = {}
        unplaced = 0
        for raw_word in data.get("words") or []:
            word = _word_from_payload(raw_word)
            for index, (start, end) in enumerate(bounds):
                if start <= word.start <= end:
                    assigned.setdefault(index, []).append(word)
                    break
            else:
                unplaced += 1
        if unplaced:
            logger.debug("Dropped %d word(s) outside every segment", unplaced)

        segments: list[Segment] = []
        for index, seg in enumerate(raw_segments):
            start, end = bounds[index]
            if seg.get("words"):
                words = tuple(_word_from_payload(w) for w in seg["words"])
            else:
                words = tuple(assigned.get(index, ()))
            segments.append(
                Segment(
                    id=int(seg.get("id", index)),
                    start=start,
                    end=end,
                    text=seg["text"],
                    words=words,
                )
            )

        return cls(text=data["text"], segments=tuple(segments))


@dataclass(frozen=True)
class SourceInfo:
    """Metadata about a remote video."""

    title: str
    url: str
    video_id: str


@dataclass
class MediaJob:
    """One request's acquisition -> transcription lifecycle.

    Owned by the handler processing the request and never shared.
    """

    source_kind: SourceKind
    files: TempFileSet = field(default_factory=TempFileSet)
    source_path: Path | None = None
    source_url: str | None = None
    local_video_path: Path | None = None
    local_audio_path: Path | None = None
    source_info: SourceInfo | None = None
    status: JobStatus = JobStatus.ACQUIRING


def _word_from_payload(data: dict[str, Any]) -> Word:
    return Word(word=data["word"], start=float(data["start"]), end=float(data["end"]))
