"""Subtitle export (SRT, WebVTT, timestamped plain text) and SRT/WebVTT import."""

from __future__ import annotations

import re

from src.api.models import FormattedSubtitles, SubtitleSegment

_BLOCK_SEPARATOR = re.compile(r"\r?\n\s*\r?\n")
_SRT_TIMING = re.compile(r"(\d{2}:\d{2}:\d{2},\d{3}) --> (\d{2}:\d{2}:\d{2},\d{3})")
_VTT_TIMING = re.compile(r"((?:\d{2}:)?\d{2}:\d{2}\.\d{3}) --> ((?:\d{2}:)?\d{2}:\d{2}\.\d{3})")


def _split(seconds: float) -> tuple[int, int, int, int]:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    millis = int((seconds % 1) * 1000)
    return hours, minutes, secs, millis


def format_srt_timestamp(seconds: float) -> str:
    """Format seconds as SRT timestamp: HH:MM:SS,mmm."""
    hours, minutes, secs, millis = _split(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def format_vtt_timestamp(seconds: float) -> str:
    """Format seconds as WebVTT timestamp: HH:MM:SS.mmm."""
    hours, minutes, secs, millis = _split(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def format_clock(seconds: float) -> str:
    """Format seconds as HH:MM:SS."""
    hours, minutes, secs, _ = _split(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def to_srt(subtitles: FormattedSubtitles) -> str:
    if not subtitles.segments:
        return ""
    parts: list[str] = []
    for index, segment in enumerate(subtitles.segments, start=1):
        parts.append(
            f"{index}\n"
            f"{format_srt_timestamp(segment.start)} --> {format_srt_timestamp(segment.end)}\n"
            f"{segment.text}\n\n"
        )
    return "".join(parts)


def to_vtt(subtitles: FormattedSubtitles) -> str:
    if not subtitles.segments:
        return ""
    parts = ["WEBVTT\n\n"]
    for index, segment in enumerate(subtitles.segments, start=1):
        parts.append(
            f"{index}\n"
            f"{format_vtt_timestamp(segment.start)} --> {format_vtt_timestamp(segment.end)}\n"
            f"{segment.text}\n\n"
        )
    return "".join(parts)


def to_txt(subtitles: FormattedSubtitles) -> str:
    """Format: ``[HH:MM:SS - HH:MM:SS] text``, one segment per line."""
    return "".join(
        f"[{format_clock(s.start)} - {format_clock(s.end)}] {s.text.strip()}\n"
        for s in subtitles.segments
    )


def time_to_seconds(value: str) -> float:
    """Parse ``HH:MM:SS,mmm`` or ``HH:MM:SS.mmm`` (hours optional) into seconds."""
    seconds = 0.0
    for part in value.replace(",", ".").split(":"):
        seconds = seconds * 60 + float(part)
    return seconds


def _parse_cues(content: str, timing: re.Pattern[str]) -> FormattedSubtitles:
    segments: list[SubtitleSegment] = []
    for block in _BLOCK_SEPARATOR.split(content.strip()):
        lines = block.splitlines()
        # The cue number (SRT) or identifier (VTT) is optional before the timing line.
        for position, line in enumerate(lines):
            match = timing.search(line)
            if match:
                text = " ".join(cue.strip() for cue in lines[position + 1 :] if cue.strip())
                if text:
                    segments.append(
                        SubtitleSegment(
                            id=len(segments),
                            start=time_to_seconds(match.group(1)),
                            end=time_to_seconds(match.group(2)),
                            text=text,
                        )
                    )
                break
    return FormattedSubtitles(text=" ".join(s.text for s in segments), segments=segments)


def parse_srt(content: str) -> FormattedSubtitles:
    """Read an SRT file. Blocks without a timing line or text are skipped."""
    return _parse_cues(content, _SRT_TIMING)


def parse_vtt(content: str) -> FormattedSubtitles:
    """Read a WebVTT file. The header and NOTE/STYLE blocks have no timing line and are skipped."""
    return _parse_cues(content, _VTT_TIMING)


def parse_subtitles(content: str, fmt: str) -> FormattedSubtitles:
    """Dispatch on the file extension (``srt`` or ``vtt``)."""
    try:
        parser = SUBTITLE_PARSERS[fmt.lower().lstrip(".")]
    except KeyError:
        raise ValueError(f"Unsupported subtitle format: {fmt}") from None
    return parser(content)


SUBTITLE_FORMATS = {
    "srt": (to_srt, "application/x-subrip"),
    "vtt": (to_vtt, "text/vtt"),
    "txt": (to_txt, "text/plain"),
}

SUBTITLE_PARSERS = {
    "srt": parse_srt,
    "vtt": parse_vtt,
}
