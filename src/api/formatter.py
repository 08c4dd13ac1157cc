"""Reshape a transcript into the client-facing subtitle schema."""

from __future__ import annotations

from src.api.models import FormattedSubtitles, SourceInfoModel, SubtitleSegment, SubtitleWord
from src.media.models import SourceInfo, Transcript


def format_subtitles(
    transcript: Transcript, source_info: SourceInfo | None = None
) -> FormattedSubtitles:
    """Project *transcript* onto :class:`FormattedSubtitles`.

    Segment order and timings are carried over unchanged. Segments without
    word timings get an empty ``words`` list rather than omitting the field.
    """
    return FormattedSubtitles(
        text=transcript.text,
        segments=[
            SubtitleSegment(
                id=segment.id,
                start=segment.start,
                end=segment.end,
                text=segment.text,
                words=[
                    SubtitleWord(word=w.word, start=w.start, end=w.end) for w in segment.words
                ],
            )
            for segment in transcript.segments
        ],
        source_info=(
            SourceInfoModel(
                title=source_info.title,
                url=source_info.url,
                video_id=source_info.video_id,
            )
            if source_info is not None
            else None
        ),
    )
