# File: inflio/features/transcript/service/exports.py
import logging
import math
import re
from typing import List, Sequence

from inflio.core.common.enums import SubtitleFormat
from ..domain.models import Segment, Transcription

logger = logging.getLogger(__name__)

# A sentence is a run of text closed by terminal punctuation; a trailing
# run without punctuation still counts so no text is lost.
_SENTENCE_PATTERN = re.compile(r"[^.!?]*[.!?]+|[^.!?]+")


def format_timestamp(seconds: float, fmt: SubtitleFormat = SubtitleFormat.SRT) -> str:
    """
    Formats seconds as HH:MM:SS,mmm (SRT) or HH:MM:SS.mmm (VTT).
    Milliseconds are truncated, not rounded.
    """
    total_ms = max(0, math.floor(round(seconds * 1000, 3)))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    separator = "." if fmt == SubtitleFormat.VTT else ","
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{ms:03d}"


def format_subtitles(segments: Sequence[Segment], fmt: SubtitleFormat = SubtitleFormat.SRT) -> str:
    """Renders segments as an SRT or WebVTT document."""
    fmt = SubtitleFormat(fmt)
    if fmt == SubtitleFormat.TXT:
        raise ValueError("Plain text is not a subtitle format; use format_plain_text().")

    blocks = []
    for index, segment in enumerate(segments, start=1):
        start = format_timestamp(segment.start, fmt)
        end = format_timestamp(segment.end, fmt)
        blocks.append(f"{index}\n{start} --> {end}\n{segment.text}\n\n")

    header = "WEBVTT\n\n" if fmt == SubtitleFormat.VTT else ""
    return header + "".join(blocks)


def format_plain_text(transcription: Transcription) -> str:
    return transcription.text or transcription.joined_text()


def render_export(transcription: Transcription, fmt: SubtitleFormat) -> str:
    """Renders the download body for any supported export format."""
    fmt = SubtitleFormat(fmt)
    if fmt == SubtitleFormat.TXT:
        return format_plain_text(transcription)
    return format_subtitles(transcription.segments, fmt)


def format_duration(seconds: float) -> str:
    """M:SS display format. Invalid, zero or negative input renders as 0:00."""
    if not seconds or math.isnan(seconds) or seconds < 0:
        return "0:00"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def split_long_segments(segments: Sequence[Segment], max_length: int = 100) -> List[Segment]:
    """
    Splits segments longer than `max_length` characters at sentence boundaries.

    Timing is apportioned linearly by character count. A single sentence
    longer than `max_length` is kept whole. Child ids are
    "<parent id>-<position in output>".
    """
    result: List[Segment] = []

    for segment in segments:
        if len(segment.text) <= max_length:
            result.append(segment)
            continue

        sentences = _SENTENCE_PATTERN.findall(segment.text) or [segment.text]
        time_per_char = (segment.end - segment.start) / len(segment.text)

        current_start = segment.start
        current_text = ""

        for sentence in sentences:
            if current_text and len(current_text + sentence) > max_length:
                chunk_end = current_start + len(current_text) * time_per_char
                result.append(Segment(
                    id=f"{segment.id}-{len(result)}",
                    start=current_start,
                    end=chunk_end,
                    text=current_text.strip(),
                    confidence=segment.confidence
                ))
                current_start = chunk_end
                current_text = sentence
            else:
                current_text += sentence

        if current_text.strip():
            result.append(Segment(
                id=f"{segment.id}-{len(result)}",
                start=current_start,
                end=segment.end,
                text=current_text.strip(),
                confidence=segment.confidence
            ))

    logger.debug(f"Split {len(segments)} segments into {len(result)}")
    return result
