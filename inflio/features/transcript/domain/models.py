# File: inflio/features/transcript/domain/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from inflio.core.shared_types import TimeRange


@dataclass
class Segment:
    """
    One caption unit: a timed utterance with display text.
    Mutable so the transcript editor can correct it in place.
    """
    id: str
    start: float
    end: float
    text: str
    confidence: float = 0.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        # TimeRange enforces start >= 0 and end > start
        TimeRange(start_seconds=self.start, end_seconds=self.end)
        if not self.text or not self.text.strip():
            raise ValueError(f"Segment {self.id} has empty text.")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Segment {self.id} confidence out of range: {self.confidence}")

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start_seconds=self.start, end_seconds=self.end)

    def contains(self, seconds: float) -> bool:
        return self.start <= seconds < self.end

    @classmethod
    def from_payload(cls, data: Dict[str, Any], index: int = 0) -> "Segment":
        raw_id = data.get("id")
        return cls(
            id=str(raw_id) if raw_id is not None else str(index),
            start=float(data["start"]),
            end=float(data["end"]),
            text=str(data["text"]).strip(),
            confidence=float(data.get("confidence") or 0.0),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class SearchMatch:
    """A segment returned by a transcript search, with the text that matched."""
    segment: Segment
    matched_text: str


@dataclass
class Transcription:
    """
    The ordered caption track of one project video.

    Segments are expected to be sorted by start and non-overlapping, but
    this is not enforced: see `is_well_formed`. Every edit bumps `revision`
    so cached lookup indexes can tell they are stale.
    """
    segments: List[Segment] = field(default_factory=list)
    text: str = ""
    language: str = "en"
    duration: float = 0.0
    revision: int = 0

    def __post_init__(self):
        if not self.text:
            self.text = self.joined_text()
        if not self.duration and self.segments:
            self.duration = max(s.end for s in self.segments)

    def joined_text(self) -> str:
        return " ".join(s.text for s in self.segments)

    @property
    def is_well_formed(self) -> bool:
        return is_well_formed(self.segments)

    def get_segment(self, segment_id: str) -> Optional[Segment]:
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None

    def update_segment(self,
                       segment_id: str,
                       text: Optional[str] = None,
                       start: Optional[float] = None,
                       end: Optional[float] = None) -> Segment:
        """
        Applies an editor correction to one segment.
        The edit is all-or-nothing: an invalid result leaves the segment untouched.

        Raises:
            KeyError: If no segment has this id.
            ValueError: If the edited segment would be invalid.
        """
        segment = self.get_segment(segment_id)
        if segment is None:
            raise KeyError(segment_id)

        candidate = Segment(
            id=segment.id,
            start=segment.start if start is None else start,
            end=segment.end if end is None else end,
            text=segment.text if text is None else text.strip(),
            confidence=segment.confidence,
        )
        segment.start, segment.end, segment.text = candidate.start, candidate.end, candidate.text
        self.text = self.joined_text()
        self.revision += 1
        return segment

    def replace_segments(self, segments: Iterable[Segment]) -> None:
        self.segments = list(segments)
        self.text = self.joined_text()
        self.revision += 1

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Transcription":
        """Builds a Transcription from the backend JSON shape."""
        segments = [Segment.from_payload(raw, index) for index, raw in enumerate(data.get("segments") or [])]
        return cls(
            segments=segments,
            text=data.get("text") or "",
            language=data.get("language") or "en",
            duration=float(data.get("duration") or 0.0),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "segments": [s.to_payload() for s in self.segments],
            "language": self.language,
            "duration": self.duration,
        }


def is_well_formed(segments: List[Segment]) -> bool:
    """True when segments are sorted by start and no two overlap."""
    for previous, current in zip(segments, segments[1:]):
        if current.start < previous.start or current.start < previous.end:
            return False
    return True
