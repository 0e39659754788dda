# File: inflio/features/transcript/service/resolver.py
import logging
from bisect import bisect_right
from typing import List, Optional, Sequence

from inflio.core.config.settings import settings
from ..domain.models import Segment, is_well_formed

logger = logging.getLogger(__name__)


def _first_match(segments: Sequence[Segment], seconds: float) -> Optional[Segment]:
    for segment in segments:
        if segment.start <= seconds < segment.end:
            return segment
    return None


def find_active_segment(segments: Sequence[Segment], seconds: float) -> Optional[Segment]:
    """
    Returns the segment whose [start, end) range contains `seconds`, or None.

    If segments overlap or are out of order, the first match in sequence
    order wins. This is a single linear pass; callers resolving many times
    against the same track should keep a `SegmentIndex`.
    """
    return _first_match(segments, seconds)


class SegmentIndex:
    """
    Snapshot of a segment sequence prepared for repeated time lookups.

    Well-formed snapshots (sorted, non-overlapping) are searched with bisect
    over the start times. Anything else, and very short tracks, fall back to
    a first-match scan so the answer stays deterministic.
    """

    def __init__(self, segments: Sequence[Segment], revision: int = 0):
        self.source = segments
        self.segments: List[Segment] = list(segments)
        self.revision = revision
        self.well_formed = is_well_formed(self.segments)
        self._starts = [s.start for s in self.segments] if self.well_formed else []

        if not self.well_formed:
            logger.debug(f"Segment index over {len(self.segments)} segments is not sorted/non-overlapping; using linear scan.")

    def __len__(self) -> int:
        return len(self.segments)

    def is_stale(self, segments: Sequence[Segment], revision: int) -> bool:
        """True when `segments` is no longer the sequence this snapshot was built from."""
        return (
            segments is not self.source
            or len(segments) != len(self.segments)
            or revision != self.revision
        )

    @property
    def uses_bisect(self) -> bool:
        return self.well_formed and len(self.segments) > settings.LINEAR_SCAN_LIMIT

    def lookup(self, seconds: float) -> Optional[Segment]:
        if not self.uses_bisect:
            return _first_match(self.segments, seconds)

        idx = bisect_right(self._starts, seconds) - 1
        if idx < 0:
            return None
        candidate = self.segments[idx]
        return candidate if seconds < candidate.end else None
