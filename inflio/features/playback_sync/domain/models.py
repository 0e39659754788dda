from dataclasses import dataclass
from enum import Enum, unique

from inflio.features.transcript.domain.models import Segment

@unique
class PlaybackEvent(str, Enum):
    TIME_UPDATE = "timeupdate"  # periodic, roughly every 250ms while playing
    SEEKED = "seeked"

@unique
class SyncState(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"

@dataclass(frozen=True)
class ElementBox:
    """
    Vertical extent of a rendered element, measured from the top of the
    scroll container's content.
    """
    top: float
    height: float

    @property
    def midpoint(self) -> float:
        return self.top + self.height / 2

def segment_element_id(segment: Segment) -> str:
    """DOM id under which a segment row is rendered."""
    return f"segment-{segment.id}"
