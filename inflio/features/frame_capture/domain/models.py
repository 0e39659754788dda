from dataclasses import dataclass

from inflio.core.common.enums import ImageFormat
from inflio.core.shared_types import MediaFile

@dataclass(frozen=True)
class FrameRequest:
    """
    A single still to grab from a video.
    `quality` follows ffmpeg's -q:v scale: 2 is near-lossless, 31 is worst.
    """
    source: MediaFile
    timestamp: float
    image_format: ImageFormat = ImageFormat.JPEG
    quality: int = 3

    def __post_init__(self):
        if self.timestamp < 0:
            raise ValueError(f"Timestamp cannot be negative: {self.timestamp}")
        if not 1 <= self.quality <= 31:
            raise ValueError(f"Quality must be between 1 and 31: {self.quality}")

    def at(self, timestamp: float) -> "FrameRequest":
        """Same request, different position."""
        return FrameRequest(self.source, timestamp, self.image_format, self.quality)
