from pathlib import Path
from typing import Optional
from inflio.core.common.enums import ImageFormat
from inflio.core.shared_types import MediaFile
from ..domain.interfaces import IFrameExtractor
from ..domain.models import FrameRequest
from ..data.ffmpeg_adapter import FFmpegFrameExtractor

def capture_frame(source_path: str,
                  timestamp: float,
                  image_format: ImageFormat = ImageFormat.JPEG,
                  extractor: Optional[IFrameExtractor] = None) -> bytes:
    """
    Public Service API: Grab one still from a video.

    Args:
        source_path: Absolute path to the source video.
        timestamp: Position in seconds.
        image_format: JPEG or PNG.
        extractor: Capability override; defaults to FFmpeg.
    """
    # 1. Map Primitives to Domain Objects
    request = FrameRequest(
        source=MediaFile(Path(source_path), validate_exists=True),
        timestamp=timestamp,
        image_format=ImageFormat(image_format)
    )

    # 2. Execute
    adapter = extractor or FFmpegFrameExtractor()
    return adapter.capture(request)

def capture_thumbnail(source_path: str, seek_to: float = 5.0,
                      extractor: Optional[IFrameExtractor] = None) -> bytes:
    """Project card thumbnail: a JPEG a few seconds in, or the first frame for short clips."""
    return capture_frame(source_path, seek_to, ImageFormat.JPEG, extractor)
