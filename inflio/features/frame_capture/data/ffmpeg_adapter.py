import subprocess
import logging
from typing import List
from inflio.core.common.enums import ImageFormat
from inflio.core.config.settings import settings
from inflio.core.exceptions import FrameCaptureError
from ..domain.interfaces import IFrameExtractor
from ..domain.models import FrameRequest

logger = logging.getLogger(__name__)

_CODECS = {
    ImageFormat.JPEG: "mjpeg",
    ImageFormat.PNG: "png",
}

class FFmpegFrameExtractor(IFrameExtractor):
    """
    Concrete implementation of IFrameExtractor using FFmpeg.
    The image is streamed over stdout, nothing touches the disk.
    """

    def __init__(self, ffmpeg_binary: str = None):
        self.ffmpeg_binary = ffmpeg_binary or settings.FFMPEG_BINARY

    def capture(self, request: FrameRequest) -> bytes:
        try:
            data = self._run(request)
        except FrameCaptureError:
            if request.timestamp <= 0:
                raise
            data = b""

        # Seeking past the end yields no frame; fall back to the first one
        if not data and request.timestamp > 0:
            logger.warning(f"No frame at {request.timestamp}s in {request.source.path}; retrying at 0s.")
            data = self._run(request.at(0.0))

        if not data:
            raise FrameCaptureError(f"FFmpeg produced no image for {request.source.path}")
        return data

    def _build_command(self, request: FrameRequest) -> List[str]:
        # -ss before -i: fast input seeking
        # -frames:v 1: a single frame
        # -f image2pipe: write the encoded image to stdout
        cmd = [
            self.ffmpeg_binary,
            "-v", "error",
            "-ss", str(request.timestamp),
            "-i", str(request.source.path),
            "-frames:v", "1",
            "-f", "image2pipe",
            "-vcodec", _CODECS[ImageFormat(request.image_format)],
        ]
        if ImageFormat(request.image_format) == ImageFormat.JPEG:
            cmd += ["-q:v", str(request.quality)]
        cmd.append("pipe:1")
        return cmd

    def _run(self, request: FrameRequest) -> bytes:
        cmd = self._build_command(request)
        logger.info(f"Executing FFmpeg Frame Capture: {' '.join(cmd)}")

        try:
            # capture_output=True allows us to log stderr if it fails
            completed = subprocess.run(
                cmd,
                check=True,
                capture_output=True
            )
        except FileNotFoundError as e:
            raise FrameCaptureError(f"FFmpeg binary not found: {self.ffmpeg_binary}") from e
        except subprocess.CalledProcessError as e:
            error_message = e.stderr.decode(errors="replace") if e.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg Frame Capture Failed. STDERR: {error_message}")
            raise FrameCaptureError(f"Frame capture failed: {error_message}") from e

        return completed.stdout
