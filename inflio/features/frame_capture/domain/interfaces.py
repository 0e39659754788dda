from abc import ABC, abstractmethod
from .models import FrameRequest

class IFrameExtractor(ABC):
    """
    Contract for grabbing still frames out of a video (thumbnails, persona captures).
    Abstracts away the underlying tool (FFmpeg) from the business logic.
    """

    @abstractmethod
    def capture(self, request: FrameRequest) -> bytes:
        """
        Encodes the frame at request.timestamp as an image.

        Args:
            request: Source video, position and output encoding.

        Returns:
            The encoded image bytes.

        Raises:
            FrameCaptureError: If the underlying extraction process fails.
        """
        pass
