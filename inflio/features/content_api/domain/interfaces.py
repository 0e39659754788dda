from abc import ABC, abstractmethod
from inflio.core.common.enums import SubtitleFormat
from inflio.features.transcript.domain.models import Transcription

class IContentApi(ABC):
    """
    Contract for the dashboard's backend content API.
    Every call is a coroutine so a view can cancel it when it goes away.
    """

    @abstractmethod
    async def fetch_transcription(self, project_id: str) -> Transcription:
        """
        Raises:
            ContentApiError: On HTTP or transport failure.
        """
        pass

    @abstractmethod
    async def download_transcript(self, project_id: str, fmt: SubtitleFormat) -> bytes:
        """Returns the TXT/SRT/VTT download body rendered by the backend."""
        pass
