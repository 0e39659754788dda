from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .models import Transcription

class ITranscriptRepository(ABC):
    """
    Contract for transcript persistence.
    The speech-to-text backend writes transcripts; the dashboard reads and edits them.
    """

    @abstractmethod
    def save(self, project_id: str, transcription: Transcription) -> UUID:
        """
        Stores a full transcription (header and ordered segments) for a project.

        Returns:
            UUID of the stored transcription.
        """
        pass

    @abstractmethod
    def load(self, transcription_id: UUID) -> Optional[Transcription]:
        """Returns the transcription, or None if it does not exist."""
        pass

    @abstractmethod
    def load_latest_for_project(self, project_id: str) -> Optional[Transcription]:
        """Returns the most recently saved transcription for a project, or None."""
        pass
