from typing import List, Optional
from uuid import UUID

from inflio.core.common.enums import SubtitleFormat
from inflio.core.config.settings import settings
from ..data.repository import SqlTranscriptRepo
from ..domain.interfaces import ITranscriptRepository
from ..domain.models import SearchMatch, Segment, Transcription
from .exports import render_export, split_long_segments
from .resolver import SegmentIndex
from .search import search_with_matches


class TranscriptService:
    """
    Facade for the Transcript Feature.
    Orchestrates persistence, lookup, search and export of caption tracks.
    """
    def __init__(self, repo: Optional[ITranscriptRepository] = None):
        self.repo = repo or SqlTranscriptRepo()
        self._index: Optional[SegmentIndex] = None

    def store(self, project_id: str, transcription: Transcription) -> UUID:
        return self.repo.save(project_id, transcription)

    def store_payload(self, project_id: str, payload: dict) -> UUID:
        """Stores a transcription received as backend JSON."""
        return self.repo.save(project_id, Transcription.from_payload(payload))

    def get(self, transcription_id: UUID) -> Optional[Transcription]:
        return self.repo.load(transcription_id)

    def get_for_project(self, project_id: str) -> Optional[Transcription]:
        return self.repo.load_latest_for_project(project_id)

    def segment_at(self, transcription: Transcription, seconds: float) -> Optional[Segment]:
        # Reuses the last index while the same track is being scrubbed
        if self._index is None or self._index.is_stale(transcription.segments, transcription.revision):
            self._index = SegmentIndex(transcription.segments, transcription.revision)
        return self._index.lookup(seconds)

    def search(self, transcription: Transcription, query: str) -> List[SearchMatch]:
        return search_with_matches(transcription.segments, query)

    def export(self, transcription: Transcription, fmt: SubtitleFormat = SubtitleFormat.SRT,
               split: bool = False) -> str:
        """
        Renders a download body. With `split`, long segments are broken up
        first so caption blocks stay readable.
        """
        if split:
            transcription = Transcription(
                segments=split_long_segments(transcription.segments, settings.SEGMENT_SPLIT_MAX_LENGTH),
                text=transcription.text,
                language=transcription.language,
                duration=transcription.duration
            )
        return render_export(transcription, fmt)
