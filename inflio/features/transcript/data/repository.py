import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import sessionmaker
from inflio.core.database.connection import SessionLocal
from .sql_models import TranscriptionModel, TranscriptionSegmentModel
from ..domain.interfaces import ITranscriptRepository
from ..domain.models import Segment, Transcription

logger = logging.getLogger(__name__)


class SqlTranscriptRepo(ITranscriptRepository):
    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def save(self, project_id: str, transcription: Transcription) -> UUID:
        with self.session_factory() as db:
            try:
                header = TranscriptionModel(
                    project_id=project_id,
                    language=transcription.language,
                    duration_seconds=transcription.duration,
                    full_text=transcription.text
                )
                db.add(header)
                db.flush()  # Flush to generate ID

                for position, seg in enumerate(transcription.segments):
                    db.add(TranscriptionSegmentModel(
                        transcription_id=header.id,
                        segment_key=seg.id,
                        position=position,
                        start_time=seg.start,
                        end_time=seg.end,
                        text=seg.text,
                        confidence=seg.confidence
                    ))

                db.commit()
                logger.info(f"Transcription saved. ID: {header.id}, Segments: {len(transcription.segments)}")
                return header.id
            except Exception:
                db.rollback()
                raise

    def load(self, transcription_id: UUID) -> Optional[Transcription]:
        with self.session_factory() as db:
            header = db.get(TranscriptionModel, transcription_id)
            return self._to_domain(header) if header else None

    def load_latest_for_project(self, project_id: str) -> Optional[Transcription]:
        with self.session_factory() as db:
            header = (
                db.query(TranscriptionModel)
                .filter(TranscriptionModel.project_id == project_id)
                .order_by(TranscriptionModel.created_at.desc())
                .first()
            )
            return self._to_domain(header) if header else None

    @staticmethod
    def _to_domain(header: TranscriptionModel) -> Transcription:
        segments = [
            Segment(
                id=row.segment_key,
                start=row.start_time,
                end=row.end_time,
                text=row.text,
                confidence=row.confidence or 0.0
            )
            for row in header.segments
        ]
        return Transcription(
            segments=segments,
            text=header.full_text,
            language=header.language or "en",
            duration=header.duration_seconds or 0.0
        )
