import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Float, Integer, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from inflio.core.database.base import Base


def utc_now():
    return datetime.now(timezone.utc)


class TranscriptionModel(Base):
    """
    The Header record for a transcription.
    """
    __tablename__ = "transcriptions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(String, nullable=False, index=True)

    language = Column(String, default="en")
    duration_seconds = Column(Float, default=0.0)

    # The Full Text Blob (TXT export)
    full_text = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now)

    segments = relationship(
        "TranscriptionSegmentModel",
        back_populates="transcription",
        cascade="all, delete-orphan",
        order_by="TranscriptionSegmentModel.position"
    )


class TranscriptionSegmentModel(Base):
    """
    The Atomic Unit. `segment_key` is the id the UI addresses the segment by.
    """
    __tablename__ = "transcription_segments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    transcription_id = Column(Uuid(as_uuid=True), ForeignKey("transcriptions.id"), nullable=False, index=True)

    segment_key = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    start_time = Column(Float, nullable=False)
    end_time = Column(Float, nullable=False)
    text = Column(Text, nullable=False)
    confidence = Column(Float, default=0.0)

    transcription = relationship("TranscriptionModel", back_populates="segments")
