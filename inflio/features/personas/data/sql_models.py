from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, JSON
from inflio.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class PersonaModel(Base):
    __tablename__ = "personas"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, default="")

    # Photo records are small and always read together with the persona
    photos = Column(JSON, default=list)
    tags = Column(JSON, default=list)

    # Order of the list as last saved
    position = Column(Integer, nullable=False, default=0)

    is_default = Column(Boolean, default=False)
    usage_count = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now)

class AppStateModel(Base):
    """
    Small key/value table for per-install UI state (e.g. the active persona).
    """
    __tablename__ = "app_state"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
