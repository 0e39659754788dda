# File: inflio/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. All feature models (Transcription, Persona, AppState) inherit from this.
Base = declarative_base()
