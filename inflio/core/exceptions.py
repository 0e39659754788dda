"""Custom exceptions for Inflio."""

from typing import Optional


class InflioError(Exception):
    """Base class for exceptions raised by Inflio."""
    pass


class FrameCaptureError(InflioError, RuntimeError):
    """Raised when a video frame cannot be extracted."""
    pass


class PersonaImportError(InflioError, ValueError):
    """Raised when a persona export payload cannot be imported."""
    pass


class ContentApiError(InflioError):
    """Raised when the backend content API answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
