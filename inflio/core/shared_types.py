from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class TimeRange:
    """
    Value Object representing a half-open span of playback time [start, end).
    Enforces that start_seconds is strictly before end_seconds.
    """
    start_seconds: float
    end_seconds: float

    def __post_init__(self):
        if self.start_seconds < 0:
            raise ValueError(f"Start time cannot be negative: {self.start_seconds}")
        if self.end_seconds <= self.start_seconds:
            raise ValueError(f"End time ({self.end_seconds}) must be greater than start time ({self.start_seconds})")

    @property
    def duration(self) -> float:
        return self.end_seconds - self.start_seconds

    def contains(self, seconds: float) -> bool:
        # The end bound belongs to whatever comes next.
        return self.start_seconds <= seconds < self.end_seconds

@dataclass(frozen=True)
class MediaFile:
    """
    Value Object representing a media file path.
    """
    path: Path
    validate_exists: bool = True

    def __post_init__(self):
        if str(self.path).strip() in ("", "."):
            raise ValueError("File path cannot be empty.")
        if self.validate_exists:
            if not self.path.exists():
                raise FileNotFoundError(f"Media file not found: {self.path}")
            if not self.path.is_file():
                raise ValueError(f"Path is not a file: {self.path}")

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
