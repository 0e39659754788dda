# File: inflio/core/config/settings.py

import os
import shutil
from pathlib import Path


class Settings:
    # --- Paths ---
    # inflio/core/config/settings.py -> inflio/core/config -> inflio/core -> inflio -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    LOG_DIR: Path = Path(os.getenv("INFLIO_LOG_DIR", str(BASE_DIR / "logs")))

    # --- Database ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "inflio_db")

    @property
    def DATABASE_URL(self) -> str:
        # SQLite only when explicitly requested (local runs and the test suite).
        if os.getenv("USE_SQLITE", "false").lower() == "true":
            return os.getenv("SQLITE_URL", "sqlite:///./test_inflio.db")

        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # --- External Tools ---
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")

    # --- Content API ---
    CONTENT_API_BASE_URL: str = os.getenv("CONTENT_API_BASE_URL", "http://localhost:3000")
    CONTENT_API_TIMEOUT: float = float(os.getenv("CONTENT_API_TIMEOUT", "30.0"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "inflio.log")

    # --- Transcript Tuning ---
    # Segments longer than this (characters) are split for caption display.
    SEGMENT_SPLIT_MAX_LENGTH: int = int(os.getenv("SEGMENT_SPLIT_MAX_LENGTH", "100"))
    # Below this many segments a plain scan beats building a bisect index.
    LINEAR_SCAN_LIMIT: int = int(os.getenv("LINEAR_SCAN_LIMIT", "32"))


settings = Settings()
