"""Logging configuration for Inflio."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from inflio.core.config.settings import settings

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    log_level: Union[int, str, None] = None,
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> None:
    """
    Configures the root logger with a stdout handler and a rotating file handler.

    Args:
        log_level: Minimum level. Defaults to settings.LOG_LEVEL.
        log_dir: Directory for the log file. Defaults to settings.LOG_DIR.
        log_file: Log file name. Defaults to settings.LOG_FILE.
        max_bytes: Size at which the log file rotates.
        backup_count: Number of rotated files to keep.
    """
    level = log_level if log_level is not None else settings.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    # Re-configuration replaces the previous handlers
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.setLevel(level)
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    target_dir = Path(log_dir) if log_dir is not None else settings.LOG_DIR
    log_path = target_dir / (log_file or settings.LOG_FILE)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info(f"Logging initialized. Log file: {log_path}")
    except OSError as e:
        # Console logging still works without the file handler
        root.error(f"Failed to set up file logging at {log_path}: {e}")

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
