"""Logging configuration helpers for the banner service."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Client libraries log every request at INFO; banner logs already cover that.
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def _log_path() -> Path:
    log_dir = Path(os.getenv("APP_LOG_DIR", "logs"))
    return log_dir / os.getenv("APP_LOG_FILENAME", "latest-run.log")


def _normalise_level(level: Optional[str | int]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.strip().upper()
        if value.isdigit():
            return int(value)
        resolved = logging.getLevelName(value)
        if isinstance(resolved, int):
            return resolved
    return logging.INFO


def configure_logging(level: Optional[str | int] = None) -> Path:
    """Send root logging to the console and to a per-run log file.

    The file is truncated each time so a run's log starts empty. Returns the
    file path.
    """

    log_level = _normalise_level(level)
    log_path = _log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_path, mode="w", encoding="utf-8"),
        ],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    logging.getLogger(__name__).info("Banner service logs initialised at %s", log_path)
    return log_path
