"""Loguru sink setup shared by the command-line entry points."""
from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from static_queue.core.config import LoggingSettings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} - {level} - {name}:{function} - {message}"


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """Replace loguru's default sink with the configured ones."""
    settings = settings or LoggingSettings()
    lvl = settings.level
    logger.remove()
    logger.add(sys.stderr, level=lvl, format=LOG_FORMAT)
    if settings.file:
        logger.add(
            settings.file,
            level=lvl,
            format=LOG_FORMAT,
            rotation=settings.rotation,
            mode="w",
        )
    logger.debug(f"Logging level set to {lvl}")


__all__ = ["setup_logging", "LOG_FORMAT"]
