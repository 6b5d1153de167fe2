"""Logging setup driven by LoggingConfig."""

from __future__ import annotations

import logging
from pathlib import Path

from shuttle_tracker.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "shuttle_tracker.log"


def configure_logging(config: LoggingConfig) -> Path:
    """Send log records to stderr and to a file under config.log_dir."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_path, encoding="utf-8"),
        ],
        force=True,
    )
    return log_path


__all__ = ["configure_logging"]
