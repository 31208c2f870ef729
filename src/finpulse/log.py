"""
Logging helpers.

Every module asks for its logger through ``setup_logger`` so that format and
level stay consistent between the CLI, the pipeline and the providers.
"""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_level(default: int) -> int:
    raw = os.getenv("FINPULSE_LOG_LEVEL", "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Return a console logger named ``name``.

    ``FINPULSE_LOG_LEVEL`` (DEBUG/INFO/WARNING/...) overrides ``level``.
    Calling it twice for the same name does not duplicate handlers.
    """
    logger = logging.getLogger(name)
    effective_level = _env_level(level)
    logger.setLevel(effective_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(effective_level)

    return logger
