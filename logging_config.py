"""
logging_config.py - Centralized logging configuration.

Every module gets its logger through get_logger(__name__); the API server
and the CLI call setup_logging() once at startup.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def setup_logging(level: Optional[int | str] = None, json_format: Optional[bool] = None) -> None:
    """Configure root logger with consistent formatting.

    Args:
        level: Logging level. Falls back to LOG_LEVEL, then INFO.
        json_format: If True, emit JSON-like log lines. Falls back to LOG_JSON.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if json_format is None:
        json_format = _env_flag("LOG_JSON")

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if json_format:
        formatter = logging.Formatter(
            '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
            '"module":"%(name)s","message":"%(message)s"}',
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(name)-20s] %(levelname)-7s %(message)s",
            datefmt="%H:%M:%S",
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    # Quiet noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
