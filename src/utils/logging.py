"""Logging utilities built on top of :mod:`loguru`."""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name} - {message}"


class _LoguruHandler(logging.Handler):
    """Forward standard-library records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: object = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO", sink: Optional[TextIO] = None) -> None:
    """Configure loguru and the standard logging bridge.

    Log lines go to stderr by default so command output on stdout stays
    machine-readable.
    """

    logger.remove()
    logger.add(sink or sys.stderr, level=level, format=LOG_FORMAT)
    logging.basicConfig(handlers=[_LoguruHandler()], level=level, force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a standard-library logger tied to loguru."""

    return logging.getLogger(name or __name__)
