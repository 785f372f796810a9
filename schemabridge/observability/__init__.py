"""
Observability

RESPONSIBILITY: Logging setup for entry points (CLI, host applications)

WHAT THIS MODULE MUST NOT DO:
=============================
- Be called from library code: modules only create loggers via
  logging.getLogger(__name__); handlers are attached here, on request
- Change behavior: logging never affects what is returned or raised
"""

from __future__ import annotations
from typing import Optional
import logging

from rich.console import Console
from rich.logging import RichHandler

from ..config import Settings, get_settings

ROOT_LOGGER_NAME = "schemabridge"


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Attach a RichHandler (stderr) to the package logger.

    Idempotent: calling again only updates the level.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(settings.log_level_number)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(
            console=Console(stderr=True),
            show_path=settings.log_show_path,
        ))
        logger.propagate = False

    return logger
