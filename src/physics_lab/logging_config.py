# MIT License (see LICENSE)
"""
Logging setup for physics_lab.

Library modules only call ``logging.getLogger(__name__)``; nothing is
printed until an application (an example script, a host UI) calls
``setup_logging()``. The default level comes from PHYSICS_LAB_LOG_LEVEL.

Example:
    from physics_lab.logging_config import setup_logging
    setup_logging("DEBUG")
"""
from __future__ import annotations
import logging
import sys
from typing import TextIO

from .util import log_level_from_env

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

logging.getLogger("physics_lab").addHandler(logging.NullHandler())


def setup_logging(level: str | int | None = None, stream: TextIO | None = None) -> logging.Logger:
    """
    Attach a console handler to the ``physics_lab`` logger.

    Calling it again only updates the level and stream; handlers are never
    stacked.

    Args:
        level: Level name or number. Defaults to PHYSICS_LAB_LOG_LEVEL, then WARNING.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        The configured package logger.
    """
    if level is None:
        level = log_level_from_env()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("physics_lab")
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if getattr(h, "_physics_lab", False)), None)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler._physics_lab = True
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    handler.setLevel(level)
    return logger
