"""
Logging helpers.

Each service owns a named logger with a tagged console handler, so terminal
output shows which part of the backend emitted a line.
"""

import logging

from app.core.config import settings


def get_logger(name: str, tag: str) -> logging.Logger:
    """
    Return the logger for a service, attaching its handler once.

    Args:
        name: Logger name (usually the service or router name)
        tag: Short label shown in front of every message, e.g. "AUTH"
    """
    logger = logging.getLogger(f"connectin.{name}")
    logger.setLevel(settings.LOG_LEVEL.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            f"%(asctime)s [{tag}] %(levelname)s %(message)s"
        ))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
