# /app/core/logging_config.py

import logging

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Attaches a single stderr handler to the `app` logger hierarchy.

    Safe to call more than once; the handler is only installed the first time.
    """
    logger = logging.getLogger("app")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.INFO))
