"""Logging setup for the command line tool."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level; anything above 2 means DEBUG."""
    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a single stderr handler to the ``fizzy`` logger."""

    logger = logging.getLogger("fizzy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(verbosity_to_level(verbosity))
    logger.propagate = False
    logger.debug("Logger initialized")
    return logger


__all__ = ["LOG_FORMAT", "configure_logging", "verbosity_to_level"]
