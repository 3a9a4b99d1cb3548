"""Logging configuration helpers."""

import logging
import os


def configure_logging(level: str = "") -> None:
    """Configure the drinkmate logger with a single stream handler."""
    logger = logging.getLogger("drinkmate")
    logger.setLevel((level or os.environ.get("LOG_LEVEL", "INFO")).upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
