"""
Logging configuration.

Console logging with timestamps and levels under the ``plagscope`` namespace.
"""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logging_configured = False


def setup_logging(level: str = "INFO", app_name: str = "plagscope") -> logging.Logger:
    """Configure the application logger once and return it.

    Later calls return the already-configured logger untouched.
    """
    global _logging_configured

    logger = logging.getLogger(app_name)
    if _logging_configured:
        return logger

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(log_level)

    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _logging_configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, e.g. ``get_logger("scoring")``."""
    return logging.getLogger(f"plagscope.{name}")
