"""Shared logging helper"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a logger with a single stdout handler

    Args:
        name: logger name
        level: log level (default: LOG_LEVEL env var, else INFO)

    Returns:
        logging.Logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    if level is None:
        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)
    return logger
