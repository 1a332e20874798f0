"""Shared utilities"""

from .cache import TTLCache
from .logging import get_logger

__all__ = [
    "TTLCache",
    "get_logger",
]
