"""Utility modules for chatmark.

Provides:
- hashing: hash_str for cache keys
- logger: get_logger for logging
"""

from chatmark.utils.hashing import hash_str
from chatmark.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
]
