"""Structured logging module for repodigest.

Provides configurable logging with JSON format support and file rotation.
"""

from repodigest.logging.config import configure_logging
from repodigest.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
