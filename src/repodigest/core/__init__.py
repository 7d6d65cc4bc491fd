"""Core utilities package.

This package contains pure utility functions with no external dependencies.
"""

from repodigest.core.formatting import (
    format_size_kb,
    format_token_count,
)

__all__ = [
    "format_size_kb",
    "format_token_count",
]
