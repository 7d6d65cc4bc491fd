"""Domain models and enums for repodigest.

This package contains the types passed into and returned from the digest
engine:

- Domain models: InputEntry, ScanRequest, DirectoryNode, DigestResult
- Domain enums: FilterMode
- Type aliases: ContentReader

Usage:
    from repodigest.domain import InputEntry, ScanRequest, FilterMode
"""

from .enums import FilterMode
from .models import (
    ContentReader,
    DigestResult,
    DirectoryNode,
    InputEntry,
    ScanRequest,
)

__all__ = [
    # Models
    "InputEntry",
    "ScanRequest",
    "DirectoryNode",
    "DigestResult",
    # Type aliases
    "ContentReader",
    # Enums
    "FilterMode",
]
