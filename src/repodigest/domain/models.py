"""Domain models for repodigest.

These models describe one digest scan: the flat list of input files, the
immutable request that configures the scan, and the tree plus line stream
that the scan produces.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from .enums import FilterMode

# Zero-argument callable returning a file's full text content.
ContentReader = Callable[[], str]

KILOBYTE = 1024


@dataclass(frozen=True)
class InputEntry:
    """One source file offered to the digest engine.

    The content reader is only invoked if the entry is selected, and at
    most once per scan.
    """

    relative_path: str  # Slash-delimited, prefixed with the root folder name
    size_bytes: int
    content_reader: ContentReader = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        """Bare file name (last path segment)."""
        return self.relative_path.rsplit("/", 1)[-1]

    @property
    def segments(self) -> list[str]:
        """Path segments split on '/'."""
        return self.relative_path.split("/")


@dataclass(frozen=True)
class ScanRequest:
    """Immutable configuration for one digest scan."""

    entries: tuple[InputEntry, ...]
    max_size_bytes: int
    mode: FilterMode = FilterMode.EXCLUDE
    patterns: tuple[str, ...] = ()
    # Maximum concurrent content reads within one directory
    workers: int = 1

    def __post_init__(self) -> None:
        """Normalize sequences to tuples and validate."""
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "patterns", tuple(self.patterns or ()))
        object.__setattr__(self, "mode", FilterMode.parse(self.mode))
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @classmethod
    def from_kilobytes(
        cls,
        entries: Sequence[InputEntry],
        max_size_kb: int,
        mode: FilterMode | str = FilterMode.EXCLUDE,
        patterns: Sequence[str] | None = None,
        workers: int = 1,
    ) -> "ScanRequest":
        """Build a request from a size limit expressed in kilobytes.

        Args:
            entries: Files to scan.
            max_size_kb: Size ceiling in kB (1 kB = 1024 bytes).
            mode: Pattern polarity.
            patterns: Include/Exclude patterns, or None for no filtering.
            workers: Maximum concurrent content reads.

        Returns:
            ScanRequest with the limit converted to bytes.
        """
        return cls(
            entries=tuple(entries),
            max_size_bytes=max_size_kb * KILOBYTE,
            mode=FilterMode.parse(mode),
            patterns=tuple(patterns or ()),
            workers=workers,
        )


@dataclass(frozen=True)
class DirectoryNode:
    """One directory in the reconstructed tree.

    file_names and subfolders keep scan discovery order; sorting is left to
    renderers. A node with neither files nor subfolders never appears in the
    tree.
    """

    name: str
    file_names: tuple[str, ...] = ()
    subfolders: tuple["DirectoryNode", ...] = ()

    @property
    def is_empty(self) -> bool:
        """True if the node has no files and no subfolders."""
        return not self.file_names and not self.subfolders

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable nested dict."""
        return {
            "name": self.name,
            "files": list(self.file_names),
            "subfolders": [folder.to_dict() for folder in self.subfolders],
        }


@dataclass(frozen=True)
class DigestResult:
    """Output of one digest scan."""

    file_count: int = 0
    content_lines: tuple[str, ...] = ()
    directory_structure: DirectoryNode | None = None
    # Filled in by a token counter after the engine returns
    token_count: int = 0

    @property
    def text(self) -> str:
        """Content lines joined with newlines."""
        return "\n".join(self.content_lines)

    def with_token_count(self, token_count: int) -> "DigestResult":
        """Return a copy of this result with the token count set."""
        return replace(self, token_count=token_count)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "file_count": self.file_count,
            "token_count": self.token_count,
            "directory_structure": (
                self.directory_structure.to_dict()
                if self.directory_structure is not None
                else None
            ),
            "content": self.text,
        }
