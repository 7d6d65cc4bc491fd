"""Recursive directory tree construction.

TreeBuilder walks the grouped entries depth first. At each directory it
decides which direct children are included, reads their content, then
recurses into subdirectories in first-seen order. Directories that end up
with nothing in them are pruned.

Each call returns its own content lines and file count, and a parent only
merges a child's output after deciding to keep that child. Content from a
pruned subtree therefore never reaches the digest.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from concurrent.futures import Executor
from dataclasses import dataclass, field

from repodigest.digest.exceptions import UnreadableContentError
from repodigest.digest.extensions import is_text_eligible
from repodigest.digest.grouping import group_entries
from repodigest.digest.patterns import CompiledPatterns
from repodigest.domain import DirectoryNode, FilterMode, InputEntry, ScanRequest

logger = logging.getLogger(__name__)

HEADER_SEPARATOR = "=" * 48


def file_header(relative_path: str) -> list[str]:
    """Build the three-line header that precedes a file's content."""
    return [HEADER_SEPARATOR, f"FILE: {relative_path}", HEADER_SEPARATOR]


@dataclass
class BuildOutcome:
    """Result of building one directory.

    lines and file_count cover the directory and every kept descendant.
    """

    node: DirectoryNode
    lines: list[str] = field(default_factory=list)
    file_count: int = 0


class TreeBuilder:
    """Builds the pruned directory tree and content stream for one scan.

    The builder is stateless between calls; all accumulated output travels
    in the returned BuildOutcome.
    """

    def __init__(
        self,
        request: ScanRequest,
        patterns: CompiledPatterns,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            request: Scan configuration (size limit and mode are used).
            patterns: Matchers compiled from request.patterns.
            executor: Optional executor for reading sibling files
                concurrently. Output order is unaffected.
        """
        self.request = request
        self.patterns = patterns
        self.executor = executor

    def build(
        self,
        dir_name: str,
        entries: Sequence[InputEntry],
        depth: int = 0,
        parent_path: str = "",
    ) -> BuildOutcome | None:
        """Build the node for ``dir_name`` and everything below it.

        Args:
            dir_name: Directory name at segment ``depth`` of entry paths.
            entries: Entries lying under this directory.
            depth: Segment index of ``dir_name`` within entry paths.
            parent_path: Relative path of the parent directory ("" at root).

        Returns:
            BuildOutcome, or None if nothing under the directory survived.

        Raises:
            UnreadableContentError: If a selected file cannot be read.
        """
        dir_path = f"{parent_path}/{dir_name}" if parent_path else dir_name
        groups = group_entries(dir_name, entries, depth)

        selected = [e for e in groups.direct_children if self._accepts_file(e)]
        lines: list[str] = []
        file_names: list[str] = []
        file_count = 0

        for entry, content in zip(selected, self._read_all(selected)):
            lines.extend(file_header(entry.relative_path))
            lines.extend(content.split("\n"))
            lines.extend(("", ""))
            file_names.append(entry.name)
            file_count += 1

        subfolders: list[DirectoryNode] = []
        for child_name, child_entries in groups.subgroups.items():
            child_path = f"{dir_path}/{child_name}"
            if self._excludes_directory(child_path):
                logger.debug(
                    "Excluded directory %s",
                    child_path,
                    extra={"relative_path": child_path, "skip_reason": "excluded"},
                )
                continue

            # None means the subtree was pruned
            child = self.build(child_name, child_entries, depth + 1, dir_path)
            if child is None:
                continue

            subfolders.append(child.node)
            lines.extend(child.lines)
            file_count += child.file_count

        node = DirectoryNode(
            name=dir_name,
            file_names=tuple(file_names),
            subfolders=tuple(subfolders),
        )
        if node.is_empty:
            return None
        return BuildOutcome(node=node, lines=lines, file_count=file_count)

    def _accepts_file(self, entry: InputEntry) -> bool:
        """Apply extension, size and pattern filters to one file."""
        if not is_text_eligible(entry.name):
            _log_skip(entry, "non_text", "Skipped non-text file %s")
            return False

        if entry.size_bytes > self.request.max_size_bytes:
            _log_skip(
                entry,
                "too_large",
                "Skipped %s: %d bytes exceeds limit of %d",
                entry.size_bytes,
                self.request.max_size_bytes,
            )
            return False

        matches = self.patterns.matches_file_name(
            entry.name
        ) or self.patterns.matches_path(entry.relative_path)

        if self.request.mode is FilterMode.EXCLUDE and matches:
            _log_skip(entry, "excluded", "Skipped %s: matches exclude pattern")
            return False
        if self.request.mode is FilterMode.INCLUDE and not matches:
            _log_skip(entry, "not_included", "Skipped %s: no include pattern matched")
            return False
        return True

    def _excludes_directory(self, dir_path: str) -> bool:
        """Check whether a subdirectory is excluded before descending into it.

        Exclude-mode pruning ignores the directory's contents, so it is
        decided up front and the subtree is never read. Wildcard file
        matchers never prune directories.
        """
        return self.request.mode is FilterMode.EXCLUDE and self.patterns.matches_path(
            dir_path
        )

    def _read_all(self, entries: list[InputEntry]) -> Iterator[str]:
        """Read entry contents in order, concurrently if an executor is set."""
        if self.executor is None or len(entries) < 2:
            return map(_read_content, entries)
        return self.executor.map(_read_content, entries)


def _read_content(entry: InputEntry) -> str:
    """Invoke an entry's content reader, wrapping failures with its path."""
    try:
        return entry.content_reader()
    except Exception as e:
        raise UnreadableContentError(entry.relative_path, str(e)) from e


def _log_skip(entry: InputEntry, reason: str, message: str, *args: object) -> None:
    logger.debug(
        message,
        entry.relative_path,
        *args,
        extra={"relative_path": entry.relative_path, "skip_reason": reason},
    )
