"""Digest engine entry point."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from repodigest.digest.patterns import compile_patterns
from repodigest.digest.tree import TreeBuilder
from repodigest.domain import DigestResult, InputEntry, ScanRequest

logger = logging.getLogger(__name__)


def get_root_name(entries: Sequence[InputEntry]) -> str:
    """Return the root folder name, taken from the first entry's path.

    Args:
        entries: Scan entries.

    Returns:
        First path segment of the first entry, or "" if there are none.
    """
    if not entries:
        return ""
    return entries[0].relative_path.split("/", 1)[0]


class DigestEngine:
    """Runs digest scans.

    One call to ``digest`` performs one complete scan: patterns are compiled
    once, the tree is built once from the derived root, and the result is
    returned with a zero token count for a token counter to fill in.
    """

    def digest(self, request: ScanRequest) -> DigestResult:
        """Scan the request's entries and produce a digest.

        Args:
            request: Scan configuration and entries.

        Returns:
            DigestResult; empty (no tree, no lines) when nothing matched.

        Raises:
            UnreadableContentError: If a selected file cannot be read. No
                partial result is returned.
        """
        if not request.entries:
            logger.info("No entries to scan")
            return DigestResult()

        start_time = time.monotonic()
        root_name = get_root_name(request.entries)
        patterns = compile_patterns(request.patterns)

        logger.debug(
            "Scanning %d entries under %s (mode=%s, max_size=%d bytes, "
            "file patterns=%d, dir patterns=%d)",
            len(request.entries),
            root_name,
            request.mode.value,
            request.max_size_bytes,
            len(patterns.file_matchers),
            len(patterns.dir_matchers),
        )

        if request.workers > 1:
            with ThreadPoolExecutor(
                max_workers=request.workers, thread_name_prefix="digest-read"
            ) as executor:
                outcome = TreeBuilder(request, patterns, executor).build(
                    root_name, request.entries
                )
        else:
            outcome = TreeBuilder(request, patterns).build(root_name, request.entries)

        elapsed = time.monotonic() - start_time
        file_count = outcome.file_count if outcome is not None else 0
        summary = {
            "root": root_name,
            "file_count": file_count,
            "elapsed_seconds": round(elapsed, 3),
        }
        if outcome is None:
            logger.info(
                "No files matched among %d entries (%.2fs)",
                len(request.entries),
                elapsed,
                extra=summary,
            )
            return DigestResult()

        logger.info(
            "Digested %d of %d files (%.2fs)",
            outcome.file_count,
            len(request.entries),
            elapsed,
            extra=summary,
        )
        return DigestResult(
            file_count=outcome.file_count,
            content_lines=tuple(outcome.lines),
            directory_structure=outcome.node,
            token_count=0,
        )


def digest(request: ScanRequest) -> DigestResult:
    """Run a digest scan with a default engine.

    Args:
        request: Scan configuration and entries.

    Returns:
        DigestResult for the request.
    """
    return DigestEngine().digest(request)
