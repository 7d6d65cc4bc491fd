"""Build digest entries from a local directory.

The digest engine never touches the filesystem itself; this module turns a
directory on disk into InputEntry values whose paths are prefixed with the
directory's own name, the same shape a folder upload reports.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from repodigest.domain import ContentReader, InputEntry

logger = logging.getLogger(__name__)


def make_file_reader(path: Path) -> ContentReader:
    """Create a content reader for a file.

    Content is decoded as UTF-8; undecodable bytes become U+FFFD rather
    than failing the read.
    """

    def read() -> str:
        return path.read_text(encoding="utf-8", errors="replace")

    return read


def iter_directory_entries(
    root: Path,
    follow_symlinks: bool = False,
) -> Iterator[InputEntry]:
    """Walk a directory and yield one entry per regular file.

    Directories and files are visited in sorted order so repeated scans of
    an unchanged tree produce identical digests. When following symlinks,
    each physical directory is walked once, so a link back to an ancestor
    cannot repeat files.

    Args:
        root: Directory to walk.
        follow_symlinks: Whether to descend into symlinked directories.

    Yields:
        InputEntry with a path of the form ``<root name>/<relative path>``.
    """
    root = root.resolve()
    root_name = root.name or root.anchor
    visited: set[tuple[int, int]] = set()

    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        dirnames.sort()
        current = Path(dirpath)
        relative_dir = current.relative_to(root).as_posix()

        if follow_symlinks:
            try:
                dir_stat = current.stat()
            except OSError as e:
                logger.warning("Cannot stat %s: %s", current, e)
                dirnames.clear()
                continue
            dir_key = (dir_stat.st_dev, dir_stat.st_ino)
            if dir_key in visited:
                logger.debug("Skipping already visited directory %s", current)
                dirnames.clear()
                continue
            visited.add(dir_key)

        for filename in sorted(filenames):
            file_path = current / filename
            try:
                if not follow_symlinks and file_path.is_symlink():
                    continue
                stat = file_path.stat()
            except OSError as e:
                logger.warning("Cannot stat %s: %s", file_path, e)
                continue

            if relative_dir == ".":
                relative_path = f"{root_name}/{filename}"
            else:
                relative_path = f"{root_name}/{relative_dir}/{filename}"

            yield InputEntry(
                relative_path=relative_path,
                size_bytes=stat.st_size,
                content_reader=make_file_reader(file_path),
            )


def entries_from_directory(
    root: Path,
    follow_symlinks: bool = False,
) -> list[InputEntry]:
    """Collect entries for every file under a directory.

    Args:
        root: Directory to walk.
        follow_symlinks: Whether to follow symbolic links.

    Returns:
        Entries in walk order.

    Raises:
        NotADirectoryError: If root is not an existing directory.
    """
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    entries = list(iter_directory_entries(root, follow_symlinks=follow_symlinks))
    logger.debug("Found %d files under %s", len(entries), root)
    return entries
