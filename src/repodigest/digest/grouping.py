"""Grouping of flat entries by directory level."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from repodigest.domain import InputEntry


@dataclass
class EntryGroups:
    """Entries under one directory, split by depth.

    subgroups preserves the order in which subdirectory names were first
    seen; entries within each subgroup keep their input order.
    """

    direct_children: list[InputEntry] = field(default_factory=list)
    subgroups: dict[str, list[InputEntry]] = field(default_factory=dict)


def group_entries(
    dir_name: str,
    entries: Iterable[InputEntry],
    depth: int = 0,
) -> EntryGroups:
    """Partition entries lying under ``dir_name``.

    Paths are examined from segment ``depth`` onwards, so entries keep
    their full relative path at every level of the tree. Relative to that
    offset, ``dir_name/file`` is a direct child and ``dir_name/sub/...``
    belongs to the ``sub`` subgroup. Entries outside ``dir_name`` are
    ignored.

    Args:
        dir_name: Name of the directory being grouped.
        entries: Entries expected to lie under ``dir_name``.
        depth: Index of the segment that holds ``dir_name``.

    Returns:
        EntryGroups with direct children and per-subdirectory entries.
    """
    groups = EntryGroups()
    for entry in entries:
        segments = entry.segments[depth:]
        if not segments or segments[0] != dir_name:
            continue
        if len(segments) == 2:
            groups.direct_children.append(entry)
        elif len(segments) > 2:
            groups.subgroups.setdefault(segments[1], []).append(entry)
    return groups
