"""Digest module for repodigest.

This module turns a flat list of files into a pruned directory tree and a
header-annotated content stream.

Public API:
    - digest: Run one scan with a default engine
    - DigestEngine: Engine class wrapping a scan
    - TreeBuilder: Recursive tree construction
    - compile_patterns: Compile Include/Exclude patterns
    - parse_pattern_list: Split comma-separated pattern text
    - group_entries: Split entries into direct children and subgroups
    - is_text_eligible: Check whether a file name denotes a text file
    - DigestError, UnreadableContentError: Scan failures
"""

from repodigest.digest.engine import DigestEngine, digest, get_root_name
from repodigest.digest.exceptions import DigestError, UnreadableContentError
from repodigest.digest.extensions import TEXT_FILE_SUFFIXES, is_text_eligible
from repodigest.digest.grouping import EntryGroups, group_entries
from repodigest.digest.patterns import (
    CompiledPatterns,
    compile_patterns,
    parse_pattern_list,
)
from repodigest.digest.tree import HEADER_SEPARATOR, BuildOutcome, TreeBuilder

__all__ = [
    "HEADER_SEPARATOR",
    "TEXT_FILE_SUFFIXES",
    "BuildOutcome",
    "CompiledPatterns",
    "DigestEngine",
    "DigestError",
    "EntryGroups",
    "TreeBuilder",
    "UnreadableContentError",
    "compile_patterns",
    "digest",
    "get_root_name",
    "group_entries",
    "is_text_eligible",
    "parse_pattern_list",
]
