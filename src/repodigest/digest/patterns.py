"""Include/Exclude pattern compilation.

User patterns come in two flavours:

- Wildcard patterns (containing ``*`` or ``?``) match a bare file name,
  case-insensitively, e.g. ``*.md`` or ``test_?.py``.
- Literal patterns match whole path segments of a relative path, e.g.
  ``node_modules`` or ``src/generated``.

Patterns are compiled once per scan and reused for every file and directory
decision. Compilation never fails: odd input yields a matcher that is merely
broader or narrower than intended.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from re import Pattern

WILDCARD_CHARS = frozenset("*?")


def has_wildcard(pattern: str) -> bool:
    """Check whether a pattern contains a wildcard character."""
    return any(char in WILDCARD_CHARS for char in pattern)


def wildcard_to_regex(pattern: str) -> Pattern[str]:
    """Compile a wildcard pattern into an anchored, case-insensitive regex.

    ``*`` matches any run of characters (including none) and ``?`` matches
    exactly one character. Every other character is matched literally.

    Args:
        pattern: Wildcard pattern text.

    Returns:
        Compiled regular expression.
    """
    escaped = re.escape(pattern)
    body = escaped.replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(f"^{body}$", re.IGNORECASE | re.DOTALL)


def segment_to_regex(pattern: str) -> Pattern[str]:
    """Compile a literal pattern into a path-segment regex.

    Backslashes are normalized to forward slashes and one trailing slash is
    dropped. The literal must then appear bounded by ``/`` or the start/end
    of the tested path.

    Args:
        pattern: Literal directory or file path text.

    Returns:
        Compiled regular expression.
    """
    normalized = pattern.replace("\\", "/")
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return re.compile(f"(?:^|/){re.escape(normalized)}(?:/|$)")


def parse_pattern_list(text: str | None) -> list[str]:
    """Split comma-separated pattern text into individual patterns.

    Args:
        text: Text such as ``"*.md, src/"``; None yields no patterns.

    Returns:
        Non-blank patterns with surrounding whitespace removed.
    """
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


@dataclass(frozen=True)
class CompiledPatterns:
    """Matchers produced from one pattern list.

    file_matchers test bare file names; dir_matchers test full relative
    paths of files or directories.
    """

    file_matchers: tuple[Pattern[str], ...] = ()
    dir_matchers: tuple[Pattern[str], ...] = ()

    def matches_file_name(self, file_name: str) -> bool:
        """Check a bare file name against the wildcard matchers."""
        return any(m.search(file_name) for m in self.file_matchers)

    def matches_path(self, path: str) -> bool:
        """Check a relative path against the directory-segment matchers."""
        return any(m.search(path) for m in self.dir_matchers)


def compile_patterns(patterns: Iterable[str] | None) -> CompiledPatterns:
    """Compile user patterns into file-name and path-segment matchers.

    Args:
        patterns: Pattern strings, or None. Blank entries are ignored.

    Returns:
        CompiledPatterns; both matcher sets are empty when there are no
        usable patterns.
    """
    file_matchers: list[Pattern[str]] = []
    dir_matchers: list[Pattern[str]] = []

    for raw in patterns or ():
        pattern = raw.strip()
        if not pattern:
            continue
        if has_wildcard(pattern):
            file_matchers.append(wildcard_to_regex(pattern))
        else:
            dir_matchers.append(segment_to_regex(pattern))

    return CompiledPatterns(
        file_matchers=tuple(file_matchers),
        dir_matchers=tuple(dir_matchers),
    )
