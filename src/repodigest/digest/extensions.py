"""Text-file classification by file name.

Only files whose names end with an allowlisted suffix are considered text
and therefore eligible for the digest. Everything else is treated as binary
and always skipped.
"""

from __future__ import annotations

# Suffixes are matched against the lowercased file name, so entries such as
# "Dockerfile" also match "app.dockerfile" and a bare "dockerfile".
TEXT_FILE_SUFFIXES: tuple[str, ...] = (
    ".cs",
    ".ts",
    ".js",
    ".css",
    ".json",
    ".md",
    ".txt",
    ".html",
    ".xml",
    ".yml",
    ".yaml",
    ".c",
    ".cpp",
    ".cc",
    ".cxx",
    ".h",
    ".hpp",
    ".hxx",
    ".java",
    ".kt",
    ".swift",
    ".go",
    ".rs",
    ".rb",
    ".py",
    ".php",
    ".m",
    ".mm",
    ".dart",
    ".sh",
    ".bat",
    ".cmd",
    ".ps1",
    ".r",
    ".scala",
    ".pl",
    ".pm",
    ".lua",
    ".xhtml",
    ".jsp",
    ".asp",
    ".aspx",
    ".svg",
    ".tsx",
    ".jsx",
    ".env",
    ".ini",
    ".toml",
    ".cfg",
    ".conf",
    ".log",
    ".properties",
    ".gradle",
    ".gitignore",
    ".dockerfile",
    "Dockerfile",
    ".makefile",
    "Makefile",
    ".cmake",
    ".sql",
    ".groovy",
    ".erl",
    ".csproj",
    ".vbproj",
    ".sln",
    ".tsconfig",
    ".jsconfig",
)

_LOWERED_SUFFIXES: tuple[str, ...] = tuple(
    suffix.casefold() for suffix in TEXT_FILE_SUFFIXES
)


def is_text_eligible(file_name: str) -> bool:
    """Check whether a file name denotes a text file.

    Args:
        file_name: Bare file name (not a path).

    Returns:
        True if the name ends with an allowlisted suffix (case-insensitive).
    """
    return file_name.casefold().endswith(_LOWERED_SUFFIXES)
