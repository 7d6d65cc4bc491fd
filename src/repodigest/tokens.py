"""Whitespace token counting for digest text.

This is a rough size estimate for prompt budgeting, not a model tokenizer:
a token is any run of non-whitespace characters.
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty pieces."""
    return [token for token in _WHITESPACE.split(text) if token]


def count_tokens(text: str) -> int:
    """Count whitespace-separated tokens in text."""
    return len(tokenize(text))
