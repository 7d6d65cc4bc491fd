"""Formatting utilities.

This module provides pure functions for formatting digest figures for
display.
"""


def format_size_kb(size_kb: int) -> str:
    """Format a size given in kilobytes.

    Args:
        size_kb: Size in kB (1 kB = 1024 bytes).

    Returns:
        Formatted string (e.g., "50kB", "2MB"). Sizes of 1024 kB and above
        are rounded to whole megabytes.
    """
    if size_kb >= 1024:
        return f"{int(size_kb / 1024 + 0.5)}MB"
    return f"{size_kb}kB"


def format_token_count(count: int) -> str:
    """Format a token count compactly.

    Args:
        count: Number of tokens.

    Returns:
        "950" below a thousand, "1.5k" below ten thousand, "12k" above.

    Examples:
        >>> format_token_count(999)
        '999'
        >>> format_token_count(1500)
        '1.5k'
        >>> format_token_count(12345)
        '12k'
    """
    if count >= 1000:
        thousands = count / 1000
        if thousands >= 10:
            return f"{thousands:.0f}k"
        return f"{thousands:.1f}k"
    return str(count)
