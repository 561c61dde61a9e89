"""
Text processing utilities shared by the scanners and matchers.
"""

import re
from typing import List

LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """
    Split text into lines, accepting \\n, \\r\\n and \\r line endings.

    Example:
        >>> split_lines("a\\r\\nb\\rc\\nd")
        ['a', 'b', 'c', 'd']
    """
    return LINE_BREAK.split(text)


def indent_of(line: str) -> int:
    """Number of leading whitespace characters in a line."""
    return len(line) - len(line.lstrip())


def casefold_key(name: str) -> str:
    """Sort key for case-insensitive lexicographic ordering of names."""
    return name.casefold()


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
