"""
Shared utilities for BookCreator.

Common functionality used across contexts:
- Logger setup with provenance
- Line and indentation helpers
- Text report tables
"""

from bookcreator.utils.text_processing import casefold_key, indent_of, split_lines

__all__ = ["casefold_key", "indent_of", "split_lines"]
