"""
Front Matter Pattern Constants

Regex patterns and literal tables used by the front-matter parser and serializer.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class FrontMatterRegex:
    """
    Document-level patterns.

    Used to strip the ``---`` delimiter pair around a front-matter block. When the
    block opens with a delimiter, everything after the first closing ``---`` (or
    ``...``) line is document body and is not metadata.
    """

    LEADING_DELIMITER: re.Pattern = re.compile(r"\A\s*---[ \t]*(?:\r\n|\r|\n)")
    CLOSING_LINE: re.Pattern = re.compile(r"^(?:---|\.\.\.)[ \t]*$", re.MULTILINE)
    TRAILING_DELIMITER: re.Pattern = re.compile(r"(?:\r\n|\r|\n)---[ \t]*(?:\r\n|\r|\n)?\s*\Z")


@dataclass(frozen=True)
class LineRegex:
    """
    Line-level patterns for the scanner.

    KEY_VALUE follows the front-matter convention ``key: value`` where the key is
    everything before the first colon. NESTED_PAIR is stricter and is used to detect
    ``- key: value`` complex sequence items: the key may not start with a quote or
    flow character and the colon must be followed by whitespace or end of line, so
    URLs and quoted strings stay scalars.
    """

    KEY_VALUE: re.Pattern = re.compile(r"^([^:]+):\s*(.*)$")
    NESTED_PAIR: re.Pattern = re.compile(r"^([^\s:\"'\[\]{},#&*!|>%@`-][^:]*?):(?:\s+(.*))?$")
    SEQUENCE_ITEM: re.Pattern = re.compile(r"^(\s*)-(?:\s+(.*)|\s*)$")


@dataclass(frozen=True)
class ScalarRegex:
    """
    Scalar coercion patterns.

    NUMBER accepts plain decimal and exponent notation. LEADING_ZERO protects
    zero-padded codes (identifiers, chapter numbers) from numeric coercion.
    NUMERIC_PREFIX marks strings the serializer must quote because a reader could
    take their leading part for a number.
    """

    NUMBER: re.Pattern = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$")
    INTEGER: re.Pattern = re.compile(r"^[-+]?\d+$")
    LEADING_ZERO: re.Pattern = re.compile(r"^0[0-9]+")
    NUMERIC_PREFIX: re.Pattern = re.compile(r"^[-+]?(?:\d|\.\d)")
    RESERVED_WORD: re.Pattern = re.compile(r"^(?:true|false|yes|no|on|off|null|~)$", re.IGNORECASE)
    SPECIAL_CHARACTER: re.Pattern = re.compile(r"[:#{}\[\],&*!|>'\"%@`]")


# Literal words recognized by scalar coercion (case-sensitive)
TRUE_WORDS = frozenset({"true", "yes", "on"})
FALSE_WORDS = frozenset({"false", "no", "off"})
NULL_WORDS = frozenset({"null", "~"})

# Values after ``key:`` that open a block scalar
LITERAL_INDICATORS = frozenset({"|", "|-", "|+"})
FOLDED_INDICATORS = frozenset({">", ">-", ">+", '""'})

# Block continuation lines must be indented this much deeper than their key
BLOCK_INDENT_STEP = 2

# Host layout applications separate paragraphs with a carriage return
HOST_PARAGRAPH_BREAK = "\r"

# Escapes understood inside double-quoted scalars
DOUBLE_QUOTE_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
