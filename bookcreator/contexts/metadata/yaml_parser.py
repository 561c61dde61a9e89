"""
Front Matter Parser

Line-oriented scanner for the restricted YAML subset used in book front matter
(the document-conversion tool convention). Converts text into a mapping Value.

Scanning model:
- A single ParseCursor walks the lines top-down and holds exactly one active
  ParserState (SCALAR, SEQUENCE, MAPPING, LITERAL_BLOCK, FOLDED_BLOCK) together
  with the indentation recorded when that state was entered.
- Top-level keys drive the state machine. Containers nested below a top-level
  container (complex sequence items, pairs holding their own block or list) are
  consumed greedily by helper readers.
- Parsing never raises: lines that cannot be interpreted are skipped and logged
  at DEBUG level, so malformed metadata degrades to partial data.

Example:
    >>> meta = parse("---\\ntitle: Dune\\nkeywords: [sf, desert]\\n---")
    >>> meta.to_python()
    {'title': 'Dune', 'keywords': ['sf', 'desert']}
"""

import re
import textwrap
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from bookcreator.contexts.metadata.logger import _log_debug
from bookcreator.contexts.metadata.values import Value
from bookcreator.contexts.metadata.yaml_patterns import (
    BLOCK_INDENT_STEP,
    DOUBLE_QUOTE_ESCAPES,
    FALSE_WORDS,
    FOLDED_INDICATORS,
    HOST_PARAGRAPH_BREAK,
    LITERAL_INDICATORS,
    NULL_WORDS,
    TRUE_WORDS,
    FrontMatterRegex,
    LineRegex,
    ScalarRegex,
)
from bookcreator.utils.text_processing import indent_of, split_lines

_ESCAPE_SEQUENCE = re.compile(r"\\(.)")

# Inside nested containers a quoted empty string is just an empty string
_NESTED_BLOCK_INDICATORS = LITERAL_INDICATORS | (FOLDED_INDICATORS - {'""'})


class ParserState(Enum):
    """Scanning mode of the top-level state machine."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    LITERAL_BLOCK = "literal_block"
    FOLDED_BLOCK = "folded_block"


BLOCK_STATES = frozenset({ParserState.LITERAL_BLOCK, ParserState.FOLDED_BLOCK})


@dataclass
class ParseCursor:
    """
    Scanner position and the single open binding.

    Attributes:
        lines: Input split into lines (front-matter delimiters removed)
        index: Zero-based index of the current line
        state: Active scanning mode; SCALAR means no binding is open
        entry_indent: Indentation of the key line that opened the current mode
        pending_key: Key the open container or block will be bound to
        line_break: Separator used to join literal block lines
    """

    lines: List[str]
    index: int = 0
    state: ParserState = ParserState.SCALAR
    entry_indent: int = 0
    pending_key: Optional[str] = None
    line_break: str = HOST_PARAGRAPH_BREAK
    _items: List[Value] = field(default_factory=list)
    _pairs: Dict[str, Value] = field(default_factory=dict)
    _block_lines: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, line_break: str = HOST_PARAGRAPH_BREAK) -> "ParseCursor":
        return cls(lines=split_lines(strip_front_matter_delimiters(text)), line_break=line_break)

    @property
    def current(self) -> Optional[str]:
        return self.lines[self.index] if self.index < len(self.lines) else None

    @property
    def line_number(self) -> int:
        return self.index + 1

    def advance(self) -> None:
        self.index += 1

    def peek_significant(self, start: Optional[int] = None) -> Optional[str]:
        """
        Next line that is neither blank nor a comment.

        Args:
            start: Index to start looking from (defaults to the line after the current one)
        """
        begin = self.index + 1 if start is None else start
        for line in self.lines[begin:]:
            if not is_blank_or_comment(line):
                return line
        return None

    def peek_non_blank(self) -> Optional[str]:
        """Next non-blank line after the current one (comments count as content)."""
        for line in self.lines[self.index + 1 :]:
            if line.strip():
                return line
        return None

    def enter(self, state: ParserState, key: str, indent: int) -> None:
        """
        Open a binding for ``key`` in the given mode.

        Raises:
            RuntimeError: If another binding is still open (scanner bug, not bad input)
        """
        if self.state is not ParserState.SCALAR:
            raise RuntimeError(
                f"Cannot enter {state.value} for '{key}': '{self.pending_key}' is still open"
            )
        self.state = state
        self.pending_key = key
        self.entry_indent = indent
        self._items = []
        self._pairs = {}
        self._block_lines = []

    def add_item(self, value: Value) -> None:
        self._items.append(value)

    def add_pair(self, key: str, value: Value) -> None:
        self._pairs[key] = value

    def add_block_line(self, line: str) -> None:
        self._block_lines.append(line)

    def close(self) -> Optional[Tuple[str, Value]]:
        """Close the open binding and return (key, value), or None when nothing is open."""
        if self.state is ParserState.SCALAR:
            return None

        if self.state is ParserState.SEQUENCE:
            value = Value.sequence(self._items)
        elif self.state is ParserState.MAPPING:
            value = Value.mapping(self._pairs)
        elif self.state is ParserState.LITERAL_BLOCK:
            value = Value.string(finish_block(self._block_lines, True, self.line_break))
        elif self.state is ParserState.FOLDED_BLOCK:
            value = Value.string(finish_block(self._block_lines, False, self.line_break))
        else:
            raise ValueError(f"Unknown parser state: {self.state}")

        binding = (self.pending_key, value)
        self.state = ParserState.SCALAR
        self.pending_key = None
        self._items = []
        self._pairs = {}
        self._block_lines = []
        return binding


# =============================================================================
# PUBLIC API
# =============================================================================


def parse(text: str, line_break: str = HOST_PARAGRAPH_BREAK) -> Value:
    """
    Parse front-matter text into a mapping Value.

    Args:
        text: Front matter, with or without the surrounding ``---`` lines
        line_break: Separator joining the lines of literal (``|``) blocks.
                    Defaults to the host paragraph break (carriage return).

    Returns:
        Mapping Value in source key order. Empty mapping for empty input.
    """
    if not text or not text.strip():
        return Value.mapping()

    cursor = ParseCursor.from_text(text, line_break=line_break)
    result: Dict[str, Value] = {}

    while cursor.current is not None:
        line = cursor.current

        # Block scalars consume their own continuation lines (blank lines included)
        if cursor.state in BLOCK_STATES:
            content = take_block_line(cursor, cursor.entry_indent)
            if content is not None:
                cursor.add_block_line(content)
                continue
            _bind(result, cursor.close())

        if is_blank_or_comment(line):
            cursor.advance()
            continue

        indent = indent_of(line)

        if cursor.state is ParserState.SEQUENCE:
            item = LineRegex.SEQUENCE_ITEM.match(line)
            if item and indent >= cursor.entry_indent:
                cursor.add_item(read_item(cursor, indent, item.group(2)))
                continue
            if indent > cursor.entry_indent:
                _log_debug(f"Skipping line {cursor.line_number} inside sequence: {line.strip()!r}")
                cursor.advance()
                continue
            _bind(result, cursor.close())

        elif cursor.state is ParserState.MAPPING:
            is_item = LineRegex.SEQUENCE_ITEM.match(line) is not None
            if indent > cursor.entry_indent and not is_item:
                pair = LineRegex.KEY_VALUE.match(line.strip())
                if pair:
                    key = clean_key(pair.group(1))
                    cursor.add_pair(key, read_pair_value(cursor, indent, pair.group(2).strip()))
                else:
                    _log_debug(f"Skipping line {cursor.line_number} inside mapping: {line.strip()!r}")
                    cursor.advance()
                continue
            if is_item:
                _log_debug(f"Skipping stray sequence item at line {cursor.line_number}")
                cursor.advance()
                continue
            _bind(result, cursor.close())

        _scan_top_level_line(cursor, result, line, indent)

    # Flush whatever is still open at end of input
    _bind(result, cursor.close())

    return Value.mapping(result)


def convert_value(raw: str) -> Value:
    """
    Coerce a raw scalar into a Value.

    Rules, in order: empty -> empty string; true/yes/on and false/no/off ->
    booleans; null/~ -> null; numbers (except zero-padded codes such as
    ``0123``) -> number; matching quotes -> unquoted string; ``[a, b]`` -> sequence
    of coerced items; ``{}`` -> empty mapping; anything else -> the literal string.

    Examples:
        >>> convert_value("yes")
        Value(kind=<ValueKind.BOOL: 'bool'>, payload=True)
        >>> convert_value("0123").payload
        '0123'
        >>> convert_value("[1, two]").to_python()
        [1, 'two']
    """
    value = raw.strip()

    if value == "":
        return Value.string("")
    if value in TRUE_WORDS:
        return Value.boolean(True)
    if value in FALSE_WORDS:
        return Value.boolean(False)
    if value in NULL_WORDS:
        return Value.null()
    if ScalarRegex.NUMBER.match(value) and not ScalarRegex.LEADING_ZERO.match(value):
        if ScalarRegex.INTEGER.match(value):
            return Value.number(int(value))
        return Value.number(float(value))
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return Value.string(unquote(value))
    if value.startswith("[") and value.endswith("]"):
        return Value.sequence(convert_value(item) for item in split_flow_items(value[1:-1]))
    if value == "{}":
        return Value.mapping()
    return Value.string(value)


# =============================================================================
# TOP-LEVEL DISPATCH
# =============================================================================


def _scan_top_level_line(cursor: ParseCursor, result: Dict[str, Value], line: str, indent: int) -> None:
    """Handle a line while no binding is open: bind a scalar or open a mode."""
    if LineRegex.SEQUENCE_ITEM.match(line):
        _log_debug(f"Skipping sequence item without a key at line {cursor.line_number}")
        cursor.advance()
        return

    pair = LineRegex.KEY_VALUE.match(line)
    key = clean_key(pair.group(1)) if pair else ""
    if not key:
        _log_debug(f"Skipping unparseable line {cursor.line_number}: {line.strip()!r}")
        cursor.advance()
        return

    raw = pair.group(2).strip()
    following = cursor.peek_significant()

    if raw == "" and following is not None and LineRegex.SEQUENCE_ITEM.match(following):
        cursor.enter(ParserState.SEQUENCE, key, indent)
    elif raw == "" and following is not None and indent_of(following) > indent:
        if LineRegex.KEY_VALUE.match(following.strip()):
            cursor.enter(ParserState.MAPPING, key, indent)
        else:
            cursor.enter(ParserState.FOLDED_BLOCK, key, indent)
    elif raw in LITERAL_INDICATORS:
        cursor.enter(ParserState.LITERAL_BLOCK, key, indent)
    elif raw in FOLDED_INDICATORS:
        cursor.enter(ParserState.FOLDED_BLOCK, key, indent)
    else:
        result[key] = convert_value(raw)

    cursor.advance()


def _bind(result: Dict[str, Value], binding: Optional[Tuple[str, Value]]) -> None:
    if binding is not None:
        key, value = binding
        result[key] = value


# =============================================================================
# NESTED READERS
# =============================================================================


def read_item(cursor: ParseCursor, dash_indent: int, remainder: Optional[str]) -> Value:
    """
    Read one sequence item starting at the current line.

    A ``- key: value`` item opens a complex item: a mapping seeded with that pair
    which greedily takes the following lines indented deeper than the dash. A
    ``- |`` or ``- >`` item reads a block scalar. Anything else is a coerced scalar.
    The cursor is left on the first line after the item.
    """
    line = cursor.current
    remainder = (remainder or "").strip()

    if remainder in _NESTED_BLOCK_INDICATORS:
        cursor.advance()
        return Value.string(consume_block(cursor, dash_indent, remainder in LITERAL_INDICATORS, cursor.line_break))

    pair = LineRegex.NESTED_PAIR.match(remainder) if remainder else None
    if remainder and pair is None:
        cursor.advance()
        return convert_value(remainder)

    pairs: Dict[str, Value] = {}
    if pair is None:
        # Bare dash: a complex item only if deeper lines follow
        following = cursor.peek_significant()
        cursor.advance()
        if following is None or indent_of(following) <= dash_indent:
            return Value.null()
    else:
        after_dash = line[dash_indent + 1 :]
        key_indent = dash_indent + 1 + indent_of(after_dash)
        pairs[clean_key(pair.group(1))] = read_pair_value(cursor, key_indent, (pair.group(2) or "").strip())

    consume_pairs(cursor, dash_indent, pairs)
    return Value.mapping(pairs)


def read_pair_value(cursor: ParseCursor, key_indent: int, raw: str) -> Value:
    """
    Read the value of a ``key: raw`` pair found inside a container.

    The cursor is on the pair's line and is left after everything the value consumed.
    """
    cursor.advance()

    if raw in _NESTED_BLOCK_INDICATORS:
        return Value.string(consume_block(cursor, key_indent, raw in LITERAL_INDICATORS, cursor.line_break))

    if raw == "":
        following = cursor.peek_significant(start=cursor.index)
        if following is not None:
            is_item = LineRegex.SEQUENCE_ITEM.match(following) is not None
            if is_item and indent_of(following) >= key_indent:
                return consume_sequence(cursor, indent_of(following))
            if not is_item and indent_of(following) > key_indent:
                return consume_mapping(cursor, key_indent)
        return Value.string("")

    return convert_value(raw)


def consume_pairs(cursor: ParseCursor, parent_indent: int, pairs: Dict[str, Value]) -> None:
    """Add ``key: value`` lines indented deeper than parent_indent to pairs."""
    while cursor.current is not None:
        line = cursor.current
        if is_blank_or_comment(line):
            cursor.advance()
            continue

        indent = indent_of(line)
        if indent <= parent_indent:
            break

        pair = None if LineRegex.SEQUENCE_ITEM.match(line) else LineRegex.KEY_VALUE.match(line.strip())
        if pair is None:
            _log_debug(f"Skipping line {cursor.line_number} inside nested mapping: {line.strip()!r}")
            cursor.advance()
            continue

        pairs[clean_key(pair.group(1))] = read_pair_value(cursor, indent, pair.group(2).strip())


def consume_mapping(cursor: ParseCursor, parent_indent: int) -> Value:
    pairs: Dict[str, Value] = {}
    consume_pairs(cursor, parent_indent, pairs)
    return Value.mapping(pairs)


def consume_sequence(cursor: ParseCursor, item_indent: int) -> Value:
    """Read consecutive items at item_indent."""
    items: List[Value] = []
    while cursor.current is not None:
        line = cursor.current
        if is_blank_or_comment(line):
            cursor.advance()
            continue

        indent = indent_of(line)
        item = LineRegex.SEQUENCE_ITEM.match(line)
        if item and indent == item_indent:
            items.append(read_item(cursor, indent, item.group(2)))
        elif indent > item_indent:
            _log_debug(f"Skipping line {cursor.line_number} inside nested sequence: {line.strip()!r}")
            cursor.advance()
        else:
            break
    return Value.sequence(items)


def consume_block(cursor: ParseCursor, key_indent: int, literal: bool, line_break: str) -> str:
    """Greedily read the continuation lines of a block scalar."""
    lines: List[str] = []
    while True:
        content = take_block_line(cursor, key_indent)
        if content is None:
            break
        lines.append(content)
    return finish_block(lines, literal, line_break)


def take_block_line(cursor: ParseCursor, key_indent: int) -> Optional[str]:
    """
    Return the current line if it continues a block opened at key_indent, advancing past it.

    Continuation lines are indented at least BLOCK_INDENT_STEP columns deeper than
    the key. A blank line continues the block only when a continuation line follows.
    Returns None, without advancing, when the block ends here.
    """
    line = cursor.current
    if line is None:
        return None

    threshold = key_indent + BLOCK_INDENT_STEP
    if not line.strip():
        following = cursor.peek_non_blank()
        if following is not None and indent_of(following) >= threshold:
            cursor.advance()
            return ""
        return None

    if indent_of(line) >= threshold:
        cursor.advance()
        return line
    return None


def finish_block(lines: List[str], literal: bool, line_break: str) -> str:
    """
    Join block scalar lines.

    Literal blocks drop the common indentation and join lines with line_break,
    preserving interior blank lines. Folded blocks join trimmed lines with a space.
    """
    if literal:
        dedented = textwrap.dedent("\n".join(lines)).split("\n")
        while dedented and dedented[-1] == "":
            dedented.pop()
        return line_break.join(dedented)
    return " ".join(line.strip() for line in lines if line.strip())


# =============================================================================
# LEXICAL HELPERS
# =============================================================================


def strip_front_matter_delimiters(text: str) -> str:
    """
    Remove the ``---`` delimiter pair around front matter.

    When the text opens with a delimiter, the metadata ends at the first closing
    ``---``/``...`` line and any document body after it is dropped.
    """
    text = "\n".join(split_lines(text))
    opening = FrontMatterRegex.LEADING_DELIMITER.match(text)
    if opening:
        body = text[opening.end() :]
        closing = FrontMatterRegex.CLOSING_LINE.search(body)
        return body[: closing.start()] if closing else body
    return FrontMatterRegex.TRAILING_DELIMITER.sub("", text)


def is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return stripped == "" or stripped.startswith("#")


def clean_key(raw: str) -> str:
    key = raw.strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in "\"'":
        return unquote(key)
    return key


def unquote(value: str) -> str:
    """
    Strip matching quotes and resolve escapes.

    Double quotes understand ``\\\\``, ``\\"``, ``\\n``, ``\\r`` and ``\\t``; single
    quotes understand doubled ``''``.
    """
    body = value[1:-1]
    if value[0] == "'":
        return body.replace("''", "'")
    return _ESCAPE_SEQUENCE.sub(lambda m: DOUBLE_QUOTE_ESCAPES.get(m.group(1), m.group(0)), body)


def split_flow_items(inner: str) -> List[str]:
    """
    Split the inside of an inline ``[...]`` list on commas outside quotes and
    outside nested brackets.

    Examples:
        >>> split_flow_items('a, "b, c", d')
        ['a', '"b, c"', 'd']
        >>> split_flow_items('[a, b], c')
        ['[a, b]', 'c']
    """
    if not inner.strip():
        return []

    items: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    escaped = False
    depth = 0

    for char in inner:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\" and quote == '"':
                escaped = True
            elif char == quote:
                quote = None
        elif char in "\"'" and _opens_flow_item("".join(current)):
            quote = char
            current.append(char)
        elif char == "," and depth == 0:
            items.append("".join(current).strip())
            current = []
        else:
            if char == "[":
                depth += 1
            elif char == "]" and depth > 0:
                depth -= 1
            current.append(char)

    items.append("".join(current).strip())
    return items


def _opens_flow_item(current: str) -> bool:
    """True when nothing but an opening bracket or a comma precedes the next character."""
    before = current.rstrip()
    return not before or before[-1] in "[,"
