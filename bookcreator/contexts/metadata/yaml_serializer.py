"""
Front Matter Serializer

Inverse of yaml_parser: renders a mapping Value as front-matter text.

Rendering is chosen per value kind so that parsing the output yields the same
values back. Multi-line strings become literal blocks, strings a reader could
mistake for numbers, booleans or markup are double-quoted, and short lists of
plain words are written inline.
"""

from typing import Any, List

from bookcreator.contexts.metadata.values import Value, ValueKind, format_number
from bookcreator.contexts.metadata.yaml_patterns import ScalarRegex
from bookcreator.utils.text_processing import LINE_BREAK, split_lines

INDENT_STEP = 2

# Inline [a, b] form is used only for short lists of short plain strings
INLINE_MAX_ITEMS = 5
INLINE_MAX_LENGTH = 20

FRONT_MATTER_DELIMITER = "---"


def stringify(mapping: Any, front_matter: bool = False) -> str:
    """
    Render a mapping as front-matter text, one ``key: value`` entry per line.

    Args:
        mapping: Mapping Value, or plain dict convertible with Value.from_python
        front_matter: Wrap the output in ``---`` delimiter lines (used for export)

    Returns:
        Text ending with a newline (empty string for an empty mapping without delimiters)

    Raises:
        TypeError: If mapping is not a mapping
    """
    value = Value.from_python(mapping)
    if not value.is_mapping:
        raise TypeError(f"stringify expects a mapping, got {value.kind.value}")

    lines: List[str] = []
    for key, item in value.items():
        lines.extend(render_entry(key, item, 0))

    body = "".join(f"{line}\n" for line in lines)
    if front_matter:
        return f"{FRONT_MATTER_DELIMITER}\n{body}{FRONT_MATTER_DELIMITER}\n"
    return body


def needs_quotes(text: str) -> bool:
    """
    True when a plain string would be read back as something else.

    Examples:
        >>> needs_quotes("12 rue des Lilas")
        True
        >>> needs_quotes("Yes")
        True
        >>> needs_quotes("Editions du Seuil")
        False
    """
    return (
        ScalarRegex.NUMERIC_PREFIX.match(text) is not None
        or ScalarRegex.RESERVED_WORD.match(text) is not None
        or ScalarRegex.SPECIAL_CHARACTER.search(text) is not None
        or text != text.strip()
    )


def quote(text: str) -> str:
    """Double-quote a string, escaping backslashes, quotes and control breaks."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def render_entry(key: str, value: Value, indent: int) -> List[str]:
    """Render one ``key: value`` entry (possibly spanning several lines) at indent."""
    pad = " " * indent

    if value.kind is ValueKind.STRING and has_line_break(value.payload):
        return [f"{pad}{key}: |", *render_block_lines(value.payload, indent + INDENT_STEP)]

    if value.kind is ValueKind.STRING and value.payload == "":
        # Top-level empty values are bare; nested ones are quoted
        return [f"{pad}{key}:"] if indent == 0 else [f'{pad}{key}: ""']

    if value.kind is ValueKind.SEQUENCE:
        if len(value) == 0:
            return [f"{pad}{key}: []"]
        if is_inline_sequence(value):
            return [f"{pad}{key}: {render_flow(value)}"]
        lines = [f"{pad}{key}:"]
        for item in value:
            lines.extend(render_item(item, indent + INDENT_STEP))
        return lines

    if value.kind is ValueKind.MAPPING:
        if len(value) == 0:
            return [f"{pad}{key}: {{}}"]
        lines = [f"{pad}{key}:"]
        for child_key, child in value.items():
            lines.extend(render_entry(child_key, child, indent + INDENT_STEP))
        return lines

    return [f"{pad}{key}: {render_scalar(value)}"]


def render_item(value: Value, indent: int) -> List[str]:
    """
    Render one block-sequence item at indent.

    Mapping items put their first pair on the dash line and the remaining pairs
    below it, aligned with the first key.
    """
    pad = " " * indent

    if value.kind is ValueKind.STRING and has_line_break(value.payload):
        return [f"{pad}- |", *render_block_lines(value.payload, indent + INDENT_STEP)]

    if value.kind is ValueKind.MAPPING and len(value) > 0:
        lines: List[str] = []
        for key, child in value.items():
            lines.extend(render_entry(key, child, indent + INDENT_STEP))
        lines[0] = f"{pad}- {lines[0][indent + INDENT_STEP:]}"
        return lines

    return [f"{pad}- {render_scalar(value)}"]


def render_scalar(value: Value) -> str:
    """Render a value that fits on one line after ``key:`` or ``-``."""
    if value.kind is ValueKind.NULL:
        return "null"
    if value.kind is ValueKind.BOOL:
        return "true" if value.payload else "false"
    if value.kind is ValueKind.NUMBER:
        return format_number(value.payload)
    if value.kind is ValueKind.STRING:
        text = value.payload
        if text == "":
            return '""'
        if needs_quotes(text) or has_line_break(text):
            return quote(text)
        return text
    if value.kind is ValueKind.SEQUENCE:
        return render_flow(value)
    if value.kind is ValueKind.MAPPING:
        # Flow mappings are not read back; deeper nesting is best-effort
        if len(value) == 0:
            return "{}"
        return "{" + ", ".join(f"{key}: {render_scalar(child)}" for key, child in value.items()) + "}"
    raise ValueError(f"Unknown value kind: {value.kind}")


def render_flow(value: Value) -> str:
    return "[" + ", ".join(render_scalar(item) for item in value) + "]"


def render_block_lines(text: str, indent: int) -> List[str]:
    pad = " " * indent
    return [f"{pad}{line}" if line else "" for line in split_lines(text)]


def is_inline_sequence(value: Value) -> bool:
    """True for 1-5 items that are all short, non-empty plain strings."""
    if not 1 <= len(value) <= INLINE_MAX_ITEMS:
        return False
    return all(
        item.kind is ValueKind.STRING
        and item.payload != ""
        and len(item.payload) < INLINE_MAX_LENGTH
        and not needs_quotes(item.payload)
        and not has_line_break(item.payload)
        for item in value
    )


def has_line_break(text: str) -> bool:
    return LINE_BREAK.search(text) is not None
