"""
Placeholder Substitution

Layout templates carry placeholders such as ``<<Book_Title>>`` in their text
frames. Each frame line becomes a small Jinja2 template whose variable
delimiters are the placeholder brackets: known placeholders turn into
variables, everything else is emitted as literal text.

Rules:
- Unknown placeholders, and any other ``<<`` in the text, are left unchanged
- Empty optional fields (critical apparatus, translation, original title,
  cover credit, editions, funding) remove the whole line holding them
- Original title and cover credit can carry a label prefix
- ``<br>`` tags and two or more trailing spaces become forced line breaks
"""

import re
from typing import Collection, Dict, List, Optional

from jinja2 import Environment
from jinja2.exceptions import TemplateError

from bookcreator.contexts.assembly.book_project import DisplayOptions
from bookcreator.contexts.assembly.exceptions import PlaceholderRenderError
from bookcreator.contexts.assembly.logger import _log_debug
from bookcreator.contexts.identifiers.isbn import barcode_pattern
from bookcreator.contexts.metadata.metadata_record import MetadataRecord
from bookcreator.contexts.metadata.yaml_patterns import HOST_PARAGRAPH_BREAK
from bookcreator.utils.text_processing import split_lines

VARIABLE_START = "<<"
VARIABLE_END = ">>"

PLACEHOLDER_TOKEN = re.compile(r"<<([A-Za-z_]\w*)>>")

# A literal '<' is written as this expression, so frame text never opens a tag
_LITERAL_ANGLE = '<<"<">>'
# Placeholder name -> canonical metadata field
PLACEHOLDER_FIELDS: Dict[str, str] = {
    "Book_Author": "author",
    "Book_Title": "title",
    "Subtitle": "subtitle",
    "ISBN_Print": "isbn-print",
    "ISBN_Ebook": "isbn-ebook",
    "Critical_Apparatus": "critical-apparatus",
    "Translation": "translation",
    "Print_Date": "print-date",
    "Editions": "editions",
    "Funding": "funding",
    "Rights": "rights",
    "Price": "price",
    "Original_Title": "original-title",
    "Cover_Credit": "cover-credit",
}

REMOVABLE_WHEN_EMPTY = frozenset(
    {"Critical_Apparatus", "Translation", "Original_Title", "Cover_Credit", "Editions", "Funding"}
)

DOCUMENT_TITLE = "Document_Title"

# Barcode placeholder -> identifier field
BARCODE_PLACEHOLDERS: Dict[str, str] = {
    "EAN13_Print": "isbn-print",
    "EAN13_Ebook": "isbn-ebook",
}

# Marks a line to drop; never occurs in real text
_REMOVE_LINE = "\x00REMOVE_LINE\x00"

# Forced line break inside a paragraph
FORCED_LINE_BREAK = "\n"

BR_TAG = re.compile(r"<br\s*/?>", re.IGNORECASE)
TRAILING_SPACES = re.compile(r" {2,}$")


PLACEHOLDER_ENV = Environment(
    # Placeholder brackets are the variable delimiters. Block and comment
    # delimiters also start with '<', which literal text never keeps.
    variable_start_string=VARIABLE_START,
    variable_end_string=VARIABLE_END,
    block_start_string="<%%",
    block_end_string="%%>",
    comment_start_string="<#",
    comment_end_string="#>",
    trim_blocks=False,
    lstrip_blocks=False,
    keep_trailing_newline=True,
    autoescape=False,
)


def placeholder_values(record: MetadataRecord, display: Optional[DisplayOptions] = None) -> Dict[str, str]:
    """
    Text for every metadata placeholder.

    Label prefixes apply only to non-empty values. Empty removable fields map
    to the line-removal mark.
    """
    display = display or DisplayOptions()
    values = {name: record.get_text(field_name) for name, field_name in PLACEHOLDER_FIELDS.items()}

    if display.show_original_title_label and values["Original_Title"]:
        values["Original_Title"] = display.original_title_label + values["Original_Title"]
    if display.show_cover_credit_label and values["Cover_Credit"]:
        values["Cover_Credit"] = display.cover_credit_label + values["Cover_Credit"]

    for name in REMOVABLE_WHEN_EMPTY:
        if not values[name]:
            values[name] = _REMOVE_LINE

    return values


def barcode_values(record: MetadataRecord) -> Dict[str, str]:
    """
    EAN-13 bar patterns for barcode placeholders.

    Only identifiers that encode (valid, or 12 digits completed with their check
    digit) are included; other barcode placeholders stay in place.
    """
    values = {}
    for name, field_name in BARCODE_PLACEHOLDERS.items():
        pattern = barcode_pattern(record.get_text(field_name))
        if pattern is not None:
            values[name] = pattern
    return values


def document_values(
    record: MetadataRecord,
    display: Optional[DisplayOptions] = None,
    document_title: Optional[str] = None,
    include_barcodes: bool = False,
) -> Dict[str, str]:
    """
    All placeholder values for one generated document.

    Args:
        record: Book metadata
        display: Label options (defaults to DisplayOptions())
        document_title: Title of the content injected into the document, if any
        include_barcodes: Also map EAN13 placeholders to bar patterns
    """
    values = placeholder_values(record, display)
    if document_title:
        values[DOCUMENT_TITLE] = document_title
    if include_barcodes:
        values.update(barcode_values(record))
    return values


def render_placeholders(text: str, values: Dict[str, str]) -> str:
    """
    Fill placeholders in frame text.

    Text is rendered line by line. When anything changed, lines holding an empty
    removable placeholder are dropped, line formatting is applied and lines are
    joined with the host paragraph break. Otherwise the text is returned as is.

    Raises:
        PlaceholderRenderError: If a value cannot be rendered as text
    """
    if VARIABLE_START not in text:
        return text

    lines = []
    changed = False
    for line in split_lines(text):
        rendered = _render_line(line, values)
        changed = changed or rendered != line
        if _REMOVE_LINE not in rendered:
            lines.append(rendered)

    if not changed:
        return text
    return HOST_PARAGRAPH_BREAK.join(format_line(line) for line in lines)


def format_line(line: str) -> str:
    """Turn ``<br>`` tags and trailing double spaces into forced line breaks."""
    line = BR_TAG.sub(FORCED_LINE_BREAK, line)
    return TRAILING_SPACES.sub(FORCED_LINE_BREAK, line)


def line_template(line: str, names: Collection[str]) -> Optional[str]:
    """
    Jinja2 source for one frame line, or None when it holds no known placeholder.

    Known placeholders stay as ``<<Name>>`` variables; every other '<' becomes a
    string literal, so ``<<Book Title>>``, ``Prix << 10 euros`` or ``<#1>``
    come out exactly as typed.

    Example:
        >>> line_template("<#1> <<Book_Title>>", {"Book_Title"})
        '<<"<">>#1> <<Book_Title>>'
    """
    parts: List[str] = []
    position = 0
    for match in PLACEHOLDER_TOKEN.finditer(line):
        if match.group(1) not in names:
            continue
        parts.append(line[position : match.start()].replace("<", _LITERAL_ANGLE))
        parts.append(match.group(0))
        position = match.end()

    if not parts:
        return None
    parts.append(line[position:].replace("<", _LITERAL_ANGLE))
    return "".join(parts)


def _render_line(line: str, values: Dict[str, str]) -> str:
    source = line_template(line, values)
    if source is None:
        if VARIABLE_START in line:
            _log_debug(f"No known placeholder in {line!r}")
        return line
    try:
        return PLACEHOLDER_ENV.from_string(source).render(**values)
    except TemplateError as e:
        raise PlaceholderRenderError("Could not render placeholders", text_snippet=line, original_error=e) from e
