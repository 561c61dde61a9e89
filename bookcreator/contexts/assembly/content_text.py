"""
Content text preparation.

Markdown content is injected into the host layout application as-is, except
for its line breaks, which the host expects as paragraph returns. The first
level-1 heading supplies the <<Document_Title>> of the document it fills.
"""

import re
from dataclasses import dataclass
from typing import Optional

from bookcreator.contexts.metadata.yaml_patterns import HOST_PARAGRAPH_BREAK
from bookcreator.utils.text_processing import LINE_BREAK

FIRST_H1 = re.compile(r"^#[ \t]+(.+?)[ \t]*$", re.MULTILINE)
FOOTNOTE_REFERENCE = re.compile(r"\s*\[\^[\w\d]+\]\s*")
EMPHASIS_MARKERS = re.compile(r"[*_~]")
REPEATED_SPACES = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class PreparedContent:
    """Content ready for injection: host text plus the document title, if any."""

    text: str
    title: Optional[str] = None


def to_host_text(markdown: str) -> str:
    """Convert every line break to the host paragraph break."""
    return LINE_BREAK.sub(HOST_PARAGRAPH_BREAK, markdown)


def extract_document_title(markdown: str) -> Optional[str]:
    """
    Plain text of the first level-1 heading.

    Backslash escapes, footnote references and emphasis markers are removed and
    runs of whitespace collapse to one space.

    Example:
        >>> extract_document_title("# Chapter *One*[^1]\\n\\nText")
        'Chapter One'
    """
    match = FIRST_H1.search(LINE_BREAK.sub("\n", markdown))
    if not match:
        return None

    title = match.group(1).strip()
    title = title.replace("\\", "")
    title = FOOTNOTE_REFERENCE.sub("", title)
    title = EMPHASIS_MARKERS.sub("", title)
    title = REPEATED_SPACES.sub(" ", title)
    return title.strip() or None


def prepare_content(markdown: str) -> PreparedContent:
    return PreparedContent(text=to_host_text(markdown), title=extract_document_title(markdown))
