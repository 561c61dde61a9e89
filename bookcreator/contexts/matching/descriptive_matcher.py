"""
Descriptive-name pairing of generated documents and content files.

Earlier pairing strategy, kept for projects that name their content files
after the documents they fill. Compares the descriptive part of both names:

    LIVRE-1-3-Chapter_2.indd  ->  "chapter2"
    04-chapter-2.md           ->  "chapter2"

Scoring: 50 for equal descriptive parts, else 30 when one contains the other;
plus 20 per structural keyword found in both, and 30 more when the number
following that keyword is the same in both. The highest strictly positive
score wins; earlier files win ties.
"""

import re
from typing import Iterable, Optional

from bookcreator.contexts.matching.keyword_patterns import DESCRIPTIVE_KEYWORDS, DescriptiveRegex
from bookcreator.contexts.matching.logger import _log_debug

EXACT_DESCRIPTION_SCORE = 50
PARTIAL_DESCRIPTION_SCORE = 30
SHARED_KEYWORD_SCORE = 20
SAME_NUMBER_SCORE = 30


def document_description(document_name: str) -> str:
    """
    Descriptive part of a generated document name.

    Example:
        >>> document_description("LIVRE-1-3-Chapter_2.indd")
        'chapter2'
    """
    text = DescriptiveRegex.DOCUMENT_PREFIX.sub("", document_name, count=1)
    text = DescriptiveRegex.DOCUMENT_EXTENSION.sub("", text)
    return DescriptiveRegex.SEPARATORS.sub("", text.lower())


def content_description(content_name: str) -> str:
    """
    Descriptive part of a content file name.

    Example:
        >>> content_description("04-Chapter-2.md")
        'chapter2'
    """
    text = DescriptiveRegex.CONTENT_PREFIX.sub("", content_name, count=1)
    text = DescriptiveRegex.CONTENT_EXTENSION.sub("", text)
    return DescriptiveRegex.SEPARATORS.sub("", text.lower())


def descriptive_score(document_part: str, content_part: str) -> int:
    """Score the affinity of two descriptive parts."""
    total = 0
    if document_part == content_part:
        total += EXACT_DESCRIPTION_SCORE
    elif document_part in content_part or content_part in document_part:
        total += PARTIAL_DESCRIPTION_SCORE

    for keyword in DESCRIPTIVE_KEYWORDS:
        if keyword in document_part and keyword in content_part:
            total += SHARED_KEYWORD_SCORE
            number_after = re.compile(re.escape(keyword) + r"\s*?(\d+)")
            document_number = number_after.search(document_part)
            content_number = number_after.search(content_part)
            if document_number and content_number and document_number.group(1) == content_number.group(1):
                total += SAME_NUMBER_SCORE

    return total


def find_matching_content(document_name: str, content_names: Iterable[str]) -> Optional[str]:
    """
    Content file whose name best describes a generated document.

    Returns:
        Best-scoring content file name, or None when nothing scores above zero
    """
    document_part = document_description(document_name)
    best_match = None
    best_score = 0

    for name in content_names:
        candidate_score = descriptive_score(document_part, content_description(name))
        if candidate_score > best_score:
            best_match, best_score = name, candidate_score

    if best_match is None:
        _log_debug(f"No descriptive match for {document_name}")
    else:
        _log_debug(f"{document_name} -> {best_match} (descriptive score {best_score})")
    return best_match
