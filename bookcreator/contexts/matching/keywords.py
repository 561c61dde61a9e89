"""
Keyword extraction and structural classification of file names.

Both functions are pure: the same name always yields the same result.
"""

from enum import Enum
from typing import List

from bookcreator.contexts.matching.keyword_patterns import (
    MAX_IGNORED_TOKEN_LENGTH,
    SYNONYM_GROUPS,
    CategoryTerms,
    FilenameRegex,
)


class TemplateCategory(Enum):
    """Structural role of a layout template within the book."""

    FRONT_MATTER = "front_matter"
    BODY_MATTER = "body_matter"
    BACK_MATTER = "back_matter"
    SPECIALIZED = "specialized"
    BEFORE = "before"
    AFTER = "after"
    COVER = "cover"


# Category lists in precedence order
_CATEGORY_PRECEDENCE = (
    (TemplateCategory.FRONT_MATTER, CategoryTerms.FRONT_MATTER),
    (TemplateCategory.BACK_MATTER, CategoryTerms.BACK_MATTER),
    (TemplateCategory.SPECIALIZED, CategoryTerms.SPECIALIZED),
)


def extract_keywords(name: str) -> List[str]:
    """
    Reduce a file name to its meaningful lowercase tokens.

    Drops the extension and any book-code/chapter-number prefix, splits on
    hyphens, underscores and whitespace, and discards tokens of two characters
    or fewer. Duplicates keep their first position.

    Examples:
        >>> extract_keywords("03-introduction.md")
        ['introduction']
        >>> extract_keywords("LIVRE-02-Frontmatter.indd")
        ['frontmatter']
        >>> extract_keywords("04-les_notes de bas.md")
        ['les', 'notes', 'bas']
    """
    text = FilenameRegex.EXTENSION.sub("", name.strip().lower())
    text = FilenameRegex.SERIES_PREFIX.sub("", text, count=1)
    text = FilenameRegex.NUMERIC_PREFIX.sub("", text, count=1)

    keywords: List[str] = []
    for token in FilenameRegex.TOKEN_SEPARATOR.split(text):
        if len(token) > MAX_IGNORED_TOKEN_LENGTH and token not in keywords:
            keywords.append(token)
    return keywords


def classify(name: str) -> TemplateCategory:
    """
    Structural category of a file name.

    Precedence: front matter, back matter, specialized; anything else is body matter.

    Examples:
        >>> classify("LIVRE-02-Frontmatter.indd")
        <TemplateCategory.FRONT_MATTER: 'front_matter'>
        >>> classify("LIVRE-07-Bibliographie.indd")
        <TemplateCategory.SPECIALIZED: 'specialized'>
    """
    lowered = name.lower()
    for category, terms in _CATEGORY_PRECEDENCE:
        if any(term in lowered for term in terms):
            return category
    return TemplateCategory.BODY_MATTER


def are_synonyms(first: str, second: str) -> bool:
    """True when two different keywords belong to the same synonym group."""
    if first == second:
        return False
    return any(first in group and second in group for group in SYNONYM_GROUPS)
