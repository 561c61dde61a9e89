"""
Matching Pattern Constants

Filename patterns, structural keyword lists and bilingual synonym groups used to
classify layout templates and score content files against them. Keyword lists
cover the English and French names used for book parts.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class FilenameRegex:
    """
    Patterns for reducing a file name to keyword tokens.

    SERIES_PREFIX strips a book-code plus chapter-number prefix such as
    ``livre-02-`` or ``ab12-3-04-``. NUMERIC_PREFIX strips a plain ``03-``.
    """

    EXTENSION: re.Pattern = re.compile(r"\.(?:indd|indt|indb|idml|md|markdown|txt)$")
    SERIES_PREFIX: re.Pattern = re.compile(r"^[a-z0-9]+(?:-\d+)+-")
    NUMERIC_PREFIX: re.Pattern = re.compile(r"^\d+-")
    TOKEN_SEPARATOR: re.Pattern = re.compile(r"[-_\s]+")


# Tokens of this length or shorter carry no meaning ("01", "de", "la")
MAX_IGNORED_TOKEN_LENGTH = 2


@dataclass(frozen=True)
class CategoryTerms:
    """
    Substrings that place a file name in a structural category.

    Tested in the order FRONT_MATTER, BACK_MATTER, SPECIALIZED; the first list
    with a term found in the lowercased name wins.
    """

    FRONT_MATTER: Tuple[str, ...] = (
        "frontmatter",
        "front-matter",
        "front_matter",
        "liminaire",
        "intro",
        "avant-propos",
        "avantpropos",
        "foreword",
        "prologue",
        "faux-titre",
        "halftitle",
        "half-title",
        "titlepage",
        "title-page",
        "copyright",
        "sommaire",
    )
    BACK_MATTER: Tuple[str, ...] = (
        "backmatter",
        "back-matter",
        "back_matter",
        "postface",
        "afterword",
        "biography",
        "biographie",
        "about-the-author",
        "quatrieme",
    )
    SPECIALIZED: Tuple[str, ...] = (
        "bibliography",
        "bibliographie",
        "index",
        "appendix",
        "appendice",
        "annexe",
        "glossary",
        "glossaire",
        "preface",
        "préface",
        "conclusion",
        "epilogue",
        "épilogue",
        "acknowledgments",
        "acknowledgements",
        "remerciements",
        "dedication",
        "dédicace",
        "dedicace",
        "colophon",
        "notes",
    )


# Keywords treated as equivalent when scoring (one group per concept)
SYNONYM_GROUPS: Tuple[FrozenSet[str], ...] = (
    frozenset({"bibliography", "bibliographie", "references", "références"}),
    frozenset({"index", "indexes", "indices"}),
    frozenset({"appendix", "appendices", "appendice", "annexe", "annexes"}),
    frozenset({"glossary", "glossaire", "lexique"}),
    frozenset({"preface", "préface", "foreword"}),
    frozenset({"conclusion", "epilogue", "épilogue"}),
    frozenset({"acknowledgments", "acknowledgements", "remerciements"}),
    frozenset({"dedication", "dédicace", "dedicace"}),
    frozenset({"introduction", "intro", "prologue"}),
    frozenset({"afterword", "postface"}),
    frozenset({"biography", "biographie"}),
    frozenset({"chapter", "chapitre"}),
)


@dataclass(frozen=True)
class DescriptiveRegex:
    """
    Patterns for the descriptive-name pairing of documents and content files.

    A generated document is named ``<BOOK>-<n>-<m>-<description>.indd``; a content
    file is named ``<n>-<description>.md``. Only the description is compared.
    """

    DOCUMENT_PREFIX: re.Pattern = re.compile(r"^.*?-\d+-\d+-")
    DOCUMENT_EXTENSION: re.Pattern = re.compile(r"\.indd$", re.IGNORECASE)
    CONTENT_PREFIX: re.Pattern = re.compile(r"^\d+-")
    CONTENT_EXTENSION: re.Pattern = re.compile(r"\.md$", re.IGNORECASE)
    SEPARATORS: re.Pattern = re.compile(r"[_-]")


# Structural words whose presence in both names adds to the descriptive score
DESCRIPTIVE_KEYWORDS: Tuple[str, ...] = (
    "chapter",
    "intro",
    "introduction",
    "conclusion",
    "appendix",
    "preface",
    "postface",
    "foreword",
    "index",
    "bibliography",
    "glossary",
    "acknowledgments",
    "afterword",
    "epilogue",
    "prologue",
    "chapitre",
    "annexe",
    "préface",
    "avantpropos",
    "bibliographie",
    "glossaire",
    "remerciements",
    "épilogue",
)
