"""
Template Matcher

Pairs content files with layout templates and with output positions.

Template choice is keyword scoring: each candidate template gets a category
term (does its category fit the content file's expected category?) plus a
keyword term (shared, overlapping or synonymous tokens, capped). A strong score
wins outright; otherwise the first template of the expected category is used,
then the first body-matter template.

Output position is ordinal: content files are sorted by case-folded name and
the n-th file fills the n-th generated document.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Union

from bookcreator.contexts.matching.keywords import (
    TemplateCategory,
    are_synonyms,
    classify,
    extract_keywords,
)
from bookcreator.contexts.matching.logger import _log_debug
from bookcreator.utils.text_processing import casefold_key

# Score weights
CATEGORY_MATCH_SCORE = 30
SPECIALIZED_TEMPLATE_SCORE = 20
EXACT_KEYWORD_SCORE = 60
PARTIAL_KEYWORD_SCORE = 30
SYNONYM_KEYWORD_SCORE = 15
KEYWORD_SCORE_CAP = 70

# Below this the category fallback is used instead of the best score
MIN_CONFIDENT_SCORE = 60

POSITIONAL_CATEGORIES = frozenset({TemplateCategory.BEFORE, TemplateCategory.AFTER})


@dataclass(frozen=True)
class TemplateDescriptor:
    """
    A layout template available for duplication.

    Attributes:
        identifier: Template file name or host handle
        category: Structural category
        keywords: Tokens from the template name
    """

    identifier: str
    category: TemplateCategory
    keywords: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class ContentFile:
    """
    A content file listed for the book.

    Attributes:
        name: File name as listed (e.g. "03-introduction.md")
        keywords: Tokens from the file name
        ordinal: Rank among all content files by case-folded name (None until assigned)
    """

    name: str
    keywords: FrozenSet[str] = frozenset()
    ordinal: Optional[int] = None

    @classmethod
    def from_name(cls, name: str) -> "ContentFile":
        return cls(name=name, keywords=frozenset(extract_keywords(name)))


@dataclass(frozen=True)
class TemplateMatch:
    """
    Template chosen for one content file.

    Attributes:
        content: The content file
        template: Chosen template (None when no template fits)
        score: Score of the chosen template
        category: Category expected for the content file
        fallback: True when the template came from the category fallback
    """

    content: ContentFile
    template: Optional[TemplateDescriptor]
    score: int
    category: TemplateCategory
    fallback: bool = False


@dataclass
class MatchPlan:
    """Template choice per content file, in ordinal order, plus the ordinal index."""

    entries: List[TemplateMatch] = field(default_factory=list)
    ordinals: Dict[str, int] = field(default_factory=dict)

    def __iter__(self) -> Iterator[TemplateMatch]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def ordinal_of(self, name: str) -> Optional[int]:
        return self.ordinals.get(name)

    def template_for(self, name: str) -> Optional[TemplateDescriptor]:
        for entry in self.entries:
            if entry.content.name == name:
                return entry.template
        return None

    def unmatched(self) -> List[TemplateMatch]:
        return [entry for entry in self.entries if entry.template is None]


def describe_template(name: str, position: Optional[TemplateCategory] = None) -> TemplateDescriptor:
    """
    Build a descriptor for a template file.

    Args:
        name: Template file name
        position: Membership in the book's explicit ordering (BEFORE, AFTER or
                  COVER), or None for templates outside it

    The cover is always COVER. Otherwise the keyword category is used, and a
    template placed before or after the chapters that has no structural
    keyword takes its positional category instead of BODY_MATTER.
    """
    keywords = frozenset(extract_keywords(name))
    if position is TemplateCategory.COVER:
        return TemplateDescriptor(name, TemplateCategory.COVER, keywords)

    category = classify(name)
    if category is TemplateCategory.BODY_MATTER and position in POSITIONAL_CATEGORIES:
        category = position
    return TemplateDescriptor(name, category, keywords)


def score(
    content_keywords: Iterable[str],
    template_keywords: Iterable[str],
    template_category: TemplateCategory,
    expected_category: TemplateCategory,
) -> int:
    """
    Affinity of a template for a content file.

    Category term: 30 when the template has the expected category, 20 for a
    specialized template otherwise. Keyword term: over every pair of content and
    template keywords, 60 for equal tokens, 30 when one contains the other, 15 for
    synonyms; capped at 70.

    Example:
        >>> score(["introduction"], ["frontmatter"], TemplateCategory.FRONT_MATTER, TemplateCategory.FRONT_MATTER)
        30
    """
    if template_category is expected_category:
        category_term = CATEGORY_MATCH_SCORE
    elif template_category is TemplateCategory.SPECIALIZED:
        category_term = SPECIALIZED_TEMPLATE_SCORE
    else:
        category_term = 0

    template_keywords = list(template_keywords)
    keyword_term = 0
    for content_keyword in content_keywords:
        for template_keyword in template_keywords:
            if content_keyword == template_keyword:
                keyword_term += EXACT_KEYWORD_SCORE
            elif content_keyword in template_keyword or template_keyword in content_keyword:
                keyword_term += PARTIAL_KEYWORD_SCORE
            elif are_synonyms(content_keyword, template_keyword):
                keyword_term += SYNONYM_KEYWORD_SCORE

    return category_term + min(keyword_term, KEYWORD_SCORE_CAP)


def select_best_template(
    content_file: Union[ContentFile, str], templates: Sequence[TemplateDescriptor]
) -> TemplateMatch:
    """
    Choose the template for one content file.

    The strictly highest score wins (earlier templates win ties). A best score
    under 60 falls back to the first template of the content file's expected
    category, then to the first body-matter template. With no fallback either,
    the match has no template.
    """
    if isinstance(content_file, str):
        content_file = ContentFile.from_name(content_file)
    expected = classify(content_file.name)

    best: Optional[TemplateDescriptor] = None
    best_score = 0
    for template in templates:
        candidate_score = score(content_file.keywords, template.keywords, template.category, expected)
        if candidate_score > best_score:
            best, best_score = template, candidate_score

    if best is not None and best_score >= MIN_CONFIDENT_SCORE:
        return TemplateMatch(content_file, best, best_score, expected)

    fallback = _first_with_category(templates, expected) or _first_with_category(
        templates, TemplateCategory.BODY_MATTER
    )
    if fallback is None:
        _log_debug(f"No template for {content_file.name} (best score {best_score})")
        return TemplateMatch(content_file, None, 0, expected, fallback=True)

    fallback_score = score(content_file.keywords, fallback.keywords, fallback.category, expected)
    _log_debug(f"{content_file.name}: best score {best_score} < {MIN_CONFIDENT_SCORE}, using {fallback.identifier}")
    return TemplateMatch(content_file, fallback, fallback_score, expected, fallback=True)


def assign_ordinals(content_files: Iterable[Union[ContentFile, str]]) -> List[ContentFile]:
    """
    Sort content files by case-folded name and number them from 0.

    The sort is stable and lexicographic, not numeric: "10-c.md" sorts before "2-b.md".

    Example:
        >>> [(f.name, f.ordinal) for f in assign_ordinals(["02-b.md", "01-a.md", "10-c.md"])]
        [('01-a.md', 0), ('02-b.md', 1), ('10-c.md', 2)]
    """
    files = [ContentFile.from_name(item) if isinstance(item, str) else item for item in content_files]
    ordered = sorted(files, key=lambda content: casefold_key(content.name))
    return [replace(content, ordinal=index) for index, content in enumerate(ordered)]


def build_match_plan(
    content_files: Iterable[Union[ContentFile, str]], templates: Sequence[TemplateDescriptor]
) -> MatchPlan:
    """
    Choose a template and an ordinal for every content file.

    Cover templates never receive content and are not candidates.
    """
    candidates = [template for template in templates if template.category is not TemplateCategory.COVER]
    plan = MatchPlan()
    for content in assign_ordinals(content_files):
        plan.ordinals[content.name] = content.ordinal
        plan.entries.append(select_best_template(content, candidates))
    return plan


def _first_with_category(
    templates: Sequence[TemplateDescriptor], category: TemplateCategory
) -> Optional[TemplateDescriptor]:
    return next((template for template in templates if template.category is category), None)
