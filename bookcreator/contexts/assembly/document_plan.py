"""
Generation Plan

Decides which documents a book project produces, what they are called, in which
order they enter the book, and which content file fills each one. The host
application duplicates templates and injects content according to this plan.

Naming, for a book named "dune":
- Book file: ``DUNE-Book.indb``
- Before/after templates: the part before the first hyphen is replaced by the
  book prefix (``LIVRE-02-Frontmatter.indd`` -> ``DUNE-02-Frontmatter.indd``)
- Chapters: the chapter template renamed the same way with ``_<n>`` before the
  extension (``DUNE-Chapter_1.indd``, ``DUNE-Chapter_2.indd``, ...)
- Cover: ``DUNE-COVER.<ext>``, generated but not part of the book
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import PurePath
from typing import Iterable, List, Optional

from bookcreator.contexts.assembly.book_project import (
    DESCRIPTIVE_STRATEGY,
    BookProject,
    validate_book,
)
from bookcreator.contexts.assembly.exceptions import BookProjectError
from bookcreator.contexts.assembly.logger import _log_debug, _log_warning
from bookcreator.contexts.matching.descriptive_matcher import find_matching_content
from bookcreator.contexts.matching.keywords import TemplateCategory, extract_keywords
from bookcreator.contexts.matching.template_matcher import (
    TemplateDescriptor,
    assign_ordinals,
    describe_template,
)
from bookcreator.contexts.metadata.metadata_record import MetadataRecord

BOOK_SUFFIX = "Book"
BOOK_EXTENSION = ".indb"
COVER_NAME = "COVER"
DEFAULT_DOCUMENT_EXTENSION = ".indd"

_TEMPLATE_PREFIX = re.compile(r"^.*?-")


class DocumentRole(Enum):
    BEFORE = "before"
    CHAPTER = "chapter"
    AFTER = "after"
    COVER = "cover"


@dataclass(frozen=True)
class PlannedDocument:
    """
    One document to generate.

    Attributes:
        output_name: File name of the generated document
        template: Template file it is duplicated from
        role: Position in the book
        in_book: Whether the document is added to the book file
        chapter_number: 1-based chapter number for chapter documents
        content: Content file injected into the document, if any
    """

    output_name: str
    template: str
    role: DocumentRole
    in_book: bool = True
    chapter_number: Optional[int] = None
    content: Optional[str] = None


@dataclass
class GenerationPlan:
    book_file: str
    documents: List[PlannedDocument] = field(default_factory=list)
    unpaired_content: List[str] = field(default_factory=list)

    def included(self) -> List[PlannedDocument]:
        """Documents that go into the book, in book order."""
        return [document for document in self.documents if document.in_book]

    def content_for(self, output_name: str) -> Optional[str]:
        for document in self.documents:
            if document.output_name == output_name:
                return document.content
        return None


def book_file_name(project: BookProject) -> str:
    return f"{project.prefix}{BOOK_SUFFIX}{BOOK_EXTENSION}"


def rename_template(template_name: str, prefix: str) -> str:
    """
    Replace everything up to the first hyphen with prefix.

    Names without a hyphen are kept unchanged.

    Example:
        >>> rename_template("LIVRE-02-Frontmatter.indd", "DUNE-")
        'DUNE-02-Frontmatter.indd'
    """
    return _TEMPLATE_PREFIX.sub(prefix, PurePath(template_name).name, count=1)


def chapter_document_name(template_name: str, prefix: str, number: int) -> str:
    """
    Example:
        >>> chapter_document_name("LIVRE-Chapter.indd", "DUNE-", 3)
        'DUNE-Chapter_3.indd'
    """
    renamed = PurePath(rename_template(template_name, prefix))
    return f"{renamed.stem}_{number}{renamed.suffix}"


def cover_document_name(template_name: str, prefix: str) -> str:
    extension = PurePath(template_name).suffix or DEFAULT_DOCUMENT_EXTENSION
    return f"{prefix}{COVER_NAME}{extension}"


def template_descriptors(project: BookProject) -> List[TemplateDescriptor]:
    """
    Descriptors for every template of a project, in book order.

    Before/after templates are classified by keyword and fall back to their
    position; the chapter template is body matter; the cover is COVER.
    """
    templates = project.templates
    descriptors = [describe_template(name, TemplateCategory.BEFORE) for name in templates.before]
    if templates.chapter:
        descriptors.append(
            TemplateDescriptor(
                templates.chapter, TemplateCategory.BODY_MATTER, frozenset(extract_keywords(templates.chapter))
            )
        )
    descriptors.extend(describe_template(name, TemplateCategory.AFTER) for name in templates.after)
    if templates.cover:
        descriptors.append(describe_template(templates.cover, TemplateCategory.COVER))
    return descriptors


def plan_documents(
    project: BookProject,
    content_files: Optional[Iterable[str]] = None,
    record: Optional[MetadataRecord] = None,
) -> GenerationPlan:
    """
    Plan every document of a book.

    Args:
        project: Book project
        content_files: Content file names to pair with documents (e.g. the
                       record's input-files); None or empty for no content
        record: Metadata whose identifiers are validated with the project

    Returns:
        GenerationPlan with documents ordered before -> chapters -> after -> cover

    Raises:
        BookProjectError: If the project (or its identifiers) is invalid
    """
    result = validate_book(project, record)
    if not result.valid:
        raise BookProjectError(result.message)

    prefix = project.prefix
    templates = project.templates
    documents: List[PlannedDocument] = []

    for name in templates.before:
        documents.append(PlannedDocument(rename_template(name, prefix), name, DocumentRole.BEFORE))

    for number in range(1, project.chapter_count + 1):
        documents.append(
            PlannedDocument(
                chapter_document_name(templates.chapter, prefix, number),
                templates.chapter,
                DocumentRole.CHAPTER,
                chapter_number=number,
            )
        )

    for name in templates.after:
        documents.append(PlannedDocument(rename_template(name, prefix), name, DocumentRole.AFTER))

    if templates.cover:
        documents.append(
            PlannedDocument(
                cover_document_name(templates.cover, prefix), templates.cover, DocumentRole.COVER, in_book=False
            )
        )

    plan = GenerationPlan(book_file=book_file_name(project), documents=documents)

    content_names = list(content_files or [])
    if content_names:
        if project.strategy == DESCRIPTIVE_STRATEGY:
            pair_by_description(plan, content_names)
        else:
            pair_by_ordinal(plan, content_names)

    return plan


def pair_by_ordinal(plan: GenerationPlan, content_names: List[str]) -> None:
    """
    Pair the n-th content file (by case-folded name) with the n-th document of the book.

    Extra content files are recorded as unpaired; extra documents get no content.
    """
    ordered = assign_ordinals(content_names)
    included = [index for index, document in enumerate(plan.documents) if document.in_book]

    for content, index in zip(ordered, included):
        plan.documents[index] = replace(plan.documents[index], content=content.name)
        _log_debug(f"[{content.ordinal}] {content.name} -> {plan.documents[index].output_name}")

    plan.unpaired_content = [content.name for content in ordered[len(included) :]]
    if plan.unpaired_content:
        _log_warning(f"{len(plan.unpaired_content)} content files exceed the {len(included)} documents in the book")
    elif len(ordered) < len(included):
        _log_debug(f"{len(included) - len(ordered)} documents receive no content")


def pair_by_description(plan: GenerationPlan, content_names: List[str]) -> None:
    """Pair each book document with the content file whose name best describes it."""
    used = set()
    for index, document in enumerate(plan.documents):
        if not document.in_book:
            continue
        match = find_matching_content(document.output_name, content_names)
        if match is not None:
            plan.documents[index] = replace(document, content=match)
            used.add(match)

    plan.unpaired_content = [name for name in content_names if name not in used]
