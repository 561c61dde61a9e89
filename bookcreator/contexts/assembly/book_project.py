"""
Book Project Configuration

A book project names the book, its chapter count and the layout templates to
duplicate, plus where its metadata and content live. Project files are YAML,
merged over DEFAULT_PROJECT with OmegaConf:

    name: dune
    chapter_count: 12
    templates:
      chapter: LIVRE-Chapter.indd
      before: [LIVRE-01-Halftitle.indd, LIVRE-02-Frontmatter.indd]
      after: [LIVRE-90-Bibliographie.indd]
      cover: LIVRE-Cover.indd
    metadata: config/metadata.yaml
    content_dir: text
    inject_content: true

Relative paths resolve against the project file's directory.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

from bookcreator.contexts.assembly.exceptions import BookProjectError
from bookcreator.contexts.assembly.logger import _log_debug
from bookcreator.contexts.identifiers.isbn import validate as validate_isbn
from bookcreator.contexts.metadata.metadata_record import MetadataRecord

load_dotenv()
BOOK_PROJECT_PATH = Path(os.getenv("BOOK_PROJECT_PATH", "book.yaml"))

ORDINAL_STRATEGY = "ordinal"
DESCRIPTIVE_STRATEGY = "descriptive"
PAIRING_STRATEGIES = (ORDINAL_STRATEGY, DESCRIPTIVE_STRATEGY)

DEFAULT_PROJECT: Dict[str, Any] = {
    "name": "",
    "chapter_count": 1,
    "templates": {
        "chapter": None,
        "before": [],
        "after": [],
        "cover": None,
    },
    "metadata": None,
    "content_dir": None,
    "inject_content": False,
    "display": {
        "show_original_title_label": True,
        "original_title_label": "Original Title: ",
        "show_cover_credit_label": True,
        "cover_credit_label": "Cover: ",
    },
    "matching": {
        "strategy": ORDINAL_STRATEGY,
    },
}


@dataclass
class DisplayOptions:
    """Label prefixes applied to some placeholder values."""

    show_original_title_label: bool = True
    original_title_label: str = "Original Title: "
    show_cover_credit_label: bool = True
    cover_credit_label: str = "Cover: "


@dataclass
class TemplateSet:
    """
    Templates a book is assembled from.

    Attributes:
        chapter: Template duplicated once per chapter
        before: Templates placed before the chapters, in order
        after: Templates placed after the chapters, in order
        cover: Cover template (generated but kept out of the book)
    """

    chapter: Optional[str] = None
    before: List[str] = field(default_factory=list)
    after: List[str] = field(default_factory=list)
    cover: Optional[str] = None


@dataclass
class BookProject:
    """Validated-on-demand description of one book to assemble."""

    name: str
    chapter_count: int
    templates: TemplateSet = field(default_factory=TemplateSet)
    metadata_path: Optional[Path] = None
    content_dir: Optional[Path] = None
    inject_content: bool = False
    display: DisplayOptions = field(default_factory=DisplayOptions)
    strategy: str = ORDINAL_STRATEGY
    root: Path = field(default_factory=Path.cwd)

    @property
    def prefix(self) -> str:
        """Output file name prefix ("<NAME>-")."""
        return f"{self.name.upper()}-"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str = ""


def load_book_project(path: Path = None) -> BookProject:
    """
    Load a book project file.

    Args:
        path: Project YAML file (defaults to BOOK_PROJECT_PATH)

    Returns:
        BookProject with defaults filled in and paths resolved

    Raises:
        BookProjectError: If the file is missing, is not valid YAML, or holds
                          values of the wrong type
    """
    if path is None:
        path = BOOK_PROJECT_PATH
    path = Path(path)

    if not path.exists():
        raise BookProjectError("Book project file not found", project_path=path)

    try:
        merged = OmegaConf.merge(OmegaConf.create(DEFAULT_PROJECT), OmegaConf.load(path))
        config = OmegaConf.to_container(merged, resolve=True)
    except (OmegaConfBaseException, YAMLError, ValueError) as e:
        raise BookProjectError(f"Could not read book project: {e}", project_path=path) from e

    _log_debug(f"Loaded book project from {path}")
    return book_project_from_dict(config, root=path.parent, project_path=path)


def book_project_from_dict(
    config: Dict[str, Any], root: Path = None, project_path: Optional[Path] = None
) -> BookProject:
    """
    Build a BookProject from plain configuration data.

    Missing keys take DEFAULT_PROJECT values.

    Raises:
        BookProjectError: If a value has the wrong type or the strategy is unknown
    """
    root = Path(root) if root is not None else Path.cwd()
    try:
        merged = OmegaConf.to_container(
            OmegaConf.merge(OmegaConf.create(DEFAULT_PROJECT), OmegaConf.create(config)), resolve=True
        )
    except (OmegaConfBaseException, ValueError) as e:
        raise BookProjectError(f"Invalid book project: {e}", project_path=project_path) from e

    try:
        chapter_count = int(merged["chapter_count"])
    except (TypeError, ValueError) as e:
        raise BookProjectError(
            f"Chapter count must be a number, got {merged['chapter_count']!r}",
            project_path=project_path,
            field="chapter_count",
        ) from e

    strategy = str(merged["matching"]["strategy"]).lower()
    if strategy not in PAIRING_STRATEGIES:
        raise BookProjectError(
            f"Unknown pairing strategy '{strategy}'. Available: {list(PAIRING_STRATEGIES)}",
            project_path=project_path,
            field="matching.strategy",
        )

    templates = merged["templates"]
    display = merged["display"]

    return BookProject(
        name=str(merged["name"] or "").strip(),
        chapter_count=chapter_count,
        templates=TemplateSet(
            chapter=templates["chapter"],
            before=[str(name) for name in templates["before"] or []],
            after=[str(name) for name in templates["after"] or []],
            cover=templates["cover"],
        ),
        metadata_path=_resolve(root, merged["metadata"]),
        content_dir=_resolve(root, merged["content_dir"]),
        inject_content=bool(merged["inject_content"]),
        display=DisplayOptions(
            show_original_title_label=bool(display["show_original_title_label"]),
            original_title_label=str(display["original_title_label"]),
            show_cover_credit_label=bool(display["show_cover_credit_label"]),
            cover_credit_label=str(display["cover_credit_label"]),
        ),
        strategy=strategy,
        root=root,
    )


def validate_book(project: BookProject, record: Optional[MetadataRecord] = None) -> ValidationResult:
    """
    Check a project (and its metadata) before planning documents.

    Checks, in order: book name present, positive chapter count, chapter template
    present, print ISBN valid, ebook ISBN valid. Stops at the first failure.
    """
    if not project.name:
        return ValidationResult(False, "Book name is required")

    if project.chapter_count <= 0:
        return ValidationResult(False, "Chapter count must be a positive number")

    if not project.templates.chapter:
        return ValidationResult(False, "A chapter template is required")

    if record is not None:
        for field_name, label in (("isbn-print", "print"), ("isbn-ebook", "ebook")):
            raw = record.get_text(field_name)
            if not raw:
                continue
            result = validate_isbn(raw)
            if not result.valid:
                return ValidationResult(False, f"Invalid {label} ISBN: {result.message}")

    return ValidationResult(True)


def _resolve(root: Path, value: Optional[str]) -> Optional[Path]:
    if value in (None, ""):
        return None
    path = Path(value)
    return path if path.is_absolute() else root / path
