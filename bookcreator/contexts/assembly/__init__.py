"""
Assembly Context

Responsibilities:
- Loads and validates book projects (name, chapter count, templates)
- Plans generated documents: names, book order and content pairing
- Fills metadata placeholders in frame text
- Prepares Markdown content for injection

Owns: Book project files, document naming rules, placeholder names
Never: Parses front matter or scores templates itself
"""

from bookcreator.contexts.assembly.book_project import (
    BOOK_PROJECT_PATH,
    BookProject,
    DisplayOptions,
    TemplateSet,
    ValidationResult,
    book_project_from_dict,
    load_book_project,
    validate_book,
)
from bookcreator.contexts.assembly.content_text import PreparedContent, extract_document_title, prepare_content
from bookcreator.contexts.assembly.document_plan import (
    DocumentRole,
    GenerationPlan,
    PlannedDocument,
    plan_documents,
    template_descriptors,
)
from bookcreator.contexts.assembly.exceptions import BookProjectError, PlaceholderRenderError
from bookcreator.contexts.assembly.placeholders import (
    document_values,
    placeholder_values,
    render_placeholders,
)

__all__ = [
    # Book project
    "BOOK_PROJECT_PATH",
    "BookProject",
    "TemplateSet",
    "DisplayOptions",
    "ValidationResult",
    "load_book_project",
    "book_project_from_dict",
    "validate_book",
    # Generation plan
    "DocumentRole",
    "PlannedDocument",
    "GenerationPlan",
    "plan_documents",
    "template_descriptors",
    # Placeholders
    "placeholder_values",
    "document_values",
    "render_placeholders",
    # Content
    "PreparedContent",
    "prepare_content",
    "extract_document_title",
    # Errors
    "BookProjectError",
    "PlaceholderRenderError",
]
