"""Custom exceptions for the assembly context with project and template references."""

from pathlib import Path
from typing import Optional


class BookProjectError(ValueError):
    """
    Exception raised when a book project cannot be loaded or is invalid.

    Attributes:
        message: Error description
        project_path: Project file being loaded
        field: Configuration key at fault
    """

    def __init__(
        self,
        message: str,
        project_path: Optional[Path] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.project_path = project_path
        self.field = field

        parts = [message]
        if field:
            parts.append(f"Field: {field}")
        if project_path:
            parts.append(f"Project: {project_path}")

        super().__init__("\n".join(parts))


class PlaceholderRenderError(Exception):
    """
    Exception raised when text holding placeholders cannot be rendered.

    Attributes:
        message: Error description
        text_snippet: Beginning of the text that failed
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        text_snippet: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.text_snippet = text_snippet
        self.original_error = original_error

        parts = [message]

        if text_snippet:
            snippet = text_snippet[:200] + "..." if len(text_snippet) > 200 else text_snippet
            parts.append(f"\nText:\n{snippet}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
