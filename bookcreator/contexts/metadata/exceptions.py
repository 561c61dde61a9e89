"""Custom exceptions for the metadata context with file references."""

from pathlib import Path
from typing import Optional


class MetadataFileError(Exception):
    """
    Base for metadata file failures.

    Attributes:
        message: Error description
        path: File being read or written
        original_error: The underlying OS or decoding error
    """

    path_label = "File"

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"{self.path_label}: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class MetadataImportError(MetadataFileError):
    """A metadata file is missing or is not UTF-8. Parsing itself never fails."""


class MetadataExportError(MetadataFileError):
    """Metadata could not be written to its target file."""

    path_label = "Target"
