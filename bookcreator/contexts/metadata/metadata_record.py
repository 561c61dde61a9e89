"""
Canonical book metadata record.

Flat mapping of the recognized book fields plus an open bag of fields the tool
does not know about, kept verbatim so they survive an import/export cycle.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from bookcreator.contexts.metadata.values import Value

# Recognized fields, in export order
CANONICAL_FIELDS = (
    "title",
    "subtitle",
    "author",
    "isbn-print",
    "isbn-ebook",
    "print-date",
    "rights",
    "translation",
    "critical-apparatus",
    "cover-credit",
    "original-title",
    "editions",
    "funding",
    "price",
    "language",
)

# Document-conversion tool convention for listing content files in reading order
INPUT_FILES_FIELD = "input-files"


@dataclass
class MetadataRecord:
    """
    Canonical metadata for one book.

    Attributes:
        fields: Recognized fields (names from CANONICAL_FIELDS) -> Value
        extra: Unrecognized fields in source order, passed through unchanged

    The record is a plain mutable value object; callers may edit it field by field
    before re-exporting.
    """

    fields: Dict[str, Value] = field(default_factory=dict)
    extra: Dict[str, Value] = field(default_factory=dict)

    def get(self, name: str, default: Optional[Value] = None) -> Optional[Value]:
        if name in CANONICAL_FIELDS:
            return self.fields.get(name, default)
        return self.extra.get(name, default)

    def get_text(self, name: str) -> str:
        """Display text of a field ("" when absent)."""
        value = self.get(name)
        return value.as_text() if value is not None else ""

    def set(self, name: str, value: Any) -> None:
        """Set a field from a Value or plain Python data."""
        target = self.fields if name in CANONICAL_FIELDS else self.extra
        target[name] = Value.from_python(value)

    def remove(self, name: str) -> None:
        self.fields.pop(name, None)
        self.extra.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self.fields or name in self.extra

    def __iter__(self) -> Iterator[str]:
        yield from self.ordered_fields()
        yield from self.extra

    def ordered_fields(self) -> List[str]:
        """Recognized field names present in the record, in canonical order."""
        return [name for name in CANONICAL_FIELDS if name in self.fields]

    @property
    def input_files(self) -> List[str]:
        """Content file names listed under ``input-files`` (empty when absent)."""
        value = self.extra.get(INPUT_FILES_FIELD)
        if value is None:
            return []
        if value.is_sequence:
            return [item.as_text() for item in value if item.is_scalar and not item.is_blank()]
        if value.is_string and not value.is_blank():
            return [value.payload]
        return []

    def to_mapping(self) -> Value:
        """Canonical fields in canonical order followed by the passthrough fields."""
        pairs = [(name, self.fields[name]) for name in self.ordered_fields()]
        pairs.extend(self.extra.items())
        return Value.mapping(pairs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetadataRecord":
        """Build a record from plain canonical data (no field-name translation)."""
        record = cls()
        for name, value in data.items():
            record.set(name, value)
        return record
