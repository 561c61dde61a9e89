"""
Metadata Context

Responsibilities:
- Represents front-matter values as a tagged union (Value)
- Parses and serializes the front-matter YAML subset
- Canonicalizes external field names and complex shapes into a MetadataRecord
- Imports and exports metadata files

Owns: Front-matter format, canonical field names, metadata files
Never: Validates identifiers or decides document layout
"""

from bookcreator.contexts.metadata.converter import (
    ImportResult,
    export_metadata,
    import_metadata,
    validate_roundtrip,
)
from bookcreator.contexts.metadata.field_mapper import to_canonical, to_external
from bookcreator.contexts.metadata.metadata_record import CANONICAL_FIELDS, MetadataRecord
from bookcreator.contexts.metadata.values import Value, ValueKind
from bookcreator.contexts.metadata.yaml_parser import convert_value, parse
from bookcreator.contexts.metadata.yaml_serializer import stringify

__all__ = [
    # Value model
    "Value",
    "ValueKind",
    # Text format
    "parse",
    "convert_value",
    "stringify",
    # Canonical record
    "MetadataRecord",
    "CANONICAL_FIELDS",
    "to_canonical",
    "to_external",
    # File orchestration
    "import_metadata",
    "export_metadata",
    "validate_roundtrip",
    "ImportResult",
]
