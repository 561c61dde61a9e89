"""
Front Matter <-> MetadataRecord Converter

File-level orchestration for book metadata:
- import_metadata: read a front-matter file, parse and canonicalize it
- export_metadata: write a record back as ``---`` delimited front matter
- validate_roundtrip: check that parse(stringify(v)) reproduces v
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from bookcreator.contexts.metadata.exceptions import MetadataExportError, MetadataImportError
from bookcreator.contexts.metadata.field_mapper import to_canonical, to_external
from bookcreator.contexts.metadata.logger import _log_debug, _log_info, _log_warning
from bookcreator.contexts.metadata.metadata_record import MetadataRecord
from bookcreator.contexts.metadata.values import Value, ValueKind
from bookcreator.contexts.metadata.yaml_parser import parse
from bookcreator.contexts.metadata.yaml_serializer import stringify
from bookcreator.utils.text_processing import LINE_BREAK


@dataclass
class ImportResult:
    """Result from import_metadata()."""

    record: MetadataRecord
    external: Value
    path: Path
    input_files: List[str] = field(default_factory=list)


def import_metadata(path: Path) -> ImportResult:
    """
    Read and canonicalize a front-matter file.

    Args:
        path: UTF-8 text file (a bare metadata file or a Markdown file with front matter)

    Returns:
        ImportResult with the canonical record and the raw parsed mapping

    Raises:
        MetadataImportError: If the file is missing or is not valid UTF-8
    """
    path = Path(path)
    if not path.exists():
        raise MetadataImportError("Metadata file not found", path=path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataImportError("Could not read metadata file", path=path, original_error=e) from e

    external = parse(text)
    if len(external) == 0:
        _log_warning(f"No metadata found in {path.name}")

    record = to_canonical(external)
    _log_debug(f"Parsed {len(external)} top-level keys from {path}")

    return ImportResult(record=record, external=external, path=path, input_files=record.input_files)


def export_metadata(record: MetadataRecord, path: Path) -> Path:
    """
    Write a record as front matter.

    Args:
        record: Canonical metadata
        path: Target file (parent directories are created)

    Returns:
        Path written

    Raises:
        MetadataExportError: If the file cannot be written
    """
    path = Path(path)
    content = stringify(to_external(record), front_matter=True)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise MetadataExportError("Could not write metadata file", path=path, original_error=e) from e

    _log_info(f"Exported {len(record.fields)} fields to {path}")
    return path


def validate_roundtrip(mapping: Any) -> bool:
    """
    Check that serializing then parsing a mapping gives the same values back.

    Literal blocks are read back with the host paragraph break, so line breaks
    inside strings are compared as equivalent whatever their spelling.

    Args:
        mapping: Mapping Value or plain dict

    Returns:
        True if every value survived the roundtrip
    """
    original = Value.from_python(mapping)
    restored = parse(stringify(original))
    return normalize_line_breaks(original) == normalize_line_breaks(restored)


def normalize_line_breaks(value: Value) -> Value:
    """Copy of value with every line break in strings spelled as ``\\n``."""
    if value.kind is ValueKind.STRING:
        return Value.string(LINE_BREAK.sub("\n", value.payload))
    if value.kind is ValueKind.SEQUENCE:
        return Value.sequence(normalize_line_breaks(item) for item in value)
    if value.kind is ValueKind.MAPPING:
        return Value.mapping((key, normalize_line_breaks(item)) for key, item in value.items())
    return value
