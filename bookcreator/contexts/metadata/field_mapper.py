"""
Field Mapper

Translates between external front-matter field names/shapes (document-conversion
tool convention) and the canonical MetadataRecord.

Import accepts hyphenated, camelCase and no-hyphen spellings of each field, and
normalizes the complex list-of-object shapes:

    title:                         creator:                  identifier:
      - type: main                   - role: author            - scheme: ISBN
        text: Le Rouge et le Noir      text: Stendhal            text: 9782070360284
      - type: subtitle
        text: Chronique de 1830

Export writes the complex title, creator and identifier shapes back whenever the
record carries them, dropping the flat equivalents.
"""

import re
from typing import Dict, List, Optional, Tuple

from bookcreator.contexts.metadata.logger import _log_debug
from bookcreator.contexts.metadata.metadata_record import MetadataRecord
from bookcreator.contexts.metadata.values import Value, ValueKind

# Import table: normalized external key -> canonical field.
# Keys are compared lowercased with '-', '_' and spaces removed, so
# "isbn-print", "isbnPrint", "isbn_print" and "isbnprint" all resolve.
IMPORT_ALIASES: Dict[str, str] = {
    "title": "title",
    "subtitle": "subtitle",
    "author": "author",
    "isbnprint": "isbn-print",
    "isbnebook": "isbn-ebook",
    "printdate": "print-date",
    "date": "print-date",
    "publishedprint": "print-date",
    "rights": "rights",
    "copyright": "rights",
    "translation": "translation",
    "criticalapparatus": "critical-apparatus",
    "critical": "critical-apparatus",
    "covercredit": "cover-credit",
    "originaltitle": "original-title",
    "editions": "editions",
    "funding": "funding",
    "price": "price",
    "language": "language",
    "lang": "language",
}

# Export table: canonical field -> external name
EXPORT_NAMES: Dict[str, str] = {
    "title": "title",
    "subtitle": "subtitle",
    "author": "author",
    "isbn-print": "isbn-print",
    "isbn-ebook": "isbn-ebook",
    "print-date": "date",
    "rights": "rights",
    "translation": "translation",
    "critical-apparatus": "critical-apparatus",
    "cover-credit": "cover-credit",
    "original-title": "original-title",
    "editions": "editions",
    "funding": "funding",
    "price": "price",
    "language": "lang",
}

# Complex shapes
CREATOR_FIELD = "creator"
IDENTIFIER_FIELD = "identifier"
TITLE_MAIN_TYPE = "main"
TITLE_SUBTITLE_TYPE = "subtitle"
AUTHOR_ROLE = "author"
ISBN_SCHEME = "isbn"
# Title list entries other than the main title and subtitle
TITLE_ENTRIES_FIELD = "title-entries"

_ALIAS_SEPARATORS = re.compile(r"[-_\s]+")


def normalize_field_name(name: str) -> str:
    """
    Normalize an external key for alias lookup.

    Example:
        >>> normalize_field_name("isbn_Print")
        'isbnprint'
    """
    return _ALIAS_SEPARATORS.sub("", name).lower()


def canonical_name(external_name: str) -> Optional[str]:
    """Canonical field for an external key, or None for passthrough fields."""
    return IMPORT_ALIASES.get(normalize_field_name(external_name))


def to_canonical(external: Value) -> MetadataRecord:
    """
    Build a MetadataRecord from parsed front matter.

    Args:
        external: Mapping Value (or plain dict) as produced by the parser

    Returns:
        MetadataRecord with recognized fields canonicalized and everything else in extra
    """
    external = Value.from_python(external)
    record = MetadataRecord()
    exact = set()
    complex_fields = set()

    title = external.get("title")
    if title is not None and title.is_sequence:
        complex_fields.update(_apply_complex_title(record, title))

    for key, value in external.items():
        if key in (CREATOR_FIELD, IDENTIFIER_FIELD) or (key == "title" and value.is_sequence):
            continue

        value = _lstrip_string(value)
        target = canonical_name(key)
        if target is None:
            record.extra[key] = value
            continue

        if target in complex_fields:
            _log_debug(f"Ignoring flat '{key}': complex form already provides '{target}'")
            continue

        # A field spelled exactly like its canonical name beats any alias
        if target in exact and key != target:
            _log_debug(f"Ignoring alias '{key}': '{target}' already set")
            continue

        record.fields[target] = _flatten_author(value) if target == "author" else value
        if key == target:
            exact.add(target)

    creators = external.get(CREATOR_FIELD)
    if creators is not None:
        _apply_creators(record, creators)

    identifiers = external.get(IDENTIFIER_FIELD)
    if identifiers is not None:
        _apply_identifiers(record, identifiers)

    return record


def to_external(record: MetadataRecord) -> Value:
    """
    Render a MetadataRecord as an external front-matter mapping.

    Blank canonical fields are omitted. Title and subtitle together become a
    ``title`` list of {type, text}; an author becomes a ``creator`` list of
    {role, text}. Title, creator and identifier entries kept in extra at
    import are merged back into those lists. Passthrough fields follow in
    their original order.
    """
    title = record.fields.get("title")
    subtitle = record.fields.get("subtitle")
    author = record.fields.get("author")
    isbn_ebook = record.fields.get("isbn-ebook")
    has_title = title is not None and not title.is_blank()
    has_subtitle = subtitle is not None and not subtitle.is_blank()
    has_author = author is not None and not author.is_blank()
    has_ebook = isbn_ebook is not None and not isbn_ebook.is_blank()

    title_entries = record.extra.get(TITLE_ENTRIES_FIELD)
    identifiers = record.extra.get(IDENTIFIER_FIELD)
    merge_identifiers = has_ebook and identifiers is not None and identifiers.is_sequence

    pairs: List[Tuple[str, Value]] = []

    for name in record.ordered_fields():
        value = record.fields[name]
        if value.is_blank():
            continue

        if name == "title" and (has_subtitle or title_entries is not None):
            pairs.append(("title", _complex_title(value, subtitle if has_subtitle else None, title_entries)))
        elif name == "subtitle" and (has_title or title_entries is not None):
            continue
        elif name == "author":
            pairs.append((CREATOR_FIELD, _complex_creators(value, record.extra.get(CREATOR_FIELD))))
        elif name == "isbn-ebook" and merge_identifiers:
            pairs.append((IDENTIFIER_FIELD, _complex_identifiers(value, identifiers)))
        else:
            pairs.append((EXPORT_NAMES[name], value))

    for key, value in record.extra.items():
        if key == CREATOR_FIELD and has_author:
            continue
        if key == IDENTIFIER_FIELD and merge_identifiers:
            continue
        if key == TITLE_ENTRIES_FIELD:
            if not has_title:
                pairs.append(("title", _complex_title(None, subtitle if has_subtitle else None, value)))
            continue
        pairs.append((key, value))

    return Value.mapping(pairs)


# =============================================================================
# COMPLEX SHAPES
# =============================================================================


def _matches(entry: Value, key: str, expected: str) -> bool:
    label = entry.get(key) if entry.is_mapping else None
    return label is not None and label.as_text().strip().lower() == expected


def _entries_with(value: Value, key: str, expected: str) -> Tuple[List[Value], List[Value]]:
    """Split a sequence into (mapping entries whose key equals expected, the rest)."""
    matching: List[Value] = []
    others: List[Value] = []
    for entry in value:
        (matching if _matches(entry, key, expected) else others).append(entry)
    return matching, others


def _first_index(entries: List[Value], key: str, expected: str) -> Optional[int]:
    return next((i for i, entry in enumerate(entries) if _matches(entry, key, expected)), None)


def _entry_text(entry: Value) -> Value:
    text = entry.get("text")
    return _lstrip_string(text) if text is not None else Value.string("")


def _apply_complex_title(record: MetadataRecord, value: Value) -> List[str]:
    """
    Fill title/subtitle from a title list; returns the fields it provided.

    Only the first main and the first subtitle entry are read. Every other
    entry (short titles, a second main title) is kept under TITLE_ENTRIES_FIELD.
    """
    entries = list(value)
    if not any(entry.is_mapping for entry in entries):
        record.fields["title"] = Value.string(value.as_text())
        return ["title"]

    main = _first_index(entries, "type", TITLE_MAIN_TYPE)
    subtitle = _first_index(entries, "type", TITLE_SUBTITLE_TYPE)
    provided = []

    if main is not None:
        record.fields["title"] = _entry_text(entries[main])
        provided.append("title")
    if subtitle is not None:
        record.fields["subtitle"] = _entry_text(entries[subtitle])
        provided.append("subtitle")

    leftovers = [entry for i, entry in enumerate(entries) if i not in (main, subtitle)]
    if leftovers:
        record.extra[TITLE_ENTRIES_FIELD] = Value.sequence(leftovers)
    return provided


def _apply_creators(record: MetadataRecord, value: Value) -> None:
    if not value.is_sequence:
        record.extra[CREATOR_FIELD] = value
        return

    authors, others = _entries_with(value, "role", AUTHOR_ROLE)
    if authors:
        names = [_entry_text(entry).as_text() for entry in authors]
        record.fields["author"] = Value.string(", ".join(name for name in names if name))
    if others:
        record.extra[CREATOR_FIELD] = Value.sequence(others)


def _apply_identifiers(record: MetadataRecord, value: Value) -> None:
    """The first ISBN entry is the ebook ISBN; every other entry stays in extra, in order."""
    if not value.is_sequence:
        record.extra[IDENTIFIER_FIELD] = value
        return

    entries = list(value)
    isbn = _first_index(entries, "scheme", ISBN_SCHEME)
    if isbn is not None:
        record.fields["isbn-ebook"] = _entry_text(entries[isbn])

    leftovers = [entry for i, entry in enumerate(entries) if i != isbn]
    if leftovers:
        record.extra[IDENTIFIER_FIELD] = Value.sequence(leftovers)


def _complex_title(title: Optional[Value], subtitle: Optional[Value], other_entries: Optional[Value]) -> Value:
    entries = []
    if title is not None:
        entries.append(Value.mapping([("type", Value.string(TITLE_MAIN_TYPE)), ("text", title)]))
    if subtitle is not None:
        entries.append(Value.mapping([("type", Value.string(TITLE_SUBTITLE_TYPE)), ("text", subtitle)]))
    if other_entries is not None and other_entries.is_sequence:
        entries.extend(other_entries)
    return Value.sequence(entries)


def _complex_identifiers(isbn_ebook: Value, other_identifiers: Value) -> Value:
    entries = [Value.mapping([("scheme", Value.string(ISBN_SCHEME.upper())), ("text", isbn_ebook)])]
    entries.extend(other_identifiers)
    return Value.sequence(entries)


def _complex_creators(author: Value, other_creators: Optional[Value]) -> Value:
    entries = [Value.mapping([("role", Value.string(AUTHOR_ROLE)), ("text", author)])]
    if other_creators is not None and other_creators.is_sequence:
        entries.extend(other_creators)
    return Value.sequence(entries)


def _flatten_author(value: Value) -> Value:
    """A list of author names is kept as one comma-separated string."""
    if value.is_sequence and all(item.is_scalar for item in value):
        return Value.string(value.as_text())
    return value


def _lstrip_string(value: Value) -> Value:
    if value.kind is ValueKind.STRING:
        return Value.string(value.payload.lstrip())
    return value
