"""
Integration tests for metadata file import and export.
Tests: front-matter file -> MetadataRecord -> front-matter file -> same record.
"""

import pytest

from bookcreator.contexts.metadata import export_metadata, import_metadata, parse, validate_roundtrip
from bookcreator.contexts.metadata.exceptions import MetadataExportError, MetadataImportError

BOOK_MARKDOWN = """---
title:
  - type: main
    text: Le Rouge et le Noir
  - type: subtitle
    text: Chronique de 1830
  - type: short
    text: Le Rouge
creator:
  - role: author
    text: Stendhal
  - role: translator
    text: Anne Dupont
identifier:
  - scheme: ISBN
    text: 978-2-07-036028-4
  - scheme: ISBN
    text: 978-2-07-036029-1
isbnPrint: 978207036028
date: 2024
lang: fr
rights: |
  Tous droits réservés.
  Reproduction interdite.
input-files:
  - 01-faux-titre.md
  - 03-chapitre-1.md
  - 02-preface.md
series: Folio classique
---

# Le Rouge et le Noir

Body text is not metadata.
"""


@pytest.fixture
def book_file(tmp_path):
    path = tmp_path / "book.md"
    path.write_text(BOOK_MARKDOWN, encoding="utf-8")
    return path


@pytest.mark.integration
def test_import_canonicalizes_fields(book_file):
    result = import_metadata(book_file)
    record = result.record

    assert result.path == book_file
    assert record.get_text("title") == "Le Rouge et le Noir"
    assert record.get_text("subtitle") == "Chronique de 1830"
    assert record.get_text("author") == "Stendhal"
    assert record.get_text("isbn-ebook") == "978-2-07-036028-4"
    assert record.get_text("isbn-print") == "978207036028"
    assert record.get_text("print-date") == "2024"
    assert record.get_text("language") == "fr"
    assert record.get_text("rights") == "Tous droits réservés.\rReproduction interdite."
    assert record.get_text("series") == "Folio classique"
    assert record.extra["title-entries"].to_python() == [{"type": "short", "text": "Le Rouge"}]
    assert record.extra["identifier"].to_python() == [{"scheme": "ISBN", "text": "978-2-07-036029-1"}]
    assert result.input_files == ["01-faux-titre.md", "03-chapitre-1.md", "02-preface.md"]


@pytest.mark.integration
def test_export_then_import_gives_same_record(book_file, tmp_path):
    original = import_metadata(book_file).record

    written = export_metadata(original, tmp_path / "out" / "metadata.yaml")
    text = written.read_text(encoding="utf-8")
    restored = import_metadata(written).record

    assert text.startswith("---\n") and text.endswith("---\n")
    assert "date: 2024" in text
    assert "lang: fr" in text
    assert "title-entries" not in text
    assert "978-2-07-036029-1" in text
    assert restored.fields == original.fields
    assert restored.extra == original.extra


@pytest.mark.integration
def test_roundtrip_of_imported_front_matter(book_file):
    assert validate_roundtrip(import_metadata(book_file).external)


@pytest.mark.integration
def test_empty_file_gives_empty_record(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    result = import_metadata(path)

    assert len(result.record.fields) == 0
    assert result.input_files == []
    assert result.external == parse("")


@pytest.mark.integration
def test_missing_file(tmp_path):
    with pytest.raises(MetadataImportError) as exc_info:
        import_metadata(tmp_path / "absent.md")
    assert exc_info.value.path == tmp_path / "absent.md"


@pytest.mark.integration
def test_file_that_is_not_utf8(tmp_path):
    path = tmp_path / "latin1.yaml"
    path.write_bytes("title: Élégie\n".encode("latin-1"))

    with pytest.raises(MetadataImportError) as exc_info:
        import_metadata(path)
    assert isinstance(exc_info.value.original_error, UnicodeDecodeError)


@pytest.mark.integration
def test_export_to_unwritable_location(book_file, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    record = import_metadata(book_file).record

    with pytest.raises(MetadataExportError):
        export_metadata(record, blocker / "metadata.yaml")
