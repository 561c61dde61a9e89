"""Unit tests for book project loading and validation."""

from pathlib import Path

import pytest

from bookcreator.contexts.assembly.book_project import (
    DESCRIPTIVE_STRATEGY,
    ORDINAL_STRATEGY,
    BookProject,
    TemplateSet,
    book_project_from_dict,
    load_book_project,
    validate_book,
)
from bookcreator.contexts.assembly.exceptions import BookProjectError
from bookcreator.contexts.metadata.metadata_record import MetadataRecord


def make_project(**overrides) -> BookProject:
    values = {
        "name": "dune",
        "chapter_count": 3,
        "templates": TemplateSet(chapter="LIVRE-Chapter.indd"),
    }
    values.update(overrides)
    return BookProject(**values)


class TestBookProjectFromDict:
    @pytest.mark.unit
    def test_defaults_and_resolution(self, tmp_path):
        project = book_project_from_dict(
            {
                "name": " dune ",
                "chapter_count": "3",
                "templates": {"chapter": "LIVRE-Chapter.indd", "before": ["LIVRE-01-Halftitle.indd"]},
                "metadata": "config/metadata.yaml",
                "content_dir": "/abs/text",
            },
            root=tmp_path,
        )

        assert project.name == "dune"
        assert project.prefix == "DUNE-"
        assert project.chapter_count == 3
        assert project.templates.before == ["LIVRE-01-Halftitle.indd"]
        assert project.templates.after == []
        assert project.templates.cover is None
        assert project.metadata_path == tmp_path / "config" / "metadata.yaml"
        assert project.content_dir == Path("/abs/text")
        assert project.strategy == ORDINAL_STRATEGY
        assert project.display.original_title_label == "Original Title: "

    @pytest.mark.unit
    def test_strategy_is_case_insensitive(self):
        project = book_project_from_dict({"name": "x", "matching": {"strategy": "Descriptive"}})
        assert project.strategy == DESCRIPTIVE_STRATEGY

    @pytest.mark.unit
    def test_unknown_strategy(self):
        with pytest.raises(BookProjectError) as exc_info:
            book_project_from_dict({"matching": {"strategy": "random"}})
        assert exc_info.value.field == "matching.strategy"

    @pytest.mark.unit
    def test_non_numeric_chapter_count(self):
        with pytest.raises(BookProjectError, match="Chapter count must be a number"):
            book_project_from_dict({"chapter_count": "twelve"})


class TestLoadBookProject:
    @pytest.mark.unit
    def test_load_from_file(self, tmp_path):
        project_file = tmp_path / "book.yaml"
        project_file.write_text(
            "name: dune\nchapter_count: 2\ntemplates:\n  chapter: LIVRE-Chapter.indd\nmetadata: meta.md\n",
            encoding="utf-8",
        )

        project = load_book_project(project_file)

        assert project.chapter_count == 2
        assert project.root == tmp_path
        assert project.metadata_path == tmp_path / "meta.md"

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(BookProjectError) as exc_info:
            load_book_project(tmp_path / "absent.yaml")
        assert exc_info.value.project_path == tmp_path / "absent.yaml"

    @pytest.mark.unit
    def test_invalid_yaml(self, tmp_path):
        project_file = tmp_path / "book.yaml"
        project_file.write_text("name: [unclosed\n", encoding="utf-8")

        with pytest.raises(BookProjectError, match="Could not read book project"):
            load_book_project(project_file)


class TestValidateBook:
    @pytest.mark.unit
    def test_valid_project(self):
        assert validate_book(make_project()).valid

    @pytest.mark.unit
    def test_checks_in_order(self):
        assert validate_book(make_project(name="")).message == "Book name is required"
        assert validate_book(make_project(chapter_count=0)).message == "Chapter count must be a positive number"
        assert validate_book(make_project(templates=TemplateSet())).message == "A chapter template is required"

    @pytest.mark.unit
    def test_identifiers_validated(self):
        record = MetadataRecord.from_dict({"isbn-print": "9782070360281"})
        result = validate_book(make_project(), record)

        assert not result.valid
        assert result.message == "Invalid print ISBN: Invalid check digit: it should be 4"

    @pytest.mark.unit
    def test_placeholder_identifier_accepted(self):
        record = MetadataRecord.from_dict({"isbn-ebook": "978-2-940426-XX-X", "isbn-print": ""})
        assert validate_book(make_project(), record).valid
