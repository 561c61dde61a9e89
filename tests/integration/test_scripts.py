"""
Integration tests for the command-line scripts.
Tests: scripts/*.py typer apps invoked on files written to tmp_path.
"""

import importlib.util
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

SCRIPTS_DIR = Path(__file__).resolve().parents[2] / "scripts"

METADATA = """---
title: Le Rouge et le Noir
author: Stendhal
isbnPrint: 978-2-07-036028-4
series: Folio classique
input-files:
  - 01-faux-titre.md
  - 02-chapitre-1.md
---
"""


def load_script(name: str):
    """Import a script module from scripts/ (not a package)."""
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    """Console sinks point at the runner's stream, which closes after each invoke."""
    yield
    logger.remove()


@pytest.fixture
def metadata_file(tmp_path):
    path = tmp_path / "metadata.md"
    path.write_text(METADATA, encoding="utf-8")
    return path


@pytest.fixture
def book_metadata(tmp_path, monkeypatch):
    module = load_script("book_metadata")
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    return module


class TestBookMetadata:
    @pytest.mark.integration
    def test_show(self, runner, book_metadata, metadata_file, tmp_path):
        result = runner.invoke(book_metadata.app, ["show", str(metadata_file)])

        assert result.exit_code == 0
        assert "Metadata: metadata.md" in result.output
        assert "isbn-print" in result.output
        assert "978-2-07-036028-4" in result.output
        assert "series" in result.output
        assert "Input files (2):" in result.output
        assert list((tmp_path / "logs").glob("metadata_show_*/metadata.log"))

    @pytest.mark.integration
    def test_show_raw(self, runner, book_metadata, metadata_file):
        result = runner.invoke(book_metadata.app, ["show", str(metadata_file), "--raw"])

        assert result.exit_code == 0
        assert 'isbnPrint: "978-2-07-036028-4"' in result.output

    @pytest.mark.integration
    def test_show_missing_file(self, runner, book_metadata, tmp_path):
        result = runner.invoke(book_metadata.app, ["show", str(tmp_path / "absent.md")])

        assert result.exit_code == 1
        assert "Metadata file not found" in result.output

    @pytest.mark.integration
    def test_export(self, runner, book_metadata, metadata_file, tmp_path):
        output = tmp_path / "out" / "metadata.yaml"
        result = runner.invoke(book_metadata.app, ["export", str(metadata_file), str(output)])

        assert result.exit_code == 0
        assert "Exported 3 fields" in result.output
        assert 'isbn-print: "978-2-07-036028-4"' in output.read_text(encoding="utf-8")

    @pytest.mark.integration
    def test_export_refuses_to_overwrite(self, runner, book_metadata, metadata_file, tmp_path):
        output = tmp_path / "existing.yaml"
        output.write_text("keep: me\n", encoding="utf-8")

        refused = runner.invoke(book_metadata.app, ["export", str(metadata_file), str(output)])
        assert refused.exit_code == 1
        assert output.read_text(encoding="utf-8") == "keep: me\n"

        forced = runner.invoke(book_metadata.app, ["export", str(metadata_file), str(output), "--overwrite"])
        assert forced.exit_code == 0
        assert "keep" not in output.read_text(encoding="utf-8")

    @pytest.mark.integration
    def test_roundtrip(self, runner, book_metadata, metadata_file):
        result = runner.invoke(book_metadata.app, ["roundtrip", str(metadata_file)])

        assert result.exit_code == 0
        assert "✓ metadata.md" in result.output


class TestValidateIsbn:
    @pytest.mark.integration
    def test_valid_and_placeholder(self, runner):
        app = load_script("validate_isbn").app
        result = runner.invoke(app, ["978-2-07-036028-4", "978-2-940426-XX-X", "--barcode"])

        assert result.exit_code == 0
        assert "✓ 978-2-07-036028-4 -> 9782070360284" in result.output
        assert "(no barcode for placeholder identifiers)" in result.output
        assert "101" in result.output

    @pytest.mark.integration
    def test_invalid_exits_with_error(self, runner):
        app = load_script("validate_isbn").app
        result = runner.invoke(app, ["978-2-07-036028-4", "978-2-07-036028-5"])

        assert result.exit_code == 1
        assert "✗ 978-2-07-036028-5: Invalid check digit: it should be 4" in result.output


class TestPlanBook:
    @pytest.fixture
    def plan_book(self, tmp_path, monkeypatch):
        module = load_script("plan_book")
        monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
        return module

    @pytest.fixture
    def project_file(self, tmp_path, metadata_file):
        path = tmp_path / "book.yaml"
        path.write_text(
            "name: rouge\n"
            "chapter_count: 1\n"
            "templates:\n"
            "  chapter: LIVRE-Chapter.indd\n"
            "  before: [LIVRE-01-Halftitle.indd]\n"
            f"metadata: {metadata_file.name}\n"
            "inject_content: true\n",
            encoding="utf-8",
        )
        return path

    @pytest.mark.integration
    def test_plan(self, runner, plan_book, project_file, tmp_path):
        result = runner.invoke(plan_book.app, ["--project", str(project_file)])

        assert result.exit_code == 0
        assert "Generation plan: ROUGE-Book.indb" in result.output
        assert "ROUGE-01-Halftitle.indd" in result.output
        assert "ROUGE-Chapter_1.indd" in result.output
        assert "02-chapitre-1.md" in result.output
        assert list((tmp_path / "logs").glob("plan_rouge_*/assembly.log"))
        assert list((tmp_path / "logs").glob("plan_rouge_*/match.log"))

    @pytest.mark.integration
    def test_missing_project(self, runner, plan_book, tmp_path):
        result = runner.invoke(plan_book.app, ["--project", str(tmp_path / "absent.yaml")])

        assert result.exit_code == 1
        assert "Book project file not found" in result.output

    @pytest.mark.integration
    def test_invalid_project(self, runner, plan_book, project_file):
        project_file.write_text("name: rouge\nchapter_count: 2\n", encoding="utf-8")
        result = runner.invoke(plan_book.app, ["--project", str(project_file)])

        assert result.exit_code == 1
        assert "A chapter template is required" in result.output
