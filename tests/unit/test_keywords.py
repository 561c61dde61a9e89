"""Unit tests for keyword extraction and classification."""

import pytest

from bookcreator.contexts.matching.keywords import (
    TemplateCategory,
    are_synonyms,
    classify,
    extract_keywords,
)


@pytest.mark.unit
def test_extract_keywords_drops_prefixes_and_extension():
    assert extract_keywords("03-introduction.md") == ["introduction"]
    assert extract_keywords("LIVRE-02-Frontmatter.indd") == ["frontmatter"]
    assert extract_keywords("ab12-3-04-Notes_de bas.indt") == ["notes", "bas"]


@pytest.mark.unit
def test_extract_keywords_discards_short_and_duplicate_tokens():
    assert extract_keywords("chapter-de-la-chapter.md") == ["chapter"]
    assert extract_keywords("01-02.md") == []


@pytest.mark.unit
def test_classify():
    assert classify("LIVRE-02-Frontmatter.indd") is TemplateCategory.FRONT_MATTER
    assert classify("LIVRE-07-Bibliographie.indd") is TemplateCategory.SPECIALIZED
    assert classify("LIVRE-90-Postface.indd") is TemplateCategory.BACK_MATTER
    assert classify("LIVRE-Chapter.indd") is TemplateCategory.BODY_MATTER


@pytest.mark.unit
def test_classify_precedence():
    """Test that front matter terms win over later lists."""
    assert classify("intro-notes.md") is TemplateCategory.FRONT_MATTER


@pytest.mark.unit
def test_synonyms():
    assert are_synonyms("bibliography", "bibliographie")
    assert are_synonyms("conclusion", "épilogue")
    assert not are_synonyms("index", "index")
    assert not are_synonyms("index", "glossary")


@pytest.mark.unit
def test_functions_are_idempotent():
    names = ["03-introduction.md", "LIVRE-07-Bibliographie.indd"]
    assert [extract_keywords(n) for n in names] == [extract_keywords(n) for n in names]
    assert [classify(n) for n in names] == [classify(n) for n in names]
