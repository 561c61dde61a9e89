"""Unit tests for the front-matter parser."""

import pytest

from bookcreator.contexts.metadata.values import Value, ValueKind
from bookcreator.contexts.metadata.yaml_parser import (
    ParseCursor,
    ParserState,
    convert_value,
    parse,
    split_flow_items,
    strip_front_matter_delimiters,
    unquote,
)


class TestConvertValue:
    """Test scalar coercion rules."""

    @pytest.mark.unit
    def test_booleans_and_null(self):
        for word in ("true", "yes", "on"):
            assert convert_value(word) == Value.boolean(True)
        for word in ("false", "no", "off"):
            assert convert_value(word) == Value.boolean(False)
        assert convert_value("null").is_null
        assert convert_value("~").is_null

    @pytest.mark.unit
    def test_numbers(self):
        assert convert_value("1965") == Value.number(1965)
        assert convert_value("9.5") == Value.number(9.5)
        assert convert_value("-3") == Value.number(-3)
        assert convert_value("0") == Value.number(0)
        assert convert_value("0.25") == Value.number(0.25)

    @pytest.mark.unit
    def test_zero_padded_codes_stay_strings(self):
        """Test that leading zeros protect identifiers and chapter numbers."""
        assert convert_value("0123") == Value.string("0123")
        assert convert_value("007") == Value.string("007")

    @pytest.mark.unit
    def test_quoted_strings(self):
        assert convert_value('"true"') == Value.string("true")
        assert convert_value("'42'") == Value.string("42")
        assert convert_value("'it''s'") == Value.string("it's")
        assert convert_value('"a\\nb\\t\\"c\\""') == Value.string('a\nb\t"c"')

    @pytest.mark.unit
    def test_flow_sequences(self):
        assert convert_value("[sf, 2, yes]").to_python() == ["sf", 2, True]
        assert convert_value('[a, "b, c"]').to_python() == ["a", "b, c"]
        assert convert_value("[]") == Value.sequence()
        assert convert_value("[[a, b], c]").to_python() == [["a", "b"], "c"]
        assert convert_value("[[[a, b]]]").to_python() == [[["a", "b"]]]

    @pytest.mark.unit
    def test_empty_and_literal(self):
        assert convert_value("") == Value.string("")
        assert convert_value("   ") == Value.string("")
        assert convert_value("{}") == Value.mapping()
        assert convert_value("Editions du Seuil") == Value.string("Editions du Seuil")


class TestParseScalars:
    """Test top-level key: value lines."""

    @pytest.mark.unit
    def test_basic_front_matter(self):
        text = "---\ntitle: Dune\nyear: 1965\nprice: 9.5\npublished: yes\nnote: ~\n---\n"
        assert parse(text).to_python() == {
            "title": "Dune",
            "year": 1965,
            "price": 9.5,
            "published": True,
            "note": None,
        }

    @pytest.mark.unit
    def test_key_order_follows_source(self):
        result = parse("zeta: 1\nalpha: 2\nmid: 3")
        assert list(result.keys()) == ["zeta", "alpha", "mid"]

    @pytest.mark.unit
    def test_value_keeps_later_colons(self):
        result = parse("url: https://example.org/a:b\nquote: \"He said: hi\"")
        assert result.get("url") == Value.string("https://example.org/a:b")
        assert result.get("quote") == Value.string("He said: hi")

    @pytest.mark.unit
    def test_empty_value_without_continuation(self):
        result = parse("subtitle:\ntitle: Dune")
        assert result.to_python() == {"subtitle": "", "title": "Dune"}

    @pytest.mark.unit
    def test_quoted_keys(self):
        assert parse('"odd key": 1').to_python() == {"odd key": 1}

    @pytest.mark.unit
    def test_all_line_endings(self):
        result = parse("title: Dune\r\nlang: en\rprice: 3\nrights: all")
        assert result.to_python() == {"title": "Dune", "lang": "en", "price": 3, "rights": "all"}


class TestParseContainers:
    """Test sequences and nested mappings."""

    @pytest.mark.unit
    def test_block_sequence(self):
        result = parse("authors:\n  - Anne\n  - Bob\nlang: fr")
        assert result.to_python() == {"authors": ["Anne", "Bob"], "lang": "fr"}

    @pytest.mark.unit
    def test_sequence_at_key_indent(self):
        result = parse("tags:\n- a\n- b\nnext: 1")
        assert result.to_python() == {"tags": ["a", "b"], "next": 1}

    @pytest.mark.unit
    def test_complex_items(self):
        """Test that '- key: value' items collect their deeper pairs into one mapping."""
        text = (
            "title:\n"
            "  - type: main\n"
            "    text: Le Rouge et le Noir\n"
            "  - type: subtitle\n"
            "    text: Chronique de 1830\n"
            "lang: fr\n"
        )
        assert parse(text).to_python() == {
            "title": [
                {"type": "main", "text": "Le Rouge et le Noir"},
                {"type": "subtitle", "text": "Chronique de 1830"},
            ],
            "lang": "fr",
        }

    @pytest.mark.unit
    def test_nested_mapping(self):
        result = parse("publisher:\n  name: Seuil\n  city: Paris\nlang: fr")
        assert result.to_python() == {"publisher": {"name": "Seuil", "city": "Paris"}, "lang": "fr"}

    @pytest.mark.unit
    def test_sequence_inside_nested_mapping(self):
        result = parse("book:\n  tags:\n    - a\n    - b\n  lang: fr")
        assert result.to_python() == {"book": {"tags": ["a", "b"], "lang": "fr"}}

    @pytest.mark.unit
    def test_two_level_nested_mapping(self):
        result = parse("a:\n  b:\n    c: 1\n  d: 2")
        assert result.to_python() == {"a": {"b": {"c": 1}, "d": 2}}

    @pytest.mark.unit
    def test_open_container_flushed_at_end(self):
        """Test that a sequence still open at end of input is committed."""
        assert parse("tags:\n  - a\n  - b").to_python() == {"tags": ["a", "b"]}
        assert parse("m:\n  k: v").to_python() == {"m": {"k": "v"}}


class TestParseBlocks:
    """Test literal and folded block scalars."""

    @pytest.mark.unit
    def test_literal_block_uses_host_break(self):
        text = "abstract: |\n  Line one\n  Line two\n\n  Line four\nnext: x"
        result = parse(text)
        assert result.get("abstract") == Value.string("Line one\rLine two\r\rLine four")
        assert result.get("next") == Value.string("x")

    @pytest.mark.unit
    def test_literal_block_custom_break(self):
        result = parse("abstract: |\n  one\n    two\n", line_break="\n")
        assert result.get("abstract") == Value.string("one\n  two")

    @pytest.mark.unit
    def test_folded_block(self):
        result = parse("summary: >\n  one\n  two\nyear: 1")
        assert result.to_python() == {"summary": "one two", "year": 1}

    @pytest.mark.unit
    def test_quoted_empty_opens_folded_block(self):
        result = parse('summary: ""\n  continued text\n  more')
        assert result.get("summary") == Value.string("continued text more")

    @pytest.mark.unit
    def test_plain_continuation_is_folded(self):
        result = parse("summary:\n  some long\n  text\nlang: en")
        assert result.to_python() == {"summary": "some long text", "lang": "en"}

    @pytest.mark.unit
    def test_chomping_indicators(self):
        result = parse("a: |-\n  x\n  y\nb: >+\n  p\n  q", line_break="\n")
        assert result.to_python() == {"a": "x\ny", "b": "p q"}

    @pytest.mark.unit
    def test_block_needs_two_extra_columns(self):
        """Test that a line indented only one column deeper ends the block."""
        result = parse("a: |\n x: 1\nb: 2")
        assert result.get("a") == Value.string("")
        assert result.get("b") == Value.number(2)


class TestParseRecovery:
    """Test best-effort recovery from malformed input."""

    @pytest.mark.unit
    def test_empty_input(self):
        assert parse("") == Value.mapping()
        assert parse("   \n  ") == Value.mapping()

    @pytest.mark.unit
    def test_comments_and_blank_lines_skipped(self):
        result = parse("# heading comment\ntitle: Dune\n\n   # indented comment\nlang: en")
        assert result.to_python() == {"title": "Dune", "lang": "en"}

    @pytest.mark.unit
    def test_unparseable_lines_skipped(self):
        result = parse("title: Dune\njust some text\nlang: fr")
        assert result.to_python() == {"title": "Dune", "lang": "fr"}

    @pytest.mark.unit
    def test_garbage_never_raises(self):
        result = parse(":::\n- orphan\n  - deeper\n\t: z\n---\n")
        assert result.kind is ValueKind.MAPPING
        assert len(result) == 0

    @pytest.mark.unit
    def test_body_after_front_matter_ignored(self):
        text = "---\ntitle: Dune\n---\n# Chapter One\nbody: not metadata\n"
        assert parse(text).to_python() == {"title": "Dune"}


@pytest.mark.unit
def test_strip_front_matter_delimiters():
    assert strip_front_matter_delimiters("---\na: 1\n---\n") == "a: 1\n"
    assert strip_front_matter_delimiters("a: 1\n---\n") == "a: 1"
    assert strip_front_matter_delimiters("a: 1") == "a: 1"


@pytest.mark.unit
def test_split_flow_items_respects_quotes():
    assert split_flow_items('a, "b, c", d') == ["a", '"b, c"', "d"]
    assert split_flow_items("'x, y', z") == ["'x, y'", "z"]
    assert split_flow_items("  ") == []


@pytest.mark.unit
def test_split_flow_items_respects_nested_brackets():
    assert split_flow_items("[a, b], c") == ["[a, b]", "c"]
    assert split_flow_items('[["x, y"], z]') == ['[["x, y"], z]']
    assert split_flow_items("a], b") == ["a]", "b"]


@pytest.mark.unit
def test_unquote():
    assert unquote('"a\\\\b"') == "a\\b"
    assert unquote("'don''t'") == "don't"


@pytest.mark.unit
def test_cursor_holds_one_open_binding():
    """Test that entering a second mode while one is open is refused."""
    cursor = ParseCursor(lines=["a:", "  - x"])
    cursor.enter(ParserState.SEQUENCE, "a", 0)
    with pytest.raises(RuntimeError, match="still open"):
        cursor.enter(ParserState.MAPPING, "b", 0)

    cursor.add_item(Value.string("x"))
    assert cursor.close() == ("a", Value.sequence([Value.string("x")]))
    assert cursor.state is ParserState.SCALAR
    assert cursor.close() is None
