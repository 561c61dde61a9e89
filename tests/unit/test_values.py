"""Unit tests for the metadata Value union."""

import pytest

from bookcreator.contexts.metadata.values import Value, ValueKind, format_number


@pytest.mark.unit
def test_from_python_resolves_each_kind():
    """Test that plain Python data maps onto exactly one kind."""
    assert Value.from_python(None).kind is ValueKind.NULL
    assert Value.from_python(True).kind is ValueKind.BOOL
    assert Value.from_python(3).kind is ValueKind.NUMBER
    assert Value.from_python(2.5).kind is ValueKind.NUMBER
    assert Value.from_python("x").kind is ValueKind.STRING
    assert Value.from_python(["a"]).kind is ValueKind.SEQUENCE
    assert Value.from_python({"a": 1}).kind is ValueKind.MAPPING


@pytest.mark.unit
def test_bool_is_not_a_number():
    """Test that True stays a boolean rather than the number 1."""
    assert Value.from_python(True) != Value.number(1)
    with pytest.raises(TypeError):
        Value.number(True)


@pytest.mark.unit
def test_to_python_roundtrip_keeps_order():
    data = {"title": "Dune", "tags": ["sf", "desert"], "meta": {"pages": 412, "draft": False}, "note": None}
    value = Value.from_python(data)

    assert value.to_python() == data
    assert list(value.keys()) == ["title", "tags", "meta", "note"]


@pytest.mark.unit
def test_unsupported_type_raises():
    with pytest.raises(TypeError, match="Cannot convert set"):
        Value.from_python({"a": {1, 2}})


@pytest.mark.unit
def test_values_are_immutable():
    """Test that mapping payloads are read-only views."""
    value = Value.from_python({"a": 1})
    with pytest.raises(TypeError):
        value.payload["b"] = Value.number(2)


@pytest.mark.unit
def test_mapping_access_helpers():
    value = Value.from_python({"a": 1})

    assert "a" in value
    assert value.get("a") == Value.number(1)
    assert value.get("missing") is None
    assert Value.string("a").get("a") is None
    assert "a" not in Value.string("a")


@pytest.mark.unit
def test_scalars_have_no_length():
    with pytest.raises(TypeError):
        len(Value.string("abc"))
    with pytest.raises(TypeError):
        iter(Value.number(1))


@pytest.mark.unit
def test_as_text():
    """Test display text for every kind."""
    assert Value.null().as_text() == ""
    assert Value.boolean(False).as_text() == "false"
    assert Value.number(12.0).as_text() == "12"
    assert Value.number(9.5).as_text() == "9.5"
    assert Value.from_python(["Anne", "Bob"]).as_text() == "Anne, Bob"
    assert Value.from_python({"a": 1}).as_text() == ""


@pytest.mark.unit
def test_is_blank():
    assert Value.null().is_blank()
    assert Value.string("   ").is_blank()
    assert Value.sequence().is_blank()
    assert Value.mapping().is_blank()
    assert not Value.boolean(False).is_blank()
    assert not Value.number(0).is_blank()


@pytest.mark.unit
def test_equal_numbers_compare_equal():
    """Test that an integral float equals its integer (serialization writes 12.0 as 12)."""
    assert Value.number(12.0) == Value.number(12)
    assert format_number(12.0) == "12"
    assert format_number(7) == "7"
