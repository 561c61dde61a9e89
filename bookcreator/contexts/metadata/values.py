"""
Metadata Value Model

Tagged union for values read from front matter: null, boolean, number, string,
sequence and mapping. Every consumer dispatches on ``Value.kind`` instead of
probing Python types, so a value always resolves to exactly one shape.

Values are immutable once constructed. Sequences hold tuples and mappings hold
read-only views over an insertion-ordered dict, which keeps serialization order
stable.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union


class ValueKind(Enum):
    """Discriminant of the metadata value union."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


SCALAR_KINDS = frozenset({ValueKind.NULL, ValueKind.BOOL, ValueKind.NUMBER, ValueKind.STRING})


@dataclass(frozen=True)
class Value:
    """
    One parsed metadata value.

    Attributes:
        kind: Which member of the union this is
        payload: None, bool, int/float, str, tuple of Values, or read-only mapping of
                 str -> Value depending on ``kind``

    Build values through the named constructors rather than the raw initializer:

        >>> Value.string("Les Misérables")
        >>> Value.sequence([Value.string("fr"), Value.string("en")])
        >>> Value.from_python({"title": "Dune", "tags": ["sf"]})
    """

    kind: ValueKind
    payload: Any = None

    # Constructors

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(ValueKind.BOOL, bool(flag))

    @classmethod
    def number(cls, number: Union[int, float]) -> "Value":
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise TypeError(f"Expected int or float, got {type(number).__name__}")
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, str(text))

    @classmethod
    def sequence(cls, items: Iterable["Value"] = ()) -> "Value":
        return cls(ValueKind.SEQUENCE, tuple(items))

    @classmethod
    def mapping(
        cls, pairs: Union[Mapping[str, "Value"], Iterable[Tuple[str, "Value"]]] = ()
    ) -> "Value":
        return cls(ValueKind.MAPPING, MappingProxyType(dict(pairs)))

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """
        Convert plain Python data (dict/list/str/int/float/bool/None) into a Value.

        Values pass through unchanged; tuples are treated as lists.

        Raises:
            TypeError: If obj contains an unsupported type
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, (int, float)):
            return cls.number(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, Mapping):
            return cls.mapping((str(key), cls.from_python(item)) for key, item in obj.items())
        if isinstance(obj, (list, tuple)):
            return cls.sequence(cls.from_python(item) for item in obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a metadata Value")

    # Predicates

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    @property
    def is_sequence(self) -> bool:
        return self.kind is ValueKind.SEQUENCE

    @property
    def is_mapping(self) -> bool:
        return self.kind is ValueKind.MAPPING

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    # Container access

    def get(self, key: str, default: Optional["Value"] = None) -> Optional["Value"]:
        """Look up a key of a mapping value (default for any other kind)."""
        if self.kind is not ValueKind.MAPPING:
            return default
        return self.payload.get(key, default)

    def keys(self):
        return self.payload.keys() if self.kind is ValueKind.MAPPING else ()

    def items(self):
        return self.payload.items() if self.kind is ValueKind.MAPPING else ()

    def __contains__(self, key: object) -> bool:
        return self.kind is ValueKind.MAPPING and key in self.payload

    def __iter__(self) -> Iterator[Any]:
        if self.kind is ValueKind.SEQUENCE:
            return iter(self.payload)
        if self.kind is ValueKind.MAPPING:
            return iter(self.payload)
        raise TypeError(f"{self.kind.value} value is not iterable")

    def __len__(self) -> int:
        if self.kind in (ValueKind.SEQUENCE, ValueKind.MAPPING):
            return len(self.payload)
        raise TypeError(f"{self.kind.value} value has no length")

    # Conversion

    def to_python(self) -> Any:
        """Convert back to plain Python data (dicts keep insertion order)."""
        if self.kind in SCALAR_KINDS:
            return self.payload
        if self.kind is ValueKind.SEQUENCE:
            return [item.to_python() for item in self.payload]
        if self.kind is ValueKind.MAPPING:
            return {key: item.to_python() for key, item in self.payload.items()}
        raise ValueError(f"Unknown value kind: {self.kind}")

    def as_text(self) -> str:
        """
        Render a value as display text.

        Null renders as an empty string, booleans as true/false, integral floats
        without a trailing ``.0``, sequences as comma-separated text. Mappings have
        no display form and render as an empty string.
        """
        if self.kind is ValueKind.NULL:
            return ""
        if self.kind is ValueKind.BOOL:
            return "true" if self.payload else "false"
        if self.kind is ValueKind.NUMBER:
            return format_number(self.payload)
        if self.kind is ValueKind.STRING:
            return self.payload
        if self.kind is ValueKind.SEQUENCE:
            return ", ".join(item.as_text() for item in self.payload if not item.is_mapping)
        if self.kind is ValueKind.MAPPING:
            return ""
        raise ValueError(f"Unknown value kind: {self.kind}")

    def is_blank(self) -> bool:
        """True for null, empty strings and empty containers."""
        if self.kind is ValueKind.NULL:
            return True
        if self.kind is ValueKind.STRING:
            return self.payload.strip() == ""
        if self.kind in (ValueKind.SEQUENCE, ValueKind.MAPPING):
            return len(self.payload) == 0
        return False


def format_number(number: Union[int, float]) -> str:
    """Format a number as metadata text (12.0 -> "12", 9.5 -> "9.5")."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return repr(number) if isinstance(number, float) else str(number)


EMPTY_MAPPING = Value.mapping()
