"""
Identifiers Context

Responsibilities:
- Validates and normalizes 12/13-digit ISBN (EAN-13) identifiers
- Computes check digits
- Encodes identifiers into 95-module EAN-13 bar patterns

Owns: Identifier rules and barcode symbology tables
Never: Draws bars or decides where a barcode is placed
"""

from bookcreator.contexts.identifiers.isbn import (
    IdentifierResult,
    barcode_pattern,
    calculate_check_digit,
    encode_ean13,
    is_ean13_valid,
    validate,
)

__all__ = [
    "IdentifierResult",
    "validate",
    "calculate_check_digit",
    "is_ean13_valid",
    "encode_ean13",
    "barcode_pattern",
]
