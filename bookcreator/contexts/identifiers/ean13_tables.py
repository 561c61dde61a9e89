"""
EAN-13 Symbology Tables

Fixed module patterns of the 13-digit retail barcode. Each digit is drawn as
7 modules ('1' = bar, '0' = space). Tables are indexed by digit value.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GuardPatterns:
    """Guard bars framing the two halves of the symbol."""

    START: str = "101"
    CENTER: str = "01010"
    END: str = "101"


@dataclass(frozen=True)
class DigitPatterns:
    """
    7-module digit encodings.

    The first digit of the code is not drawn: it selects, through PARITY, whether
    each of digits 1-6 uses the odd (L) or even (G) left-hand set. Digits 7-12
    always use the right-hand (R) set.
    """

    LEFT_ODD: Tuple[str, ...] = (
        "0001101",
        "0011001",
        "0010011",
        "0111101",
        "0100011",
        "0110001",
        "0101111",
        "0111011",
        "0110111",
        "0001011",
    )
    LEFT_EVEN: Tuple[str, ...] = (
        "0100111",
        "0110011",
        "0011011",
        "0100001",
        "0011101",
        "0111001",
        "0000101",
        "0010001",
        "0001001",
        "0010111",
    )
    RIGHT: Tuple[str, ...] = (
        "1110010",
        "1100110",
        "1101100",
        "1000010",
        "1011100",
        "1001110",
        "1010000",
        "1000100",
        "1001000",
        "1110100",
    )
    PARITY: Tuple[str, ...] = (
        "OOOOOO",
        "OOEOEE",
        "OOEEOE",
        "OOEEEO",
        "OEOOEE",
        "OEEOOE",
        "OEEEOO",
        "OEOEOE",
        "OEOEEO",
        "OEEOEO",
    )


ODD_PARITY = "O"

# Total symbol width: 3 + 6*7 + 5 + 6*7 + 3
SYMBOL_MODULES = 95
DIGIT_MODULES = 7
