"""
ISBN / EAN-13 Codec

Validates 12- and 13-digit book identifiers, computes the EAN-13 check digit and
encodes a code into the 95-module bar pattern drawn under the cover barcode.

Validation never raises: it returns an IdentifierResult whose message explains
the outcome. Encoding assumes a validated code.

Example:
    >>> validate("978-2-07-036028-4").valid
    True
    >>> encode_ean13("9782070360284")[:3]
    '101'
"""

import re
from dataclasses import dataclass
from typing import Optional

from bookcreator.contexts.identifiers.ean13_tables import (
    ODD_PARITY,
    DigitPatterns,
    GuardPatterns,
)

NON_DIGIT = re.compile(r"\D")

# Unassigned identifier written with filler letters, e.g. 978-2-940426-XX-X
PLACEHOLDER = re.compile(r"^978[\d-]*[Xx][Xx-]*[\d-]*$")

BODY_LENGTH = 12
CODE_LENGTH = 13


@dataclass(frozen=True)
class IdentifierResult:
    """
    Outcome of one validate() call.

    Attributes:
        valid: Whether the input is usable as an identifier
        normalized_code: 13-digit code (or the placeholder text) when valid
        message: Human-readable explanation ("" for a plain valid code)
    """

    valid: bool
    normalized_code: Optional[str] = None
    message: str = ""


def validate(raw: str) -> IdentifierResult:
    """
    Validate and normalize an identifier written with arbitrary punctuation.

    - Placeholder identifiers (978 prefix with X filler) pass through unchecked
    - 12 digits: the check digit is computed and appended
    - 13 digits: the check digit is verified
    - Any other digit count is rejected

    Examples:
        >>> validate("123456789012").normalized_code
        '1234567890128'
        >>> validate("1234567890121").message
        'Invalid check digit: it should be 8'
    """
    text = (raw or "").strip()
    if PLACEHOLDER.match(re.sub(r"\s+", "", text)):
        return IdentifierResult(valid=True, normalized_code=text, message="Placeholder ISBN, check digit not verified")

    digits = NON_DIGIT.sub("", text)

    if len(digits) < BODY_LENGTH:
        return IdentifierResult(valid=False, message="ISBN needs at least 12 digits")

    if len(digits) == BODY_LENGTH:
        check_digit = calculate_check_digit(digits)
        return IdentifierResult(
            valid=True,
            normalized_code=f"{digits}{check_digit}",
            message=f"Check digit added: {check_digit}",
        )

    if len(digits) == CODE_LENGTH:
        if not is_ean13_valid(digits):
            expected = calculate_check_digit(digits[:BODY_LENGTH])
            return IdentifierResult(valid=False, message=f"Invalid check digit: it should be {expected}")
        return IdentifierResult(valid=True, normalized_code=digits)

    return IdentifierResult(valid=False, message="Invalid ISBN format")


def calculate_check_digit(code: str) -> int:
    """
    EAN-13 check digit over the first 12 digits.

    Digits at even positions weigh 1, odd positions weigh 3; the check digit
    brings the weighted sum up to a multiple of 10.
    """
    total = sum(int(digit) * (1 if position % 2 == 0 else 3) for position, digit in enumerate(code[:BODY_LENGTH]))
    return (10 - total % 10) % 10


def is_ean13_valid(code: str) -> bool:
    return len(code) == CODE_LENGTH and code.isdigit() and int(code[-1]) == calculate_check_digit(code)


def encode_ean13(code: str) -> str:
    """
    Encode a 13-digit code as a 95-character string of bar modules.

    Layout: start guard, digits 1-6 with the parity pattern selected by digit 0,
    center guard, digits 7-12 in the right-hand set, end guard. The check digit
    is not re-verified.

    Raises:
        ValueError: If code is not exactly 13 ASCII digits
    """
    if len(code) != CODE_LENGTH or not code.isdigit() or not code.isascii():
        raise ValueError(f"EAN-13 encoding needs exactly 13 digits, got {code!r}")

    digits = [int(char) for char in code]
    parity = DigitPatterns.PARITY[digits[0]]

    left = "".join(
        DigitPatterns.LEFT_ODD[digit] if parity[index] == ODD_PARITY else DigitPatterns.LEFT_EVEN[digit]
        for index, digit in enumerate(digits[1:7])
    )
    right = "".join(DigitPatterns.RIGHT[digit] for digit in digits[7:])

    return f"{GuardPatterns.START}{left}{GuardPatterns.CENTER}{right}{GuardPatterns.END}"


def barcode_pattern(raw: str) -> Optional[str]:
    """
    Bar pattern for an identifier, or None when it cannot be encoded.

    12-digit inputs get their check digit first; placeholders and codes with a
    wrong check digit are not encoded.
    """
    digits = NON_DIGIT.sub("", raw or "")
    if len(digits) == BODY_LENGTH:
        digits = f"{digits}{calculate_check_digit(digits)}"
    if not is_ean13_valid(digits):
        return None
    return encode_ean13(digits)
