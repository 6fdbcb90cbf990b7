"""
Patterns and value checks shared by the validator rules.
"""

import re
from datetime import datetime
from decimal import Decimal
from numbers import Real
from re import Pattern
from typing import Any

SLUG_PATTERN: Pattern = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*-?")

PHONE_PATTERN: Pattern = re.compile(r"([-_/ ]?[0-9]{2}){4}")

# Anchored at the start only: trailing text after a valid address is accepted.
EMAIL_PATTERN: Pattern = re.compile(
    r'^(([^<>()\[\].,;:\s@"]+(\.[^<>()\[\].,;:\s@"]+)*)|(".+"))@'
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))",
    re.IGNORECASE,
)

NUMERIC_PATTERN: Pattern = re.compile(
    r"\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*"
)

DEFAULT_DATETIME_FORMAT = "Y-m-d H:i:s"

# Date format tokens ("Y-m-d H:i:s") mapped to strptime directives
DATETIME_TOKENS = {
    "d": "%d",
    "j": "%d",
    "m": "%m",
    "n": "%m",
    "Y": "%Y",
    "y": "%y",
    "H": "%H",
    "G": "%H",
    "h": "%I",
    "g": "%I",
    "i": "%M",
    "s": "%S",
    "A": "%p",
    "a": "%p",
    "D": "%a",
    "l": "%A",
    "M": "%b",
    "F": "%B",
}


def is_numeric(value: Any) -> bool:
    """
    Check whether a value is numeric.

    Real numbers pass: ints, floats, Decimals and Fractions (bools do not).
    Strings pass when they hold an optionally signed integer, decimal or
    exponent number, surrounding whitespace allowed. Everything else,
    None included, fails.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, Real | Decimal):
        return True
    if isinstance(value, str):
        return NUMERIC_PATTERN.fullmatch(value) is not None
    return False


def to_number(value: Any) -> Real | Decimal:
    """Convert a value accepted by is_numeric() to a comparable number."""
    if isinstance(value, str):
        return float(value)
    # Ordering comparisons on a Decimal NaN raise InvalidOperation
    if isinstance(value, Decimal) and value.is_nan():
        return float("nan")
    return value


def to_text(value: Any) -> str:
    """Coerce a field value to the string the pattern rules work on."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def translate_datetime_format(fmt: str) -> str:
    """
    Translate a "Y-m-d H:i:s" style format into a strptime format.

    A backslash escapes the next character. Unknown characters match
    themselves literally.
    """
    parts = []
    escaped = False
    for char in fmt:
        if escaped:
            parts.append("%%" if char == "%" else char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in DATETIME_TOKENS:
            parts.append(DATETIME_TOKENS[char])
        elif char == "%":
            parts.append("%%")
        else:
            parts.append(char)
    return "".join(parts)


def parse_datetime(value: str, fmt: str = DEFAULT_DATETIME_FORMAT) -> datetime:
    """
    Strictly parse a value against a "Y-m-d H:i:s" style format.

    Raises:
        ValueError: On any mismatch, leftover characters or out-of-range component
    """
    return datetime.strptime(value, translate_datetime_format(fmt))
