"""Field value parsers.

A parser turns the raw value held by an input into the value handed to
validators and, on submit, to the submit callback. Parsers never raise:
input that cannot be read as a number becomes NaN, so validators can report
it as a normal validation message.
"""

import math
from typing import Any

NAN = float("nan")


def identity(value: Any) -> Any:
    """Return the value unchanged."""
    return value


def parse_int(value: Any) -> Any:
    """Parse a value as a base-10 integer.

    Strings must hold a whole integer literal (surrounding whitespace allowed);
    anything else, including ``"35.5"`` and None, yields NaN.

    Examples:
        >>> parse_int(" 42 ")
        42
        >>> parse_int("35.5")
        nan
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else NAN
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return NAN
    return NAN


def parse_number(value: Any) -> Any:
    """Parse a value as a number.

    Blank strings parse as 0, None and unreadable input as NaN. Integral
    strings stay ints so ``"35"`` parses to ``35`` and ``"35.5"`` to ``35.5``.

    Examples:
        >>> parse_number("35.5")
        35.5
        >>> parse_number("")
        0
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text, 10)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return NAN
    return NAN


def is_nan(value: Any) -> bool:
    """Whether value is a float NaN."""
    return isinstance(value, float) and math.isnan(value)


__all__ = [
    "identity",
    "parse_int",
    "parse_number",
    "is_nan",
]
