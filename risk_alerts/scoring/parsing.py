"""
Lenient numeric coercion for untrusted clinical values.

Strings are read by their numeric prefix, so ``" 120mmHg"`` reads as 120 and
``"101.2F"`` as 101.2. A string with no numeric prefix yields ``None``.
Booleans are never treated as numbers.
"""

from __future__ import annotations

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_DECIMAL_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_int_prefix(text: str) -> int | float | None:
    """
    Read the leading integer of ``text``.

    Digit runs too long for int() overflow to infinity, the same as a float.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    digits = match.group(1)
    try:
        return int(digits)
    except ValueError:
        return float(digits)


def parse_decimal_prefix(text: str) -> float | None:
    match = _DECIMAL_PREFIX.match(text)
    if match is None:
        return None
    return float(match.group(1))


def coerce_decimal(value: Any) -> float | None:
    """Numbers pass through, strings are prefix-parsed, anything else is None."""
    if isinstance(value, str):
        return parse_decimal_prefix(value)
    if is_number(value) and not math.isnan(value):
        return value
    return None


def coerce_integer(value: Any) -> int | float | None:
    """
    Like :func:`coerce_decimal` but strings are read as integers.

    Numeric inputs are returned unchanged (a float age stays a float).
    """
    if isinstance(value, str):
        return parse_int_prefix(value)
    if is_number(value) and not math.isnan(value):
        return value
    return None


def parse_positive_int(text: str) -> int | float | None:
    parsed = parse_int_prefix(text.strip())
    if parsed is None or parsed <= 0:
        return None
    return parsed
