from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

"""Cell value coercion shared by the normalizer and the exporters.

Cell values arrive as str, int, float or "" (blank). Two numeric conversions
coexist on purpose:

- parse_float_prefix(): lenient, reads the longest numeric prefix ("12abc" -> 12).
  Used only to decide whether a quantity cell is valid.
- to_number(): strict, the whole string must be a numeric literal ("12abc" -> NaN).
  Used for the stored quantity.

Spreadsheet paste targets expect numbers rendered without a trailing ".0", so
format_number()/to_text() render integral floats as integers.
"""

__all__ = [
    "is_truthy",
    "is_number",
    "parse_float_prefix",
    "to_number",
    "to_text",
    "format_number",
]

_NUMERIC_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def is_number(value: Any) -> bool:
    """Return True for int/float cell values (bool excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Truthiness of a raw cell: None, "", 0, NaN and False are falsy.

    Whitespace-only strings are truthy.
    """
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def parse_float_prefix(value: Any) -> float | None:
    """Parse the leading numeric prefix of a value, None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    text = to_text(value).lstrip()
    m = _NUMERIC_RE.match(text)
    if m is None:
        return None
    literal = m.group(0)
    if literal.lstrip("+-") == "Infinity":
        return -math.inf if literal.startswith("-") else math.inf
    return float(literal)


def to_number(value: Any) -> int | float:
    """Strict numeric conversion of a cell value.

    Numbers pass through unchanged. Strings are stripped; an empty string is 0,
    hex/octal/binary literals are accepted, anything that is not a complete
    numeric literal is NaN.
    """
    if isinstance(value, bool):
        return int(value)
    if is_number(value):
        return value
    if value is None:
        return math.nan
    text = str(value).strip()
    if text == "":
        return 0
    if _RADIX_RE.fullmatch(text):
        return float(int(text, 0))
    if _NUMERIC_RE.fullmatch(text) is None:
        return math.nan
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def format_number(value: int | float) -> str:
    """Render a quantity the way spreadsheet paste targets expect it.

    Shortest round-trip digits, plain notation for decimal exponents in
    [-6, 21) and exponent notation outside it:

    >>> [format_number(v) for v in (8.0, 0.00001, 1e-7, 1.2345678901234568e20, 1e21)]
    ['8', '0.00001', '1e-7', '123456789012345680000', '1e+21']
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    # n: 小数点の位置 (value = 0.digits * 10**n)
    n = exponent + k
    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return f"-{text}" if sign else text


def to_text(value: Any) -> str:
    """Text form of a cell value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or is_number(value):
        return format_number(value)
    return str(value)
