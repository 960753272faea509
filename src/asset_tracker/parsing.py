"""Currency normalization and the validity gate for scraped values."""

from __future__ import annotations

import math
import re

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
# Longest leading decimal literal, e.g. "1.2.3" -> "1.2"
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_currency(text: str) -> float:
    """Convert a display price such as "$12,345.67" to a float.

    Every character other than digits and "." is dropped, then the leading
    decimal literal is parsed. Returns NaN when nothing numeric remains.
    """
    cleaned = _NON_NUMERIC_RE.sub("", text)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return math.nan
    return float(match.group(0))


def is_valid(value: object) -> bool:
    """True unless value is None, the empty string, or NaN."""
    if value is None or value == "":
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return True
