"""
Normalization of engagement counts as they appear on the page.

Handles comma-grouped literals ("817,242"), compact literals with a
magnitude suffix ("1.2K", "2.5M", "3B") and plain integers.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

MULTIPLIERS = {
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}

_NUMERAL_PATTERN = re.compile(r"(\d+(?:\.\d+)?)([KMB])?", re.IGNORECASE)

# A count as it appears next to a metric keyword: grouped digits with an
# optional fraction and suffix. The lookbehind keeps us off the tail of a
# longer number.
COUNT_PATTERN = r"(?<![\d.,])(\d{1,3}(?:[,.]\d{3})*(?:\.\d+)?[KMB]?)"
LARGE_COUNT_PATTERN = r"(?<![\d.,])(\d{1,3}(?:,\d{3})+)"


def parse_count(value: str | None) -> int:
    """
    Convert a displayed count into an integer.

    Whitespace and thousands separators are stripped, an optional K/M/B
    suffix is applied and the result is rounded half-up. Empty or
    malformed input yields 0.

    Examples:
        >>> parse_count("1.2K")
        1200

        >>> parse_count("817,242")
        817242

        >>> parse_count("")
        0
    """
    if not value:
        return 0

    cleaned = re.sub(r"[,\s]", "", value)
    match = _NUMERAL_PATTERN.search(cleaned)
    if not match:
        return 0

    numeral, suffix = match.groups()
    number = Decimal(numeral)

    if suffix:
        number *= MULTIPLIERS[suffix.upper()]

    return int(number.quantize(Decimal(1), rounding=ROUND_HALF_UP))
