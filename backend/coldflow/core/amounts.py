"""Decimal Amounts — exact parsing and comparison of monetary amount strings.

Invariants:
    - Amounts are decimal.Decimal end to end — binary floats never touch currency math
    - parse_amount accepts plain decimal notation only: optional sign, digits,
      optional fraction; exponents, underscores, NaN and Infinity are rejected
    - requires_manual_review fails closed: an unparseable amount needs review

Design Decisions:
    - Regex gate before Decimal(): Decimal() alone would accept "1_000", "1e3" and "NaN"
"""

import re
from decimal import Decimal, InvalidOperation

from coldflow.core.errors import AmountParseError


_AMOUNT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_amount(raw: str) -> Decimal:
    """Parse a decimal amount string. Raises AmountParseError on malformed input."""
    if not isinstance(raw, str):
        raise AmountParseError(repr(raw))
    text = raw.strip()
    if not _AMOUNT_PATTERN.fullmatch(text):
        raise AmountParseError(raw)
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise AmountParseError(raw) from e


def is_valid_amount(raw: str) -> bool:
    try:
        parse_amount(raw)
    except AmountParseError:
        return False
    return True


def requires_manual_review(amount: str, threshold: Decimal) -> bool:
    """True iff amount >= threshold. Malformed amounts always require review."""
    try:
        value = parse_amount(amount)
    except AmountParseError:
        return True
    return value >= threshold
