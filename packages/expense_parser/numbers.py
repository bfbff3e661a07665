"""Numeric token parsing.

- :func:`number_pattern` builds the number regex for a config's separators.
- :func:`to_decimal` turns a matched token into a ``Decimal`` (or ``None``
  for a malformed token, which callers skip).
- :func:`numeral_value` converts CJK and English numerals covering 0–99,
  plus "half"/半 as 0.5.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from .config import ParserConfig
from .vocabulary import (
    CJK_DIGITS,
    CJK_HALF,
    CJK_TEN,
    WORD_HALF,
    WORD_TENS,
    WORD_UNITS,
    alternation,
)

_HALF = Decimal("0.5")


@lru_cache(maxsize=16)
def number_pattern(config: ParserConfig) -> str:
    """Return a non-capturing regex for one number with optional grouping/fraction."""

    t = re.escape(config.thousands_separator)
    d = re.escape(config.decimal_separator)
    return rf"(?:[0-9]{{1,3}}(?:{t}[0-9]{{3}})+|[0-9]+)(?:{d}[0-9]+)?"


def to_decimal(token: str, config: ParserConfig) -> Decimal | None:
    """Parse ``token`` after stripping grouping separators; ``None`` when malformed."""

    s = token.strip().replace(config.thousands_separator, "")
    if config.decimal_separator != ".":
        s = s.replace(config.decimal_separator, ".")
    if not s:
        return None
    try:
        value = Decimal(s)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


# ---------------------------------------------------------------------------
# Numerals
# ---------------------------------------------------------------------------

CJK_NUMERAL_PATTERN = "[" + "".join(CJK_DIGITS) + CJK_TEN + CJK_HALF + "]+"

_UNITS_ALT = alternation(WORD_UNITS)
_TENS_ALT = alternation(WORD_TENS)
WORD_NUMERAL_PATTERN = (
    r"(?<![A-Za-z])(?:"
    + _TENS_ALT
    + r"(?:[-\s]+"
    + alternation(k for k, v in WORD_UNITS.items() if 1 <= v <= 9)
    + r")?|"
    + _UNITS_ALT
    + "|"
    + WORD_HALF
    + r")(?![A-Za-z])"
)


def cjk_numeral_value(s: str) -> Decimal | None:
    """Convert a CJK numeral in 0–99 (or 半) to ``Decimal``.

    Accepted shapes: ``三``, ``兩``, ``十``, ``十二``, ``二十``, ``二十三``.
    Anything else (``三三``, ``十十``) is malformed and yields ``None``.
    """

    s = s.strip()
    if not s:
        return None
    if s == CJK_HALF:
        return _HALF
    if CJK_TEN not in s:
        if len(s) == 1 and s in CJK_DIGITS:
            return Decimal(CJK_DIGITS[s])
        return None

    head, _, tail = s.partition(CJK_TEN)
    if CJK_TEN in tail or len(head) > 1 or len(tail) > 1:
        return None
    tens = CJK_DIGITS.get(head) if head else 1
    ones = CJK_DIGITS.get(tail) if tail else 0
    if tens is None or ones is None or tens == 0:
        return None
    return Decimal(tens * 10 + ones)


def word_numeral_value(s: str) -> Decimal | None:
    """Convert an English numeral in 0–99 (or "half") to ``Decimal``."""

    words = [w for w in re.split(r"[-\s]+", s.strip().lower()) if w]
    if not words:
        return None
    if words == [WORD_HALF]:
        return _HALF
    if len(words) == 1:
        w = words[0]
        if w in WORD_UNITS:
            return Decimal(WORD_UNITS[w])
        if w in WORD_TENS:
            return Decimal(WORD_TENS[w])
        return None
    if len(words) == 2 and words[0] in WORD_TENS:
        ones = WORD_UNITS.get(words[1])
        if ones is not None and 1 <= ones <= 9:
            return Decimal(WORD_TENS[words[0]] + ones)
    return None


def numeral_value(s: str) -> Decimal | None:
    """Return the value of a CJK or English numeral, or ``None``."""

    if s.isascii():
        return word_numeral_value(s)
    return cjk_numeral_value(s)


__all__ = [
    "number_pattern",
    "to_decimal",
    "CJK_NUMERAL_PATTERN",
    "WORD_NUMERAL_PATTERN",
    "cjk_numeral_value",
    "word_numeral_value",
    "numeral_value",
]
