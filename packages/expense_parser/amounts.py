"""Amount and quantity extraction for a single clause.

Four pattern families run over every clause and each yields at most one
result (bare amounts yield a list):

1. total keyword (``total 200``, ``共200``)
2. quantity (``x2``/``2x``, then ``3 cups``/``三瓶``/``half cup``)
3. unit price (``each 55``/``55 each``/``每杯55``, then ``單價55`` when a
   quantity exists)
4. bare amounts (every other currency-marked or plain number)

:func:`resolve_amount` then applies the precedence chain::

    total > quantity × unit price > quantity × single bare amount
          > first bare amount > 0

Detection runs on a folded copy of the clause (NFKC plus ``×``/``*`` → ``x``)
so full-width digits and punctuation behave like ASCII. The compiled pattern
set is shared with :mod:`expense_parser.normalizer`, which strips the same
tokens from the description.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from .config import DEFAULT_CONFIG, ParserConfig
from .logging_setup import get_logger
from .matching import Rule, RuleMatch, all_matches, first_match
from .models import AmountSignal
from .numbers import (
    CJK_NUMERAL_PATTERN,
    WORD_NUMERAL_PATTERN,
    number_pattern,
    numeral_value,
    to_decimal,
)
from .vocabulary import (
    COUNTERS_CJK,
    COUNTERS_WORD,
    CURRENCY_PREFIXES,
    CURRENCY_SUFFIXES_CJK,
    CURRENCY_SUFFIXES_WORD,
    LITERAL_DATE_PATTERN,
    PER_UNIT_CJK,
    PER_UNIT_SUFFIX_WORDS,
    PER_UNIT_WORDS,
    TOTAL_WORDS,
    TOTAL_WORDS_CJK,
    UNIT_PRICE_LABELS,
    UNIT_PRICE_LABELS_CJK,
    alternation,
    is_ascii_word,
    mixed_alternation,
    word_alternation,
)

_logger = get_logger("expense_parser.amounts")

_MULTIPLY_SIGNS = str.maketrans({"×": "x", "✕": "x", "*": "x"})
_ZERO = Decimal(0)

LITERAL_DATE_RE = re.compile(LITERAL_DATE_PATTERN)


def fold(text: str) -> str:
    """Return the detection form of ``text`` (NFKC, multiply signs as ``x``)."""

    return unicodedata.normalize("NFKC", text).translate(_MULTIPLY_SIGNS)


# ---------------------------------------------------------------------------
# Pattern set
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AmountPatterns:
    """Compiled patterns for one :class:`ParserConfig`.

    Every pattern exposes the numeric part as the ``num`` group (and the
    counter-word pattern additionally a ``numeral`` group).
    """

    total: re.Pattern[str]
    currency_prefixed: re.Pattern[str]
    currency_suffixed: re.Pattern[str]
    multiplier_prefix: re.Pattern[str]
    multiplier_suffix: re.Pattern[str]
    counter: re.Pattern[str]
    per_unit_prefix: re.Pattern[str]
    per_unit_suffix: re.Pattern[str]
    unit_price_label: re.Pattern[str]
    bare: re.Pattern[str]


@lru_cache(maxsize=16)
def amount_patterns(config: ParserConfig = DEFAULT_CONFIG) -> AmountPatterns:
    """Build (once per config) the shared amount pattern set."""

    t = re.escape(config.thousands_separator)
    d = re.escape(config.decimal_separator)
    num = number_pattern(config)
    simple = rf"[0-9]+(?:{d}[0-9]+)?"
    # A number must not stop before a valid group ("1,200" never reads as "1");
    # a broken group keeps its leading run ("30,40" reads as 30).
    end = rf"(?![0-9]|{d}[0-9]|{t}[0-9]{{3}}(?![0-9]))"
    # A free-standing number is not glued to a word ("iphone15", "v2").
    start = rf"(?<![A-Za-z0-9{t}{d}\-])"

    prefix = (
        r"(?:(?<![A-Za-z])"
        + alternation(p for p in CURRENCY_PREFIXES if is_ascii_word(p))
        + "|"
        + alternation(p for p in CURRENCY_PREFIXES if not is_ascii_word(p))
        + ")"
    )
    suffix = mixed_alternation(CURRENCY_SUFFIXES_WORD, CURRENCY_SUFFIXES_CJK)
    counter = mixed_alternation(COUNTERS_WORD, COUNTERS_CJK)
    counter_word = word_alternation(COUNTERS_WORD)
    total_kw = mixed_alternation(TOTAL_WORDS, TOTAL_WORDS_CJK)
    label_kw = mixed_alternation(UNIT_PRICE_LABELS, UNIT_PRICE_LABELS_CJK)
    per_kw = word_alternation(PER_UNIT_WORDS)
    per_suffix_kw = word_alternation(PER_UNIT_SUFFIX_WORDS)

    flags = re.IGNORECASE

    def c(pattern: str) -> re.Pattern[str]:
        return re.compile(pattern, flags)

    return AmountPatterns(
        total=c(
            rf"{total_kw}\s*(?:[:=]|(?<![A-Za-z])(?:of|is)(?![A-Za-z]))?\s*"
            rf"(?:{prefix}\s*)?(?P<num>{num}){end}(?!\s*{counter})(?:\s*{suffix})?"
        ),
        currency_prefixed=c(rf"{prefix}\s*(?P<num>{num}){end}"),
        currency_suffixed=c(rf"{start}(?P<num>{num}){end}\s*{suffix}"),
        multiplier_prefix=c(rf"(?<![A-Za-z0-9])x\s*(?P<num>{simple}){end}"),
        multiplier_suffix=c(rf"{start}(?P<num>{simple}){end}\s*x(?![A-Za-z])"),
        counter=c(
            rf"(?:{start}(?P<num>{simple}){end}|(?P<numeral>{CJK_NUMERAL_PATTERN}"
            rf"|{WORD_NUMERAL_PATTERN}))\s*{counter}"
        ),
        per_unit_prefix=c(
            rf"(?:{per_kw}(?:\s+{counter_word})?|@|{PER_UNIT_CJK}[^\s0-9]{{0,3}})\s*"
            rf"(?:is\s+)?(?:{prefix}\s*)?(?P<num>{num}){end}(?:\s*{suffix})?"
        ),
        per_unit_suffix=c(
            rf"{start}(?:{prefix}\s*)?(?P<num>{num}){end}\s*(?:{suffix}\s*)?"
            rf"(?:{per_suffix_kw}|/\s*{counter}|(?<![A-Za-z])per\s+{counter_word})"
        ),
        unit_price_label=c(
            rf"(?:{label_kw}|一[^\s0-9]{{0,3}})\s*[:=]?\s*"
            rf"(?:{prefix}\s*)?(?P<num>{num}){end}(?:\s*{suffix})?"
        ),
        bare=c(
            rf"(?:{prefix}\s*|{start})(?P<num>{num}){end}"
            rf"(?:\s*{suffix}|(?!-?[A-Za-z]))"
        ),
    )


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------


def _number_converter(config: ParserConfig):
    def convert(m: re.Match[str]) -> Decimal | None:
        value = to_decimal(m.group("num"), config)
        if value is None:
            _logger.debug("extract_amount:malformed_number token=%r", m.group("num"))
        return value

    return convert


def _quantity_converter(config: ParserConfig):
    def convert(m: re.Match[str]) -> Decimal | None:
        groups = m.groupdict()
        if groups.get("num"):
            value = to_decimal(groups["num"], config)
        else:
            value = numeral_value(groups.get("numeral") or "")
        if value is None:
            _logger.debug("extract_amount:malformed_quantity token=%r", m.group(0))
        return value

    return convert


@dataclass(frozen=True, slots=True)
class AmountRules:
    total: tuple[Rule[Decimal], ...]
    quantity: tuple[Rule[Decimal], ...]
    unit_price: tuple[Rule[Decimal], ...]
    unit_price_secondary: tuple[Rule[Decimal], ...]
    bare: Rule[Decimal]


@lru_cache(maxsize=16)
def amount_rules(config: ParserConfig = DEFAULT_CONFIG) -> AmountRules:
    p = amount_patterns(config)
    as_number = _number_converter(config)
    as_quantity = _quantity_converter(config)
    return AmountRules(
        total=(Rule("total_keyword", p.total, as_number),),
        quantity=(
            Rule("multiplier_prefix", p.multiplier_prefix, as_quantity),
            Rule("multiplier_suffix", p.multiplier_suffix, as_quantity),
            Rule("counter_word", p.counter, as_quantity),
        ),
        unit_price=(
            Rule("per_unit_prefix", p.per_unit_prefix, as_number),
            Rule("per_unit_suffix", p.per_unit_suffix, as_number),
        ),
        unit_price_secondary=(Rule("unit_price_label", p.unit_price_label, as_number),),
        bare=Rule("bare_amount", p.bare, as_number),
    )


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def _overlaps(span: tuple[int, int], others: list[tuple[int, int]]) -> bool:
    a, b = span
    return any(a < y and x < b for x, y in others)


def extract_amount_signal(clause: str, config: ParserConfig = DEFAULT_CONFIG) -> AmountSignal:
    """Run every pattern family over ``clause`` and collect what matched."""

    text = fold(clause)
    rules = amount_rules(config)

    total = first_match(rules.total, text)
    quantity = first_match(rules.quantity, text)
    unit_price = first_match(rules.unit_price, text)
    if unit_price is None and quantity is not None:
        unit_price = first_match(rules.unit_price_secondary, text)

    # Quantity digits and date digits are never amounts.
    excluded = [m.span() for m in LITERAL_DATE_RE.finditer(text)]
    if quantity is not None:
        excluded.append(quantity.span)
    bare = [m for m in all_matches(rules.bare, text) if not _overlaps(m.span, excluded)]

    matched: list[RuleMatch[Decimal]] = [
        m for m in (total, quantity, unit_price) if m is not None
    ]
    tokens = tuple(m.text.strip() for m in matched + bare)

    return AmountSignal(
        quantity=quantity.value if quantity else None,
        unit_price=unit_price.value if unit_price else None,
        explicit_total=total.value if total else None,
        bare_amounts=tuple(m.value for m in bare),
        tokens=tokens,
    )


def resolve_amount(signal: AmountSignal) -> Decimal:
    """Apply the precedence chain to ``signal`` and return a non-negative amount."""

    if signal.explicit_total is not None:
        return signal.explicit_total
    if signal.quantity is not None and signal.unit_price is not None:
        return signal.quantity * signal.unit_price
    if signal.quantity is not None and len(signal.bare_amounts) == 1:
        return signal.quantity * signal.bare_amounts[0]
    if signal.quantity is not None and signal.bare_amounts:
        # Several numbers next to a quantity: the first is taken as the total
        # as-is (not a unit price), unlike the single-number case above.
        return signal.bare_amounts[0]
    if signal.bare_amounts:
        return signal.bare_amounts[0]
    return _ZERO


def extract_amount(clause: str, config: ParserConfig = DEFAULT_CONFIG) -> Decimal:
    """Convenience wrapper: :func:`extract_amount_signal` then :func:`resolve_amount`."""

    return resolve_amount(extract_amount_signal(clause, config))


__all__ = [
    "fold",
    "AmountPatterns",
    "amount_patterns",
    "amount_rules",
    "extract_amount_signal",
    "resolve_amount",
    "extract_amount",
    "LITERAL_DATE_RE",
]
