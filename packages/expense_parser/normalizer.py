"""Turn a clause into a short human-readable label.

Stripping removes, in order:

1. the literal tokens the amount extractor matched for this clause
2. literal dates
3. every amount pattern family (total phrase, currency + number,
   number + currency word, ``x2``/``2x``, unit-price phrase, counter phrase,
   any leftover bare number)
4. ``到X裡``/``到X內`` → ``X``
5. connectors, filler words, relative-day words and last-week phrases
6. punctuation (to spaces), then whitespace is collapsed
7. compound repairs (``儲值 悠遊卡`` → ``儲值悠遊卡``)

and repeats until the text no longer changes, so normalizing a normalized
label is a no-op. :func:`normalize_description` never returns an empty string
for a non-empty clause: it falls back to the clause itself.
"""

from __future__ import annotations

import re

from .amounts import LITERAL_DATE_RE, amount_patterns, extract_amount_signal, fold
from .config import DEFAULT_CONFIG, ParserConfig
from .dates import LAST_WEEK_RE, RELATIVE_DAY_PATTERNS
from .models import AmountSignal
from .segmenter import replace_connectors
from .vocabulary import (
    FILLER_WORDS,
    FILLERS_CJK,
    REPAIRS,
    alternation,
    word_alternation,
)

_MAX_PASSES = 4

_INTO_RE = re.compile(r"到\s*([^\s]{1,8}?)(?:裡|內)")
_FILLER_WORD_RE = re.compile(word_alternation(FILLER_WORDS), re.IGNORECASE)
_FILLER_CJK_RE = re.compile(alternation(FILLERS_CJK))
# Hyphens inside a word ("7-eleven") survive.
_PUNCT_RE = re.compile(r"(?<![A-Za-z0-9])-|-(?![A-Za-z0-9])|[^\w\s-]|_")
_SPACES_RE = re.compile(r"\s+")
_REPAIR_RES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(p), repl) for p, repl in REPAIRS
)


def _token_re(token: str) -> re.Pattern[str]:
    # A token never matches inside a longer word or number ("5" in "iphone15").
    head = r"(?<![A-Za-z0-9])" if token[0].isascii() and token[0].isalnum() else ""
    tail = r"(?![A-Za-z0-9])" if token[-1].isascii() and token[-1].isalnum() else ""
    return re.compile(head + re.escape(token) + tail)


def _strip_once(text: str, tokens: tuple[str, ...], has_quantity: bool, config: ParserConfig) -> str:
    for token in tokens:
        if token:
            text = _token_re(token).sub(" ", text, count=1)

    text = LITERAL_DATE_RE.sub(" ", text)

    p = amount_patterns(config)
    families = [
        p.total,
        p.currency_prefixed,
        p.currency_suffixed,
        p.multiplier_prefix,
        p.multiplier_suffix,
        p.per_unit_prefix,
        p.per_unit_suffix,
    ]
    if has_quantity:
        families.append(p.unit_price_label)
    families += [p.counter, p.bare]
    for pattern in families:
        text = pattern.sub(" ", text)

    text = _INTO_RE.sub(r" \1 ", text)

    text = replace_connectors(text)
    text = _FILLER_WORD_RE.sub(" ", text)
    text = _FILLER_CJK_RE.sub(" ", text)
    for _offset, pattern in RELATIVE_DAY_PATTERNS:
        text = pattern.sub(" ", text)
    text = LAST_WEEK_RE.sub(" ", text)

    text = _PUNCT_RE.sub(" ", text)
    text = _SPACES_RE.sub(" ", text).strip()

    for pattern, repl in _REPAIR_RES:
        text = pattern.sub(repl, text)
    return text


def strip_description(
    clause: str,
    signal: AmountSignal | None = None,
    config: ParserConfig = DEFAULT_CONFIG,
) -> str:
    """Remove amount, quantity, date and filler tokens from ``clause``.

    Parameters
    ----------
    clause:
        One clause as produced by :func:`expense_parser.segmenter.segment`.
    signal:
        The extractor's result for ``clause``. When omitted the extractor
        runs here so the same tokens are removed either way.
    config:
        Separators used to recognize numbers.

    Returns
    -------
    str
        The cleaned label. May be empty (nothing but amounts and fillers).
    """

    if signal is None:
        signal = extract_amount_signal(clause, config)
    has_quantity = signal.quantity is not None

    text = fold(clause)
    for _ in range(_MAX_PASSES):
        stripped = _strip_once(text, signal.tokens, has_quantity, config)
        if stripped == text:
            break
        text = stripped
    return text


def normalize_description(
    clause: str,
    signal: AmountSignal | None = None,
    config: ParserConfig = DEFAULT_CONFIG,
) -> str:
    """Like :func:`strip_description` but falls back to the trimmed clause when empty."""

    return strip_description(clause, signal, config) or clause.strip()


__all__ = ["strip_description", "normalize_description"]
