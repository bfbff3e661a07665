"""Split a free-form phrase into clauses, one per candidate expense.

Connector words ("and", "plus", 和, 還有, …) are first rewritten to a single
separator, then the text is split on that separator and on sentence
punctuation. A fragment that only carries a per-unit price or a total for the
item before it ("…, each 55", "…，共200") is glued back onto that item.
"""

from __future__ import annotations

import re

from .logging_setup import get_logger
from .vocabulary import (
    CONNECTOR_PLUS_CJK,
    CONNECTOR_PLUS_KEEP_BEFORE,
    CONNECTOR_WORDS,
    CONNECTORS_CJK,
    CONTINUATION_CJK,
    CONTINUATION_WORDS,
    SEPARATOR,
    SEPARATOR_CHARS,
    alternation,
    word_alternation,
)

_logger = get_logger("expense_parser.segmenter")

_CONNECTOR_RE = re.compile(
    word_alternation(CONNECTOR_WORDS)
    + "|"
    + alternation(CONNECTORS_CJK)
    + "|"
    + re.escape(CONNECTOR_PLUS_CJK)
    + "(?!"
    + alternation(CONNECTOR_PLUS_KEEP_BEFORE)
    + ")",
    re.IGNORECASE,
)

# A comma between digits is a thousands separator ("1,200"), not a break.
_SPLIT_RE = re.compile(
    "[" + re.escape(SEPARATOR_CHARS) + "]" + r"|(?<![0-9]),|,(?![0-9])"
)

_CONTINUATION_RE = re.compile(
    r"^(?:" + word_alternation(CONTINUATION_WORDS) + "|@|" + alternation(CONTINUATION_CJK) + ")",
    re.IGNORECASE,
)


def replace_connectors(text: str) -> str:
    """Rewrite every connector word to the canonical separator."""

    return _CONNECTOR_RE.sub(SEPARATOR, text)


def segment(text: str) -> list[str]:
    """Return the clauses of ``text`` in order of first occurrence.

    Blank input yields ``[]``; any other input yields at least one clause.
    When splitting finds at most one piece, the whole trimmed input is the
    single clause.
    """

    trimmed = text.strip()
    if not trimmed:
        return []

    parts = [p.strip() for p in _SPLIT_RE.split(replace_connectors(trimmed))]
    clauses: list[str] = []
    for part in parts:
        if not part:
            continue
        if clauses and _CONTINUATION_RE.match(part):
            clauses[-1] = f"{clauses[-1]} {part}"
            continue
        clauses.append(part)

    if len(clauses) <= 1:
        return [trimmed]

    _logger.debug("segment:split clauses=%d", len(clauses))
    return clauses


__all__ = ["segment", "replace_connectors"]
