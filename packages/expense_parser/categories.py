"""Keyword-table category classification.

Tables are scanned in declared order (food, transport, entertainment,
shopping, utility); the first category with any keyword hit wins and
``other`` is the default. Every keyword is a case-insensitive substring, so
"cake" classifies "pancake" as food.
"""

from __future__ import annotations

import re

from .amounts import fold
from .matching import Rule, first_match
from .models import Category
from .vocabulary import CATEGORY_KEYWORDS, alternation


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(alternation(keywords), re.IGNORECASE)


CATEGORY_RULES: tuple[Rule[Category], ...] = tuple(
    Rule(category.value, _keyword_pattern(keywords), lambda _m, c=category: c)
    for category, keywords in CATEGORY_KEYWORDS
)


def classify(clause: str) -> Category:
    """Return the category for ``clause`` (``Category.OTHER`` when nothing hits)."""

    hit = first_match(CATEGORY_RULES, fold(clause))
    return hit.value if hit is not None else Category.OTHER


__all__ = ["classify", "CATEGORY_RULES"]
