"""Public API interfaces for the ``expense_parser`` package.

This module serves as a stable import surface. The rule-based parser lives in
``expense_parser.parser``; the optional machine-learned path and its
fallback orchestration live in ``expense_parser.extraction``. Stage-level
helpers are re-exported for callers that want a single step.
"""

from __future__ import annotations

from .amounts import extract_amount, extract_amount_signal, resolve_amount  # noqa: F401
from .categories import classify  # noqa: F401
from .dates import reference_date, resolve_date  # noqa: F401
from .extraction import MachineExtractor, OpenAIExtractor, analyze_expense  # noqa: F401
from .normalizer import normalize_description, strip_description  # noqa: F401
from .parser import parse_expenses  # noqa: F401  (re-export)
from .segmenter import segment  # noqa: F401
