"""Public interface for the ``expense_parser`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import (
    analyze_expense,
    classify,
    extract_amount,
    extract_amount_signal,
    normalize_description,
    parse_expenses,
    reference_date,
    resolve_amount,
    resolve_date,
    segment,
    strip_description,
)
from .config import DEFAULT_CONFIG, ParserConfig
from .extraction import MachineExtractor, OpenAIExtractor
from .models import AmountSignal, Category, TransactionRecord

__all__ = [
    # API
    "parse_expenses",
    "analyze_expense",
    "segment",
    "extract_amount_signal",
    "resolve_amount",
    "extract_amount",
    "resolve_date",
    "reference_date",
    "classify",
    "strip_description",
    "normalize_description",
    # Collaborators
    "MachineExtractor",
    "OpenAIExtractor",
    # Models / types / config
    "TransactionRecord",
    "AmountSignal",
    "Category",
    "ParserConfig",
    "DEFAULT_CONFIG",
]
