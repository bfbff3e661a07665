"""Assemble transaction records from a free-form phrase.

:func:`parse_expenses` is the rule-based parser of record. It never performs
I/O, never raises for ``str`` input and always returns at least one record
for non-blank text.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from .amounts import extract_amount_signal, resolve_amount
from .categories import classify
from .config import DEFAULT_CONFIG, ParserConfig
from .dates import reference_date, resolve_date
from .logging_setup import get_logger
from .models import Category, TransactionRecord
from .normalizer import strip_description
from .segmenter import segment

_logger = get_logger("expense_parser.parser")


def _build_record(clause: str, today: date, config: ParserConfig) -> tuple[TransactionRecord, str]:
    signal = extract_amount_signal(clause, config)
    stripped = strip_description(clause, signal, config)
    record = TransactionRecord(
        description=stripped or clause.strip(),
        amount=resolve_amount(signal),
        date=resolve_date(clause, today),
        category=classify(clause),
    )
    return record, stripped


def parse_expenses(
    text: str,
    *,
    now: datetime | date | None = None,
    config: ParserConfig | None = None,
) -> list[TransactionRecord]:
    """Parse ``text`` into one record per clause.

    Parameters
    ----------
    text:
        Free-form phrase, possibly mixing English and Traditional Chinese and
        describing several purchases.
    now:
        Reference instant for relative dates. Sampled once from the clock in
        ``config.timezone`` when omitted.
    config:
        Timezone and numeric separators; defaults to :data:`DEFAULT_CONFIG`.

    Returns
    -------
    list[TransactionRecord]
        Records in clause order. Empty only for blank input.

    Raises
    ------
    TypeError
        If ``text`` is not a ``str``.
    """

    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    config = config or DEFAULT_CONFIG
    today = reference_date(now, config)

    clauses = segment(text)
    records: list[TransactionRecord] = []
    for clause in clauses:
        record, stripped = _build_record(clause, today, config)
        if not stripped and record.amount == 0:
            _logger.debug("parse_expenses:drop_degenerate clause=%r", clause)
            continue
        records.append(record)

    if not records and clauses:
        whole = text.strip()
        records.append(
            TransactionRecord(
                description=whole,
                amount=Decimal(0),
                date=resolve_date(whole, today),
                category=Category.OTHER,
            )
        )

    _logger.debug("parse_expenses:done clauses=%d records=%d", len(clauses), len(records))
    return records


__all__ = ["parse_expenses"]
