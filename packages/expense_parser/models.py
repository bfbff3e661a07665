"""Data models for ``expense_parser``.

Records are plain frozen dataclasses: the parser builds them fresh for every
call and nothing here knows about storage. ``amount`` is a ``Decimal`` so
quantity × unit-price arithmetic stays exact.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any


class Category(StrEnum):
    """Closed set of spending categories."""

    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    UTILITY = "utility"
    OTHER = "other"

    @property
    def localized_name(self) -> str:
        return _LOCALIZED_NAMES[self]


_LOCALIZED_NAMES: dict[Category, str] = {
    Category.FOOD: "餐飲",
    Category.TRANSPORT: "交通",
    Category.ENTERTAINMENT: "娛樂",
    Category.SHOPPING: "購物",
    Category.UTILITY: "帳單",
    Category.OTHER: "其他",
}

CATEGORY_VALUES: tuple[str, ...] = tuple(c.value for c in Category)


@dataclass(frozen=True, slots=True)
class AmountSignal:
    """Everything the amount extractor found in one clause.

    Attributes
    ----------
    quantity:
        Count from ``x2``/``2x`` notation or a counter-word phrase.
    unit_price:
        Per-unit price from ``each 55``/``55 each``/``每杯55`` style phrases.
    explicit_total:
        Amount flagged by a total keyword (``total 200``, ``共200``).
    bare_amounts:
        Every other currency-marked or plain number, left to right.
    tokens:
        Matched substrings, in match order, for the description normalizer.
    """

    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    explicit_total: Decimal | None = None
    bare_amounts: tuple[Decimal, ...] = ()
    tokens: tuple[str, ...] = ()


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """A single parsed expense.

    ``id`` is an opaque token unique to this record; it carries no meaning
    beyond identity within the caller's list.
    """

    description: str
    amount: Decimal
    date: date
    category: Category
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping (amount as string, ISO date)."""

        return {
            "id": self.id,
            "description": self.description,
            "amount": format(self.amount, "f"),
            "date": self.date.isoformat(),
            "category": self.category.value,
        }


__all__ = [
    "Category",
    "CATEGORY_VALUES",
    "AmountSignal",
    "TransactionRecord",
]
