from __future__ import annotations

import pytest

from expense_parser.amounts import extract_amount_signal
from expense_parser.normalizer import normalize_description, strip_description


@pytest.mark.parametrize(
    "clause,expected",
    [
        ("bought 3 cups coffee each 55 total 200", "coffee"),
        ("3 cups coffee, each 55", "coffee"),
        ("yesterday bought cake 500", "cake"),
        ("bought three bottles of milk 30 each", "milk"),
        ("convenience store coffee 55", "convenience store coffee"),
        ("買了三瓶鮮奶每瓶30", "鮮奶"),
        ("咖啡55", "咖啡"),
        ("NT$1,200 dinner", "dinner"),
        ("last week monday lunch 120", "lunch"),
        ("2025-06-01 taxi $250", "taxi"),
        ("7-eleven coffee 60", "7-eleven coffee"),
    ],
)
def test_strips_amounts_quantities_dates_and_fillers(clause: str, expected: str) -> None:
    assert normalize_description(clause) == expected


def test_split_compound_is_repaired() -> None:
    assert normalize_description("儲值了悠遊卡500") == "儲值悠遊卡"


def test_into_phrase_keeps_the_place() -> None:
    assert normalize_description("到超商裡買咖啡 55") == "超商 咖啡"


def test_uses_the_given_signal_tokens() -> None:
    clause = "coffee x2 55"
    assert strip_description(clause, extract_amount_signal(clause)) == "coffee"


def test_empty_strip_falls_back_to_clause() -> None:
    assert strip_description("55") == ""
    assert normalize_description("55") == "55"
    assert normalize_description("  $120  ") == "$120"


@pytest.mark.parametrize(
    "clause",
    [
        "bought 3 cups coffee each 55 total 200",
        "買了三瓶鮮奶每瓶30",
        "儲值了悠遊卡500",
        "7-eleven coffee 60",
        "55",
        "the",
        "!!!",
        "到超商裡買咖啡 55",
    ],
)
def test_normalization_is_idempotent_and_never_empty(clause: str) -> None:
    once = normalize_description(clause)
    assert once
    assert normalize_description(once) == once
