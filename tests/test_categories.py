from __future__ import annotations

import pytest

from expense_parser.categories import classify
from expense_parser.models import Category


@pytest.mark.parametrize(
    "clause,expected",
    [
        ("MRT 30", Category.TRANSPORT),
        ("bus 15", Category.TRANSPORT),
        ("two buses home 30", Category.TRANSPORT),
        ("movie 300", Category.ENTERTAINMENT),
        ("coffee 55", Category.FOOD),
        ("convenience store 80", Category.FOOD),
        ("Netflix 390", Category.ENTERTAINMENT),
        ("shoes 1,990", Category.SHOPPING),
        ("electricity 1200", Category.UTILITY),
        ("捷運 30", Category.TRANSPORT),
        ("加值悠遊卡 500", Category.TRANSPORT),
        ("便當 100", Category.FOOD),
        ("蝦皮 450", Category.SHOPPING),
        ("水費 300", Category.UTILITY),
    ],
)
def test_keyword_hits(clause: str, expected: Category) -> None:
    assert classify(clause) == expected


def test_no_keyword_is_other() -> None:
    assert classify("random stuff 50") == Category.OTHER


@pytest.mark.parametrize(
    "clause,expected",
    [
        ("pancake 80", Category.FOOD),
        ("hamburger 100", Category.FOOD),
        ("KARAOKEBOX 600", Category.ENTERTAINMENT),
        # "bus" is a substring of "business"
        ("business class", Category.TRANSPORT),
    ],
)
def test_keywords_match_as_substrings(clause: str, expected: Category) -> None:
    assert classify(clause) == expected


def test_declared_order_breaks_ties() -> None:
    # food is scanned before transport
    assert classify("coffee at the bus station") == Category.FOOD


def test_localized_names() -> None:
    assert Category.FOOD.localized_name == "餐飲"
    assert Category.UTILITY.localized_name == "帳單"
    assert Category.OTHER.localized_name == "其他"
