from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from expense_parser import Category, ParserConfig, parse_expenses

D = date(2025, 6, 11)


@pytest.mark.parametrize("text", ["", "   ", "\n"])
def test_blank_input_yields_no_records(text: str) -> None:
    assert parse_expenses(text, now=D) == []


@pytest.mark.parametrize("text", ["hello", "55", "the", "!!!", "and", "咖啡", "coffee 55 and and the"])
def test_non_blank_input_yields_at_least_one_record(text: str) -> None:
    records = parse_expenses(text, now=D)
    assert len(records) >= 1
    assert all(r.description for r in records)
    assert all(r.amount >= 0 for r in records)


def test_two_clauses_in_order() -> None:
    records = parse_expenses("coffee 55 and cake 120", now=D)
    assert [(r.description, r.amount) for r in records] == [
        ("coffee", Decimal(55)),
        ("cake", Decimal(120)),
    ]
    assert [r.category for r in records] == [Category.FOOD, Category.FOOD]


def test_total_keyword_precedence() -> None:
    [record] = parse_expenses("bought 3 cups coffee each 55 total 200", now=D)
    assert record.amount == Decimal(200)
    assert record.description == "coffee"


def test_split_unit_price_stays_with_its_item() -> None:
    [record] = parse_expenses("3 cups coffee, each 55", now=D)
    assert record.amount == Decimal(165)
    assert record.description == "coffee"


def test_bare_amount_and_food_category() -> None:
    [record] = parse_expenses("convenience store coffee 55", now=D)
    assert record.amount == Decimal(55)
    assert record.category == Category.FOOD


def test_numeral_quantity_times_unit_price() -> None:
    [english] = parse_expenses("bought three bottles of milk 30 each", now=D)
    [chinese] = parse_expenses("買了三瓶鮮奶每瓶30", now=D)
    assert english.amount == chinese.amount == Decimal(90)
    assert (english.description, chinese.description) == ("milk", "鮮奶")


def test_relative_date_against_reference() -> None:
    [record] = parse_expenses("yesterday bought cake 500", now=D)
    assert record.date == date(2025, 6, 10)


def test_dates_and_categories_are_per_clause() -> None:
    records = parse_expenses("昨天 捷運 30，晚餐 120", now=D)
    assert [(r.description, r.amount, r.date, r.category) for r in records] == [
        ("捷運", Decimal(30), date(2025, 6, 10), Category.TRANSPORT),
        ("晚餐", Decimal(120), D, Category.FOOD),
    ]


def test_categories_default_to_other() -> None:
    records = parse_expenses("MRT 30 and movie 250 and haircut 400", now=D)
    assert [r.category for r in records] == [
        Category.TRANSPORT,
        Category.ENTERTAINMENT,
        Category.OTHER,
    ]


def test_degenerate_clause_is_dropped() -> None:
    records = parse_expenses("coffee 55 and the", now=D)
    assert [r.description for r in records] == ["coffee"]


def test_all_degenerate_input_becomes_one_record() -> None:
    [record] = parse_expenses("  the  ", now=D)
    assert record.description == "the"
    assert record.amount == Decimal(0)
    assert record.category == Category.OTHER
    assert record.date == D


def test_ids_are_fresh_and_opaque() -> None:
    records = parse_expenses("tea 30 and tea 30", now=D)
    assert len({r.id for r in records}) == 2
    again = parse_expenses("tea 30 and tea 30", now=D)
    assert {r.id for r in records}.isdisjoint(r.id for r in again)


def test_reference_instant_uses_configured_zone() -> None:
    cfg = ParserConfig(timezone="Asia/Taipei")
    now = datetime(2025, 6, 10, 20, 0, tzinfo=UTC)
    [record] = parse_expenses("lunch 120", now=now, config=cfg)
    assert record.date == date(2025, 6, 11)


def test_non_str_input_raises() -> None:
    with pytest.raises(TypeError):
        parse_expenses(None)  # type: ignore[arg-type]


def test_to_dict_is_json_friendly() -> None:
    [record] = parse_expenses("taxi $80.5", now=D)
    out = record.to_dict()
    assert out["amount"] == "80.5"
    assert out["date"] == "2025-06-11"
    assert out["category"] == "transport"
    assert out["description"] == "taxi"


def test_hyphenated_day_before_yesterday() -> None:
    [record] = parse_expenses("day-before-yesterday lunch 100", now=D)
    assert (record.description, record.amount, record.date) == (
        "lunch",
        Decimal(100),
        date(2025, 6, 9),
    )


def test_malformed_grouping_still_yields_an_amount() -> None:
    [record] = parse_expenses("coffee 30,40", now=D)
    assert record.amount == Decimal(30)
