from __future__ import annotations

from decimal import Decimal

import pytest

from expense_parser.amounts import extract_amount, extract_amount_signal, resolve_amount
from expense_parser.config import ParserConfig
from expense_parser.models import AmountSignal


def test_total_keyword_beats_quantity_times_unit_price() -> None:
    assert extract_amount("bought 3 cups coffee each 55 total 200") == Decimal(200)


def test_quantity_times_per_unit_prefix() -> None:
    signal = extract_amount_signal("3 cups coffee, each 55")
    assert signal.quantity == Decimal(3)
    assert signal.unit_price == Decimal(55)
    assert resolve_amount(signal) == Decimal(165)


def test_bare_amount_fallback() -> None:
    assert extract_amount("convenience store coffee 55") == Decimal(55)


def test_english_numeral_quantity_with_suffix_unit_price() -> None:
    signal = extract_amount_signal("bought three bottles of milk 30 each")
    assert signal.quantity == Decimal(3)
    assert signal.unit_price == Decimal(30)
    assert resolve_amount(signal) == Decimal(90)


def test_cjk_numeral_quantity_with_per_unit_price() -> None:
    signal = extract_amount_signal("買了三瓶鮮奶每瓶30")
    assert signal.quantity == Decimal(3)
    assert resolve_amount(signal) == Decimal(90)


def test_cjk_total_keyword() -> None:
    assert extract_amount("咖啡跟蛋糕共200元") == Decimal(200)


def test_total_word_before_a_counter_is_a_quantity() -> None:
    signal = extract_amount_signal("共3杯 120元")
    assert signal.explicit_total is None
    assert signal.quantity == Decimal(3)


@pytest.mark.parametrize(
    "clause,expected",
    [
        ("coffee x2 55", Decimal(110)),
        ("coffee 2x 55", Decimal(110)),
        ("coffee ×2 55", Decimal(110)),
        ("half cup juice 80", Decimal(40)),
        ("tea 30 per cup, 4 cups", Decimal(120)),
    ],
)
def test_quantity_forms(clause: str, expected: Decimal) -> None:
    assert extract_amount(clause) == expected


def test_unit_price_label_needs_a_quantity() -> None:
    assert extract_amount("蘋果3顆 單價25") == Decimal(75)
    # Without a quantity, the label number is just the first bare amount.
    signal = extract_amount_signal("單價25")
    assert signal.unit_price is None
    assert signal.bare_amounts == (Decimal(25),)


def test_quantity_with_several_bare_amounts_takes_first_as_is() -> None:
    # Rule (d): the first bare amount is used unmultiplied.
    assert extract_amount("2 cups coffee 55 cake 120") == Decimal(55)


def test_currency_markers_and_grouping() -> None:
    assert extract_amount("NT$1,200 dinner") == Decimal(1200)
    assert extract_amount("lunch 120元") == Decimal(120)
    assert extract_amount("taxi $80.5") == Decimal("80.5")
    assert extract_amount("ticket 5 dollars") == Decimal(5)


def test_numbers_glued_to_words_and_dates_are_not_amounts() -> None:
    assert extract_amount("iphone15 case 300") == Decimal(300)
    assert extract_amount("2025-06-01 lunch 120") == Decimal(120)
    assert extract_amount("7-eleven") == Decimal(0)


def test_full_width_digits_are_folded() -> None:
    assert extract_amount("咖啡５５元") == Decimal(55)


def test_no_amount_is_zero() -> None:
    assert extract_amount("no numbers here") == Decimal(0)


def test_configured_separators() -> None:
    cfg = ParserConfig(thousands_separator=".", decimal_separator=",")
    assert extract_amount("lunch 1.200,50", cfg) == Decimal("1200.50")


def test_tokens_cover_every_matched_family() -> None:
    signal = extract_amount_signal("bought 3 cups coffee each 55 total 200")
    assert signal.tokens[:3] == ("total 200", "3 cups", "each 55")
    assert signal.bare_amounts == (Decimal(55), Decimal(200))


def test_resolve_amount_precedence_table() -> None:
    assert resolve_amount(AmountSignal()) == Decimal(0)
    assert resolve_amount(AmountSignal(bare_amounts=(Decimal(7), Decimal(9)))) == Decimal(7)
    assert resolve_amount(
        AmountSignal(quantity=Decimal(2), bare_amounts=(Decimal(30),))
    ) == Decimal(60)
    assert resolve_amount(
        AmountSignal(quantity=Decimal(2), unit_price=Decimal(5), explicit_total=Decimal(1))
    ) == Decimal(1)


@pytest.mark.parametrize(
    "clause,expected",
    [
        ("coffee 30,40", Decimal(30)),
        ("tea 12,34", Decimal(12)),
        ("cake 1,200 and more", Decimal(1200)),
    ],
)
def test_broken_grouping_keeps_the_leading_digits(clause: str, expected: Decimal) -> None:
    assert extract_amount(clause) == expected
