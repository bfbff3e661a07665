from __future__ import annotations

import pytest

from expense_parser.config import DEFAULT_CONFIG, ParserConfig


def test_defaults() -> None:
    assert DEFAULT_CONFIG == ParserConfig(
        timezone="UTC", thousands_separator=",", decimal_separator="."
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"timezone": "Nowhere/Special"},
        {"thousands_separator": "."},
        {"decimal_separator": "5"},
        {"thousands_separator": ",,"},
        {"thousands_separator": " "},
    ],
)
def test_invalid_settings_raise_value_error(kwargs: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        ParserConfig(**kwargs)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_PARSER_TZ", "Asia/Taipei")
    monkeypatch.setenv("EXPENSE_PARSER_THOUSANDS_SEP", ".")
    monkeypatch.setenv("EXPENSE_PARSER_DECIMAL_SEP", ",")
    cfg = ParserConfig.from_env()
    assert (cfg.timezone, cfg.thousands_separator, cfg.decimal_separator) == (
        "Asia/Taipei",
        ".",
        ",",
    )
    assert cfg.tzinfo.key == "Asia/Taipei"


def test_from_env_without_variables_is_default() -> None:
    assert ParserConfig.from_env() == DEFAULT_CONFIG
