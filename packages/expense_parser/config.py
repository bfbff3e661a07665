"""Explicit parser configuration.

Date resolution and numeric parsing never consult the host locale or the
process timezone. Everything they depend on is carried by
:class:`ParserConfig` so results are reproducible across machines and in
tests.

Environment variables (read only by :meth:`ParserConfig.from_env`):

- ``EXPENSE_PARSER_TZ``: IANA timezone used to turn "now" into a date.
- ``EXPENSE_PARSER_THOUSANDS_SEP``: single-character thousands separator.
- ``EXPENSE_PARSER_DECIMAL_SEP``: single-character decimal separator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_TZ_ENV = "EXPENSE_PARSER_TZ"
_THOUSANDS_ENV = "EXPENSE_PARSER_THOUSANDS_SEP"
_DECIMAL_ENV = "EXPENSE_PARSER_DECIMAL_SEP"


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Host-independent settings threaded through a parse call.

    Attributes
    ----------
    timezone:
        IANA zone name used when sampling the clock or interpreting a naive
        ``datetime`` passed as ``now``.
    thousands_separator:
        Grouping character accepted inside numbers (``1,200``).
    decimal_separator:
        Fraction separator accepted inside numbers (``12.50``).
    """

    timezone: str = "UTC"
    thousands_separator: str = ","
    decimal_separator: str = "."

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {self.timezone!r}") from exc

        for name in ("thousands_separator", "decimal_separator"):
            val = getattr(self, name)
            if not isinstance(val, str) or len(val) != 1 or val.isdigit() or val.isspace():
                raise ValueError(f"ParserConfig.{name} must be a single non-digit character")
        if self.thousands_separator == self.decimal_separator:
            raise ValueError("thousands and decimal separators must differ")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Build a config from ``EXPENSE_PARSER_*`` variables, using defaults when unset."""

        defaults = cls()
        return cls(
            timezone=(os.getenv(_TZ_ENV) or "").strip() or defaults.timezone,
            thousands_separator=os.getenv(_THOUSANDS_ENV) or defaults.thousands_separator,
            decimal_separator=os.getenv(_DECIMAL_ENV) or defaults.decimal_separator,
        )


DEFAULT_CONFIG = ParserConfig()

__all__ = ["ParserConfig", "DEFAULT_CONFIG"]
