"""Resolve the calendar date a clause refers to.

Resolution is stateless: the caller samples the clock once per parse call
(see :func:`reference_date`) and passes the resulting ``today`` to
:func:`resolve_date` for every clause.

Priority, first hit wins:

1. a literal ``YYYY-MM-DD`` / ``YYYY/M/D`` date that exists on the calendar
2. a relative-day word (``day before yesterday``/前天, ``yesterday``/昨天,
   ``today``/今天)
3. a weekday of last week (``last monday``, ``last week fri``, 上週一, 上個禮拜天)
4. ``today``
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from .amounts import LITERAL_DATE_RE, fold
from .config import DEFAULT_CONFIG, ParserConfig
from .matching import Rule, first_match
from .vocabulary import (
    RELATIVE_DAYS,
    WEEK_UNITS_CJK,
    WEEKDAYS,
    WEEKDAYS_CJK,
    alternation,
    word_alternation,
)

# Weekday numbering is Sunday=1 … Saturday=7; weeks start on Monday.
_MONDAY = 2


def _literal(m: re.Match[str]) -> date | None:
    try:
        return date(int(m.group("year")), int(m.group("month")), int(m.group("day")))
    except ValueError:
        return None


def last_week_day(today: date, weekday: int) -> date:
    """Return ``weekday`` (Sunday=1 … Saturday=7) in the week before ``today``'s."""

    this_week_start = today - timedelta(days=today.weekday())
    return this_week_start - timedelta(days=7) + timedelta(days=(weekday - _MONDAY) % 7)


LAST_WEEK_RE = re.compile(
    r"(?<![A-Za-z])last\s+(?:week\s+)?(?P<en>"
    + alternation(WEEKDAYS)
    + r")(?![A-Za-z])"
    + r"|上[一個]?"
    + alternation(WEEK_UNITS_CJK)
    + "(?P<cjk>["
    + "".join(WEEKDAYS_CJK)
    + "])",
    re.IGNORECASE,
)

RELATIVE_DAY_PATTERNS: tuple[tuple[int, re.Pattern[str]], ...] = tuple(
    (
        offset,
        re.compile(word_alternation(english) + "|" + alternation(cjk), re.IGNORECASE),
    )
    for offset, english, cjk in RELATIVE_DAYS
)


def _date_rules(today: date) -> list[Rule[date]]:
    rules: list[Rule[date]] = [Rule("literal", LITERAL_DATE_RE, _literal)]
    for offset, pattern in RELATIVE_DAY_PATTERNS:
        rules.append(
            Rule(f"relative{offset:+d}", pattern, lambda _m, o=offset: today + timedelta(days=o))
        )

    def weekday(m: re.Match[str]) -> date:
        if m.group("en"):
            return last_week_day(today, WEEKDAYS[m.group("en").lower()])
        return last_week_day(today, WEEKDAYS_CJK[m.group("cjk")])

    rules.append(Rule("last_week", LAST_WEEK_RE, weekday))
    return rules


def resolve_date(clause: str, today: date) -> date:
    """Return the date ``clause`` refers to, defaulting to ``today``."""

    hit = first_match(_date_rules(today), fold(clause))
    return hit.value if hit is not None else today


def reference_date(
    now: datetime | date | None = None, config: ParserConfig = DEFAULT_CONFIG
) -> date:
    """Reduce ``now`` (or the current clock) to a date in the configured zone.

    - ``None``: sample the clock in ``config.timezone``.
    - aware ``datetime``: converted to ``config.timezone`` first.
    - naive ``datetime``: taken as already local to ``config.timezone``.
    - ``date``: used as-is.
    """

    if now is None:
        return datetime.now(config.tzinfo).date()
    if isinstance(now, datetime):
        if now.tzinfo is None:
            return now.date()
        return now.astimezone(config.tzinfo).date()
    return now


__all__ = [
    "resolve_date",
    "reference_date",
    "last_week_day",
    "LAST_WEEK_RE",
    "RELATIVE_DAY_PATTERNS",
]
