"""Ordered pattern rules evaluated by a shared "first match wins" combinator.

Each extraction stage is written as a list of :class:`Rule` objects instead of
an inline ``if``/``elif`` chain. A rule pairs a compiled pattern with a
converter that turns a regex match into a value; the converter may return
``None`` to reject a match (e.g., a malformed numeral), in which case the scan
continues with the rule's next match and then with the next rule.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Rule(Generic[T]):
    """A named pattern plus a match → value converter."""

    name: str
    pattern: re.Pattern[str]
    convert: Callable[[re.Match[str]], T | None]


@dataclass(frozen=True, slots=True)
class RuleMatch(Generic[T]):
    """The winning rule, its accepted value and the match that produced it."""

    rule: str
    value: T
    match: re.Match[str]

    @property
    def text(self) -> str:
        return self.match.group(0)

    @property
    def span(self) -> tuple[int, int]:
        return self.match.span()


def first_match(rules: Iterable[Rule[T]], text: str) -> RuleMatch[T] | None:
    """Return the first accepted match, trying rules in declared order.

    Within a rule, matches are visited left to right, so the leftmost
    convertible match of the earliest matching rule wins.
    """

    for rule in rules:
        for m in rule.pattern.finditer(text):
            value = rule.convert(m)
            if value is not None:
                return RuleMatch(rule=rule.name, value=value, match=m)
    return None


def all_matches(rule: Rule[T], text: str) -> list[RuleMatch[T]]:
    """Return every accepted match of ``rule`` in left-to-right order."""

    out: list[RuleMatch[T]] = []
    for m in rule.pattern.finditer(text):
        value = rule.convert(m)
        if value is not None:
            out.append(RuleMatch(rule=rule.name, value=value, match=m))
    return out


__all__ = ["Rule", "RuleMatch", "first_match", "all_matches"]
