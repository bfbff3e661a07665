"""Static word tables shared by detection and stripping.

Every stage that recognizes a token (amount extraction, date resolution,
classification) and the description normalizer that later removes it read
from the tables below, so the two sides always agree on what counts as a
quantity token, a currency marker or a filler word.

Tables hold both Traditional Chinese and English entries. Multi-character
alternatives are listed longest first where one is a prefix of another.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import Category

# ---------------------------------------------------------------------------
# Currency markers
# ---------------------------------------------------------------------------

# Before the number: "NT$120", "$80", "USD 5"
CURRENCY_PREFIXES: tuple[str, ...] = ("NT$", "US$", "NTD", "TWD", "USD", "$")

# After the number: "120元", "30 塊錢", "5 dollars"
CURRENCY_SUFFIXES_CJK: tuple[str, ...] = ("塊錢", "元", "塊", "圓")
CURRENCY_SUFFIXES_WORD: tuple[str, ...] = ("dollars", "dollar", "bucks", "ntd", "twd", "usd")

# ---------------------------------------------------------------------------
# Quantities
# ---------------------------------------------------------------------------

COUNTERS_CJK: tuple[str, ...] = ("顆", "瓶", "杯", "份", "包", "盒", "組", "罐", "個")
COUNTERS_WORD: tuple[str, ...] = (
    "pieces",
    "piece",
    "pcs",
    "bottles",
    "bottle",
    "cups",
    "cup",
    "portions",
    "portion",
    "packs",
    "pack",
    "boxes",
    "box",
    "sets",
    "set",
    "cans",
    "can",
    "items",
    "item",
)

CJK_DIGITS: dict[str, int] = {
    "零": 0,
    "〇": 0,
    "一": 1,
    "二": 2,
    "兩": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
}
CJK_TEN = "十"
CJK_HALF = "半"

WORD_UNITS: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
}
WORD_TENS: dict[str, int] = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}
WORD_HALF = "half"

# ---------------------------------------------------------------------------
# Amount markers
# ---------------------------------------------------------------------------

TOTAL_WORDS: tuple[str, ...] = ("altogether", "combined", "total", "sum")
TOTAL_WORDS_CJK: tuple[str, ...] = ("合計", "總計", "總共", "共")

PER_UNIT_WORDS: tuple[str, ...] = ("each", "per")
PER_UNIT_SUFFIX_WORDS: tuple[str, ...] = ("each", "apiece", "ea")
PER_UNIT_CJK = "每"

UNIT_PRICE_LABELS: tuple[str, ...] = ("unit price",)
UNIT_PRICE_LABELS_CJK: tuple[str, ...] = ("單價",)

# ---------------------------------------------------------------------------
# Clause connectors and filler words
# ---------------------------------------------------------------------------

CONNECTOR_WORDS: tuple[str, ...] = ("as well as", "along with", "and then", "and", "also", "plus")
CONNECTORS_CJK: tuple[str, ...] = (
    "以及",
    "還有",
    "另外",
    "加上",
    "和",
    "及",
    "與",
    "並",
    "跟",
    "再",
)
# "加" joins items ("咖啡加蛋糕") except in 加油 (fuel) and 加值 (top-up).
CONNECTOR_PLUS_CJK = "加"
CONNECTOR_PLUS_KEEP_BEFORE: tuple[str, ...] = ("油", "值")

SEPARATOR = ";"
SEPARATOR_CHARS = "，、。；;！!？?\n"

# Tokens that start a fragment belonging to the previous clause ("…, each 55").
CONTINUATION_WORDS: tuple[str, ...] = (
    "each",
    "per",
    "apiece",
    "total",
    "altogether",
    "combined",
    "sum",
)
CONTINUATION_CJK: tuple[str, ...] = ("每", "單價", "合計", "總計", "總共", "共")

FILLER_WORDS: tuple[str, ...] = (
    "i",
    "we",
    "my",
    "bought",
    "buy",
    "got",
    "paid",
    "pay",
    "spent",
    "spend",
    "cost",
    "costs",
    "for",
    "on",
    "of",
    "at",
    "a",
    "an",
    "the",
    "some",
    "just",
    "each",
    "per",
    "apiece",
)
FILLERS_CJK: tuple[str, ...] = (
    "買了",
    "花了",
    "用了",
    "繳了",
    "付了",
    "充了",
    "單價",
    "我",
    "買",
    "的",
    "了",
    "去",
    "到",
    "在",
)

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

# "2025-06-01" or "2025/6/1"; month/day ranges are checked by ``datetime.date``.
LITERAL_DATE_PATTERN = (
    r"(?<![0-9])(?P<year>[0-9]{4})(?P<sep>[-/])(?P<month>[0-9]{1,2})"
    r"(?P=sep)(?P<day>[0-9]{1,2})(?![0-9])"
)

# Offset in days from the reference date; checked in this order so that
# "day before yesterday" is not read as "yesterday".
RELATIVE_DAYS: tuple[tuple[int, tuple[str, ...], tuple[str, ...]], ...] = (
    (-2, ("day before yesterday", "day-before-yesterday"), ("前天", "前日")),
    (-1, ("yesterday",), ("昨天", "昨日", "昨晚")),
    (0, ("today", "tonight"), ("今天", "今日", "今晚")),
)

# Sunday=1 … Saturday=7
WEEKDAYS: dict[str, int] = {
    "sunday": 1,
    "sun": 1,
    "monday": 2,
    "mon": 2,
    "tuesday": 3,
    "tues": 3,
    "tue": 3,
    "wednesday": 4,
    "wed": 4,
    "thursday": 5,
    "thurs": 5,
    "thu": 5,
    "friday": 6,
    "fri": 6,
    "saturday": 7,
    "sat": 7,
}
WEEKDAYS_CJK: dict[str, int] = {
    "日": 1,
    "天": 1,
    "一": 2,
    "二": 3,
    "三": 4,
    "四": 5,
    "五": 6,
    "六": 7,
}
WEEK_UNITS_CJK: tuple[str, ...] = ("星期", "禮拜", "週", "周")

# ---------------------------------------------------------------------------
# Categories (declared order is the tie-break order)
# ---------------------------------------------------------------------------

CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (
        Category.FOOD,
        (
            "餐", "便當", "早餐", "午餐", "晚餐", "飲料", "咖啡", "超商", "麵", "飯",
            "星巴克", "麥當勞", "鮮奶", "牛奶", "蛋", "茶葉蛋", "蛋糕", "蘋果", "三明治",
            "food", "meal", "breakfast", "brunch", "lunch", "dinner", "snack", "drink",
            "coffee", "latte", "tea", "milk", "juice", "cake", "bread", "sandwich",
            "noodle", "rice", "pizza", "burger", "sushi", "egg", "apple", "restaurant",
            "cafe", "starbucks", "mcdonald", "mcdonalds", "kfc", "convenience store",
            "grocery", "groceries",
        ),
    ),
    (
        Category.TRANSPORT,
        (
            "捷運", "公車", "火車", "高鐵", "加油", "停車", "客運", "機票", "計程車",
            "悠遊卡", "一卡通", "儲值", "加值",
            "mrt", "metro", "subway", "bus", "train", "hsr", "taxi", "uber", "lyft",
            "gasoline", "petrol", "fuel", "parking", "toll", "flight", "airfare",
            "easycard", "easy card",
        ),
    ),
    (
        Category.ENTERTAINMENT,
        (
            "電影", "影城", "遊戲", "演唱會", "娛樂",
            "movie", "cinema", "film", "game", "steam", "netflix", "spotify",
            "concert", "ktv", "karaoke",
        ),
    ),
    (
        Category.SHOPPING,
        (
            "蝦皮", "購物", "衣服", "鞋", "配件", "商場",
            "momo", "pchome", "shopee", "amazon", "shopping", "clothes", "shirt",
            "shoe", "3c", "accessory", "accessories", "mall",
        ),
    ),
    (
        Category.UTILITY,
        (
            "水費", "電費", "瓦斯", "網路", "手機費", "電信", "瓦斯費", "帳單", "第四台",
            "water bill", "electricity", "electric bill", "gas bill", "internet",
            "phone bill", "mobile bill", "telecom", "utility", "utilities", "bill",
        ),
    ),
)

# ---------------------------------------------------------------------------
# Description repairs: compounds that quantity/unit-price stripping can split
# ---------------------------------------------------------------------------

REPAIRS: tuple[tuple[str, str], ...] = (
    (r"儲值\s+悠遊卡", "儲值悠遊卡"),
    (r"加值\s+悠遊卡", "加值悠遊卡"),
    (r"(?i)\beasy\s+card\b", "easycard"),
)

# ---------------------------------------------------------------------------
# Regex helpers
# ---------------------------------------------------------------------------


def is_ascii_word(term: str) -> bool:
    return term.isascii() and any(ch.isalpha() for ch in term)


def alternation(terms: Iterable[str]) -> str:
    """Return a non-capturing alternation, longest terms first."""

    ordered = sorted(dict.fromkeys(terms), key=len, reverse=True)
    # Inner spaces match any run of whitespace ("as  well as").
    escaped = (r"\s+".join(re.escape(part) for part in t.split(" ")) for t in ordered)
    return "(?:" + "|".join(escaped) + ")"


def word_alternation(terms: Iterable[str]) -> str:
    """Alternation bounded so ASCII words never match inside other words."""

    return r"(?<![A-Za-z])" + alternation(terms) + r"(?![A-Za-z])"


def mixed_alternation(words: Iterable[str], cjk: Iterable[str]) -> str:
    """Word-bounded ASCII terms or plain-substring CJK terms."""

    return "(?:" + word_alternation(words) + "|" + alternation(cjk) + ")"


__all__ = [
    "CURRENCY_PREFIXES",
    "CURRENCY_SUFFIXES_CJK",
    "CURRENCY_SUFFIXES_WORD",
    "COUNTERS_CJK",
    "COUNTERS_WORD",
    "CJK_DIGITS",
    "CJK_TEN",
    "CJK_HALF",
    "WORD_UNITS",
    "WORD_TENS",
    "WORD_HALF",
    "TOTAL_WORDS",
    "TOTAL_WORDS_CJK",
    "PER_UNIT_WORDS",
    "PER_UNIT_SUFFIX_WORDS",
    "PER_UNIT_CJK",
    "UNIT_PRICE_LABELS",
    "UNIT_PRICE_LABELS_CJK",
    "CONNECTOR_WORDS",
    "CONNECTORS_CJK",
    "CONNECTOR_PLUS_CJK",
    "CONNECTOR_PLUS_KEEP_BEFORE",
    "SEPARATOR",
    "SEPARATOR_CHARS",
    "CONTINUATION_WORDS",
    "CONTINUATION_CJK",
    "FILLER_WORDS",
    "FILLERS_CJK",
    "LITERAL_DATE_PATTERN",
    "RELATIVE_DAYS",
    "WEEKDAYS",
    "WEEKDAYS_CJK",
    "WEEK_UNITS_CJK",
    "CATEGORY_KEYWORDS",
    "REPAIRS",
    "is_ascii_word",
    "alternation",
    "word_alternation",
    "mixed_alternation",
]
