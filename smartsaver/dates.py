"""Month/day label parsing for backend chart labels.

Labels arrive as "15-03-2024", "03/15/2024", "15.03.24" or "2024-03-15", with
the day/month order unknown. Everything that groups by month goes through
parse_label so every view agrees on what a label means.
"""

import re
import calendar
import logging
from dataclasses import dataclass
from typing import Union

logger = logging.getLogger(__name__)

SEPARATORS = ("-", "/", ".")
MONTH_NAMES = list(calendar.month_name)[1:]
_LEADING_INT = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True, order=True)
class MonthYear:
    year: int
    month: int

    @property
    def name(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Parsed:
    day: int
    month: int
    year: int

    @property
    def month_year(self) -> MonthYear:
        return MonthYear(self.year, self.month)


@dataclass(frozen=True)
class Unparseable:
    label: str
    reason: str


LabelParse = Union[Parsed, Unparseable]


def _leading_int(part: str) -> int | None:
    m = _LEADING_INT.match(part)
    return int(m.group(1)) if m else None


def expand_year(year: int) -> int:
    """Two-digit years: 00-68 -> 20xx, 69-99 -> 19xx (same pivot as strptime %y)."""
    if year >= 100:
        return year
    return 2000 + year if year <= 68 else 1900 + year


def _is_month(value: int | None) -> bool:
    return value is not None and 1 <= value <= 12


def parse_label(label) -> LabelParse:
    """Resolve a date label to day/month/year. Never raises."""
    text = str(label or "").strip()
    sep = next((s for s in SEPARATORS if s in text), None)
    if sep is None:
        return Unparseable(text, "no date separator")
    parts = text.split(sep)
    if len(parts) < 3:
        return Unparseable(text, "fewer than 3 parts")

    first, second, third = (_leading_int(p) for p in parts[:3])

    # year-first ISO style
    if first is not None and len(parts[0].strip()) == 4:
        if _is_month(second) and third is not None:
            return Parsed(day=third, month=second, year=first)
        return Unparseable(text, "year-first label without a month")

    if third is None:
        return Unparseable(text, "no year")
    year = expand_year(third)

    if _is_month(second):
        day, month = first, second
    elif _is_month(first):
        day, month = second, first
    else:
        return Unparseable(text, "no part is a month")
    if day is None:
        return Unparseable(text, "no day")
    return Parsed(day=day, month=month, year=year)


def month_year_of(label) -> MonthYear | None:
    result = parse_label(label)
    if isinstance(result, Unparseable):
        logger.debug("Skipping label %r: %s", result.label, result.reason)
        return None
    return result.month_year


def first_month_year(labels) -> MonthYear | None:
    """Month of the first parsable label (a dataset is one month of data)."""
    for label in labels or []:
        my = month_year_of(label)
        if my is not None:
            return my
    return None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def parse_month_year_name(text: str) -> MonthYear:
    """Inverse of MonthYear.name ("March 2024")."""
    try:
        month_name, year = text.strip().split(" ")
        return MonthYear(int(year), MONTH_NAMES.index(month_name) + 1)
    except ValueError:
        raise ValueError(f"Not a month-year: {text!r}") from None
