import calendar
from dataclasses import dataclass

from .dates import Parsed, first_month_year, parse_label
from .models import Series

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
LEVELS = [(20, "Very Low Usage"), (40, "Low Usage"), (60, "Medium Usage"), (80, "High Usage")]
LEVEL_COLORS = {
    "No Data": "#f5f5f5",
    "Very Low Usage": "#d8b4fe",
    "Low Usage": "#a5b4fc",
    "Medium Usage": "#67e8f9",
    "High Usage": "#6ee7b7",
    "Very High Usage": "#fdba74",
}


@dataclass
class CalendarDay:
    day: int | None           # None for padding cells
    usage: float = 0.0
    level: str = ""


def usage_by_day(series: Series | None) -> dict[int, float]:
    """day of month -> value; a later label for the same day wins."""
    out: dict[int, float] = {}
    if series is None:
        return out
    for label, value in series.pairs():
        p = parse_label(label)
        if isinstance(p, Parsed):
            out[p.day] = value
    return out


def usage_level(usage: float | None, max_usage: float) -> str:
    if not usage or max_usage <= 0:
        return "No Data"
    pct = usage / max_usage * 100
    for limit, name in LEVELS:
        if pct <= limit:
            return name
    return "Very High Usage"


def month_grid(series: Series | None) -> tuple[str, list[list[CalendarDay]]]:
    """Sunday-first weeks for the month of the first label; ("", []) without one."""
    if series is None:
        return "", []
    my = first_month_year(series.labels)
    if my is None:
        return "", []
    by_day = usage_by_day(series)
    max_usage = max(by_day.values(), default=0.0)
    weeks = []
    for week in calendar.Calendar(firstweekday=6).monthdayscalendar(my.year, my.month):
        row = []
        for d in week:
            if d == 0:
                row.append(CalendarDay(None))
            else:
                usage = by_day.get(d, 0.0)
                row.append(CalendarDay(d, usage, usage_level(usage, max_usage)))
        weeks.append(row)
    return my.name, weeks
