"""Compare usage between calendar months across all of a user's datasets."""

from dataclasses import dataclass, field

from .dates import MonthYear, days_in_month, month_year_of
from .models import Dataset, Series
from .profiles import UtilityProfile


@dataclass
class MonthResult:
    month_year: MonthYear
    total: float = 0.0
    daily_average: float = 0.0
    has_data: bool = False
    appliances: dict[str, float] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.month_year.name


@dataclass
class ComparisonAnalysis:
    highest: MonthResult
    lowest: MonthResult
    difference: float
    percentage_diff: float


def available_month_years(datasets: list[Dataset]) -> list[MonthYear]:
    """Every month that appears in a chartData label, oldest first."""
    found = set()
    for ds in datasets:
        chart = ds.analysis.chart_data
        if chart is None:
            continue
        for label in chart.labels:
            my = month_year_of(label)
            if my is not None:
                found.add(my)
    return sorted(found)


def month_year_total(series: Series | None, month_year: MonthYear) -> float:
    if series is None:
        return 0.0
    return sum(value for label, value in series.pairs() if month_year_of(label) == month_year)


def compare_months(datasets: list[Dataset], selected: list[MonthYear],
                   profile: UtilityProfile) -> list[MonthResult]:
    if len(selected) < 2:
        raise ValueError("Please select at least two months to compare")
    results = []
    for my in selected:
        total = sum(month_year_total(ds.analysis.chart_data, my) for ds in datasets)
        appliances = {a.name: 0.0 for a in profile.appliances}
        for ds in datasets:
            for a in profile.appliances:
                appliances[a.name] += month_year_total(ds.analysis.get(a.series_key), my)
        results.append(MonthResult(
            month_year=my,
            total=total,
            daily_average=total / days_in_month(my.year, my.month),
            has_data=total > 0,
            appliances=appliances,
        ))
    return results


def comparison_analysis(results: list[MonthResult]) -> ComparisonAnalysis | None:
    if len(results) < 2:
        return None
    ordered = sorted(results, key=lambda r: r.total, reverse=True)
    highest, lowest = ordered[0], ordered[-1]
    difference = highest.total - lowest.total
    pct = difference / lowest.total * 100 if lowest.total else 0.0
    return ComparisonAnalysis(highest, lowest, difference, pct)
