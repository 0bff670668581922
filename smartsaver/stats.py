"""Client-side aggregates over backend series: Summary and AllDatasetsStats."""

from dataclasses import dataclass, field

import pandas as pd

from .models import AnalysisBundle, Dataset, Series
from .profiles import UtilityProfile

NA = "N/A"


# ---------------- Series helpers ----------------
def total(series: Series | None) -> float:
    if series is None or series.is_empty:
        return 0.0
    return float(sum(series.values))


def average(series: Series | None) -> float:
    if series is None or series.is_empty:
        return 0.0
    return total(series) / (len(series.values) or 1)


def peak_day(series: Series | None) -> str:
    """Label at the first maximum."""
    if series is None or series.is_empty or not series.labels:
        return NA
    values = series.values
    idx = values.index(max(values))
    if idx >= len(series.labels):
        return NA
    return series.labels[idx] or NA


def peak_value(series: Series | None) -> float:
    if series is None or series.is_empty:
        return 0.0
    return float(max(series.values))


def mean(values) -> float:
    s = pd.Series(values, dtype=float)
    return float(s.mean()) if not s.empty else 0.0


def std_dev(values) -> float:
    """Population standard deviation."""
    s = pd.Series(values, dtype=float)
    return float(s.std(ddof=0)) if not s.empty else 0.0


def daily_totals(series: Series | None) -> pd.DataFrame:
    """Per-label sum across every dataset of the series: columns date, total."""
    if series is None or not series.labels:
        return pd.DataFrame(columns=["date", "total"])
    # one column per dataset, aligned on label position; short datasets count as 0
    frame = pd.DataFrame({i: pd.Series(ds, dtype=float) for i, ds in enumerate(series.datasets)})
    frame = frame.reindex(range(len(series.labels))).fillna(0.0)
    totals = frame.sum(axis=1) if not frame.columns.empty else pd.Series(0.0, index=frame.index)
    return pd.DataFrame({"date": series.labels, "total": totals.astype(float).tolist()})


def top_days(daily: pd.DataFrame, n: int = 5, highest: bool = True) -> pd.DataFrame:
    if daily.empty:
        return daily
    ordered = daily.sort_values("total", ascending=False, kind="stable")
    if highest:
        return ordered.head(n).reset_index(drop=True)
    return ordered.tail(n).iloc[::-1].reset_index(drop=True)


def zero_days(daily: pd.DataFrame) -> list[str]:
    if daily.empty:
        return []
    return daily.loc[daily["total"] == 0, "date"].tolist()


def usage_pattern(daily: pd.DataFrame) -> dict:
    """Variability of the non-zero days."""
    non_zero = daily.loc[daily["total"] > 0, "total"] if not daily.empty else pd.Series(dtype=float)
    avg = float(non_zero.mean()) if not non_zero.empty else 0.0
    sd = float(non_zero.std(ddof=0)) if not non_zero.empty else 0.0
    trend = "Stable"
    if sd > avg * 0.5:
        trend = "Highly Variable"
    elif sd > avg * 0.2:
        trend = "Moderately Variable"
    return {
        "trend": trend,
        "average": avg,
        "std_dev": sd,
        "zero_days": len(zero_days(daily)),
    }


def chart_kind(values: list[float]) -> str:
    """Pick an altair mark from the value range."""
    if not values:
        return "point"
    spread = max(values) - min(values)
    if spread > 100:
        return "bar"
    if spread > 10:
        return "line"
    return "point"


# ---------------- Summary ----------------
@dataclass
class ApplianceSummary:
    name: str
    kind: str
    total: float = 0.0
    peak_day: str = NA
    peak_value: float = 0.0


@dataclass
class Summary:
    utility: str
    unit: str
    total: float = 0.0
    average: float = 0.0
    peak_day: str = NA
    peak_value: float = 0.0
    appliances: list[ApplianceSummary] = field(default_factory=list)

    def appliance(self, kind: str) -> ApplianceSummary | None:
        for a in self.appliances:
            if a.kind == kind:
                return a
        return None

    def most_intensive(self) -> ApplianceSummary | None:
        """Largest total; ties keep the later appliance."""
        best = None
        for a in self.appliances:
            if best is None or not best.total > a.total:
                best = a
        return best


def summarize(bundle: AnalysisBundle, profile: UtilityProfile) -> Summary:
    chart = bundle.chart_data
    appliances = []
    for a in profile.appliances:
        s = bundle.get(a.series_key)
        appliances.append(ApplianceSummary(
            name=a.name, kind=a.kind,
            total=total(s), peak_day=peak_day(s), peak_value=peak_value(s),
        ))
    return Summary(
        utility=profile.utility,
        unit=profile.unit,
        total=total(chart),
        average=average(chart),
        peak_day=peak_day(chart),
        peak_value=peak_value(chart),
        appliances=appliances,
    )


def category_totals(bundle: AnalysisBundle, profile: UtilityProfile) -> dict[str, float]:
    return {a.name: total(bundle.get(a.series_key)) for a in profile.appliances}


def category_shares(categories: dict[str, float], grand_total: float) -> dict[str, float]:
    """Percent of grand_total per category (0 when there is no usage)."""
    if not grand_total:
        return {name: 0.0 for name in categories}
    return {name: value / grand_total * 100 for name, value in categories.items()}


# ---------------- Cross-dataset stats ----------------
@dataclass
class AllDatasetsStats:
    dataset_count: int = 0
    total_average: float = 0.0
    total_std_dev: float = 0.0
    daily_average: float = 0.0
    daily_std_dev: float = 0.0
    appliance_averages: dict[str, float] = field(default_factory=dict)


def all_datasets_stats(datasets: list[Dataset], profile: UtilityProfile) -> AllDatasetsStats:
    """Mean / std-dev of dataset totals; recomputed whenever the list changes."""
    if not datasets:
        return AllDatasetsStats()
    totals, dailies = [], []
    per_appliance: dict[str, list[float]] = {a.kind: [] for a in profile.appliances}
    for ds in datasets:
        chart = ds.analysis.chart_data
        if chart is None:
            continue
        totals.append(total(chart))
        dailies.append(average(chart))
        for a in profile.appliances:
            s = ds.analysis.get(a.series_key)
            if s is not None:
                per_appliance[a.kind].append(total(s))
    return AllDatasetsStats(
        dataset_count=len(datasets),
        total_average=mean(totals),
        total_std_dev=std_dev(totals),
        daily_average=mean(dailies),
        daily_std_dev=std_dev(dailies),
        appliance_averages={k: mean(v) for k, v in per_appliance.items() if v},
    )


def forecast_next(datasets: list[Dataset], months: int = 3) -> float | None:
    """Mean total of the most recent datasets (backend lists newest first)."""
    recent = datasets[:months]
    if not recent:
        return None
    sums = []
    for ds in recent:
        chart = ds.analysis.chart_data
        sums.append(float(sum(sum(d) for d in chart.datasets)) if chart else 0.0)
    return mean(sums)
