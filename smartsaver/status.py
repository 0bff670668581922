"""Low / Average / High labels for totals, daily averages and appliances."""

import math
from dataclasses import dataclass

from .profiles import UtilityProfile
from .stats import AllDatasetsStats, Summary

LOW, AVERAGE, HIGH = "Low", "Average", "High"
Z_BAND = 0.5
APPLIANCE_BAND = (0.8, 1.2)


@dataclass(frozen=True)
class StatusResult:
    status: str
    message: str
    comparative: bool = False


def z_score(value: float, mean: float, std: float) -> float:
    if std == 0:
        if value == mean:
            return 0.0
        return math.copysign(math.inf, value - mean)
    return (value - mean) / std


def z_status(value: float, mean: float, std: float) -> str:
    z = z_score(value, mean, std)
    if z < -Z_BAND:
        return LOW
    if z > Z_BAND:
        return HIGH
    return AVERAGE


def threshold_status(value: float, kind: str, profile: UtilityProfile) -> str:
    low, medium = profile.threshold(kind)
    if value <= low:
        return LOW
    if value <= medium:
        return AVERAGE
    return HIGH


def threshold_badge(value: float, kind: str, profile: UtilityProfile) -> str:
    """success / warning / danger for colouring metrics."""
    return {LOW: "success", AVERAGE: "warning", HIGH: "danger"}[
        threshold_status(value, kind, profile)]


def _fmt(value: float) -> str:
    return f"{value:g}"


def classify(value, kind: str, stats: AllDatasetsStats | None,
             profile: UtilityProfile) -> StatusResult:
    """Compare against the user's other datasets when there are any, else fixed thresholds."""
    try:
        num = float(value or 0)
    except (TypeError, ValueError):
        num = 0.0
    unit = profile.unit
    if stats is not None and stats.dataset_count > 0:
        if kind in ("total", "daily"):
            avg = stats.total_average if kind == "total" else stats.daily_average
            std = stats.total_std_dev if kind == "total" else stats.daily_std_dev
            status = z_status(num, avg, std)
            return StatusResult(status, f"{status} Consumption ({num:.1f} {unit} vs. Avg {avg:.1f} {unit})", True)
        avg = stats.appliance_averages.get(kind)
        if avg:
            low_f, high_f = APPLIANCE_BAND
            status = LOW if num < avg * low_f else HIGH if num > avg * high_f else AVERAGE
            return StatusResult(status, f"{status} Consumption ({num:.1f} {unit} vs. Avg {avg:.1f} {unit})", True)

    low, medium = profile.threshold(kind)
    status = threshold_status(num, kind, profile)
    if status == LOW:
        msg = f"Low Consumption (≤{_fmt(low)} {unit})"
    elif status == AVERAGE:
        msg = f"Average Consumption (≤{_fmt(medium)} {unit})"
    else:
        msg = f"High Consumption (>{_fmt(medium)} {unit})"
    return StatusResult(status, msg)


def usage_status(summary: Summary | None, profile: UtilityProfile) -> str:
    if summary is None:
        return "N/A"
    return threshold_status(summary.average, "daily", profile)
