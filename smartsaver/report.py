"""PDF consumption report (reportlab canvas + reportlab.graphics charts)."""

import logging
from io import BytesIO
from datetime import datetime

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas
from reportlab.graphics import renderPDF
from reportlab.graphics.shapes import Drawing
from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.charts.piecharts import Pie
from reportlab.platypus import Table, TableStyle

from .dates import first_month_year
from .models import Dataset, Series
from .profiles import UtilityProfile
from .stats import (AllDatasetsStats, Summary, category_shares, category_totals, daily_totals,
                    forecast_next, top_days, usage_pattern, zero_days)
from .usage_calendar import LEVEL_COLORS, WEEKDAYS, month_grid

logger = logging.getLogger(__name__)

MARGIN = 20 * mm
LINE = 7 * mm
GRAPH_H = 70 * mm
PIE_COLORS = [colors.HexColor(c) for c in ("#4C9BE8", "#E8884C", "#4CE8A0", "#E84C6A", "#9B4CE8")]


def report_period(dataset: Dataset) -> tuple[str, str]:
    """(month name, year) from the first label, ("Unknown", "") when unparsable."""
    chart = dataset.analysis.chart_data
    my = first_month_year(chart.labels if chart else [])
    if my is None:
        return "Unknown", ""
    return my.month_name, str(my.year)


def report_filename(dataset: Dataset, profile: UtilityProfile) -> str:
    month, year = report_period(dataset)
    suffix = f"{month}_{year}" if year else month
    return f"{profile.utility}_consumption_analysis_{suffix}.pdf"


def recommendations(categories: dict[str, float], daily: pd.DataFrame, avg_usage: float,
                    profile: UtilityProfile) -> list[str]:
    recs = []
    if not daily.empty and (daily["total"] > avg_usage * 1.5).any():
        recs.append(profile.spread_advice)
    grand = float(daily["total"].sum()) if not daily.empty else 0.0
    for name, pct in category_shares(categories, grand).items():
        if pct > 40:
            recs.append(profile.category_advice.format(category=name, pct=pct, lower=name.lower()))
    recs.extend(profile.general_recommendations)
    return recs


# ---------------- drawing helpers ----------------
def bar_drawing(labels: list[str], values: list[float], width: float, height: float,
                color: str = "#4C9BE8") -> Drawing:
    d = Drawing(width, height)
    bc = VerticalBarChart()
    bc.x, bc.y = 30, 35
    bc.width, bc.height = width - 40, height - 45
    bc.data = [tuple(values)]
    bc.valueAxis.valueMin = 0
    bc.valueAxis.valueMax = max(values) * 1.1 if values and max(values) > 0 else 1
    bc.categoryAxis.categoryNames = labels
    bc.categoryAxis.labels.angle = 90
    bc.categoryAxis.labels.boxAnchor = "e"
    bc.categoryAxis.labels.fontSize = 5
    bc.valueAxis.labels.fontSize = 6
    bc.bars[0].fillColor = colors.HexColor(color)
    bc.bars[0].strokeColor = None
    d.add(bc)
    return d


def pie_drawing(categories: dict[str, float], size: float) -> Drawing:
    d = Drawing(size * 2, size)
    pie = Pie()
    pie.x, pie.y = 10, 10
    pie.width = pie.height = size - 20
    pie.data = list(categories.values())
    pie.labels = list(categories.keys())
    pie.slices.fontSize = 7
    for i in range(len(pie.data)):
        pie.slices[i].fillColor = PIE_COLORS[i % len(PIE_COLORS)]
    d.add(pie)
    return d


def calendar_table(series: Series | None, unit: str) -> Table | None:
    title, weeks = month_grid(series)
    if not weeks:
        return None
    data = [WEEKDAYS]
    style = [
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 8),
        ("FONT", (0, 1), (-1, -1), "Helvetica", 7),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    for r, week in enumerate(weeks, start=1):
        row = []
        for c, cell in enumerate(week):
            if cell.day is None:
                row.append("")
                continue
            row.append(f"{cell.day}\n{cell.usage:.1f} {unit}")
            style.append(("BACKGROUND", (c, r), (c, r), colors.HexColor(LEVEL_COLORS[cell.level])))
        data.append(row)
    table = Table(data, colWidths=[24 * mm] * 7)
    table.setStyle(TableStyle(style))
    return table


class _Page:
    """Canvas cursor that starts a new page before running past the bottom margin."""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = A4
        self.y = self.height - MARGIN

    def ensure(self, needed: float):
        if self.y - needed < MARGIN:
            self.c.showPage()
            self.y = self.height - MARGIN

    def write(self, line: str, size=12, bold=False, indent=0.0, gap=LINE):
        """Draw line, wrapped to the printable width."""
        font = "Helvetica-Bold" if bold else "Helvetica"
        chunks = simpleSplit(line, font, size, self.width - 2 * MARGIN - indent) or [""]
        for chunk in chunks:
            self.ensure(gap)
            self.c.setFont(font, size)
            self.c.drawString(MARGIN + indent, self.y, chunk)
            self.y -= gap

    def centered(self, line: str, size: int):
        self.c.setFont("Helvetica-Bold", size)
        self.c.drawCentredString(self.width / 2, self.y, line)
        self.y -= size * 0.6 * mm + 6 * mm

    def heading(self, line: str):
        self.y -= 3 * mm
        self.write(line, size=15, bold=True, gap=9 * mm)

    def drawing(self, d: Drawing):
        self.ensure(d.height + 5 * mm)
        renderPDF.draw(d, self.c, MARGIN, self.y - d.height)
        self.y -= d.height + 5 * mm

    def table(self, t: Table):
        w, h = t.wrapOn(self.c, self.width - 2 * MARGIN, self.height)
        self.ensure(h + 5 * mm)
        t.drawOn(self.c, MARGIN, self.y - h)
        self.y -= h + 5 * mm


# ---------------- report ----------------
def build_report(dataset: Dataset, summary: Summary, stats: AllDatasetsStats,
                 datasets: list[Dataset], profile: UtilityProfile) -> BytesIO:
    chart = dataset.analysis.chart_data
    if chart is None or not chart.labels:
        raise ValueError("No data available to generate report")

    unit = profile.unit
    daily = daily_totals(chart)
    grand = float(daily["total"].sum())
    avg_usage = grand / (len(chart.labels) or 1)
    categories = category_totals(dataset.analysis, profile)
    shares = category_shares(categories, grand)
    month, year = report_period(dataset)
    graph_w = A4[0] - 2 * MARGIN

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"{profile.title} Consumption Analysis Report")
    page = _Page(c)

    page.centered(f"{profile.title} Consumption Analysis Report", 20)
    page.centered(f"{month} {year}".strip(), 15)
    page.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}", size=9)

    page.heading(f"1. Total {profile.title} Consumption")
    page.write(f"Total {profile.title} Consumption: {grand:.2f} {unit}")
    page.write(f"Total {profile.title} Usage Over Time", bold=True)
    page.drawing(bar_drawing(daily["date"].tolist(), daily["total"].tolist(), graph_w, GRAPH_H))

    page.heading("2. Category-wise Usage")
    for name, value in categories.items():
        page.write(f"{name}: {value:.2f} {unit} ({shares[name]:.2f}% of total)")
    if sum(categories.values()) > 0:
        page.drawing(pie_drawing(categories, 60 * mm))

    page.heading("3. Top 5 High Consumption Days")
    for i, row in enumerate(top_days(daily, 5, highest=True).itertuples(), start=1):
        page.write(f"{i}. {row.date}: {row.total:.2f} {unit}")

    page.heading("4. Top 5 Low Consumption Days")
    for i, row in enumerate(top_days(daily, 5, highest=False).itertuples(), start=1):
        page.write(f"{i}. {row.date}: {row.total:.2f} {unit}")

    page.heading("5. Zero Consumption Days")
    page.write(f"Days with no {profile.utility} usage: {', '.join(zero_days(daily)) or 'None'}")

    page.heading(f"6. Average {profile.title} Usage")
    page.write(f"Average {profile.title} Usage per Day: {avg_usage:.2f} {unit}")
    pattern = usage_pattern(daily)
    page.write(f"Usage Pattern: {pattern['trend']} (std. dev. {pattern['std_dev']:.2f} {unit}, "
               f"{pattern['zero_days']} zero days)")

    page.heading("7. Percentage Contribution by Appliance")
    for name, pct in shares.items():
        page.write(f"{name}: {pct:.2f}%")

    page.heading("8. Appliance Breakdown")
    for a in summary.appliances:
        page.write(f"{a.name}:", bold=True, gap=6 * mm)
        page.write(f"Total Usage: {a.total:.2f} {unit}", indent=5 * mm, gap=6 * mm)
        page.write(f"Peak Usage Day: {a.peak_day}", indent=5 * mm, gap=6 * mm)
        page.write(f"Usage on Peak Day: {a.peak_value:.2f} {unit}", indent=5 * mm, gap=6 * mm)

    page.heading("9. Comparative Analysis")
    if stats.dataset_count > 1:
        page.write(f"Total Usage vs Average: {grand:.2f} {unit} vs {stats.total_average:.2f} {unit}")
        page.write(f"Daily Usage vs Average: {avg_usage:.2f} {unit} vs {stats.daily_average:.2f} {unit}")
        diff = (grand - stats.total_average) / stats.total_average * 100 if stats.total_average else 0.0
        page.write(f"Difference from Average: {diff:.2f}%")
    else:
        page.write("Not enough data for comparative analysis")

    page.heading(f"10. Next Month's {profile.title} Requirement Forecast")
    forecast = forecast_next(datasets)
    if forecast is None:
        page.write("Not enough historical data for forecasting")
    else:
        page.write(f"Forecasted {profile.title} Usage: {forecast:.2f} {unit}")
        page.write(f"Based on {len(datasets[:3])} previous month(s) of data")

    page.heading("11. Recommendations")
    for rec in recommendations(categories, daily, avg_usage, profile):
        page.write("• " + rec, size=10, gap=6 * mm)

    for a in profile.appliances:
        s = dataset.analysis.get(a.series_key)
        pairs = s.pairs() if s is not None else []
        if not pairs:
            continue
        page.heading(f"{a.name} Usage")
        page.drawing(bar_drawing([p[0] for p in pairs], [p[1] for p in pairs],
                                 graph_w, GRAPH_H, "#4CE8A0"))

    table = calendar_table(chart, unit)
    if table is not None:
        page.heading("Monthly Usage Calendar")
        page.table(table)

    c.showPage(); c.save(); buf.seek(0)
    logger.info("Built %s report for dataset %s", profile.utility, dataset.id)
    return buf
