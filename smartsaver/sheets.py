"""Local preview of an uploaded spreadsheet before it goes to the backend."""

from pathlib import Path

import pandas as pd

from .models import Series, to_numbers

EXCEL_SUFFIXES = {".xlsx", ".xls", ".xlsm"}


def load_sheet(file_or_buf, name: str | None = None) -> pd.DataFrame:
    """First sheet of an Excel workbook, or a CSV; header row becomes the columns."""
    name = name or getattr(file_or_buf, "name", "") or str(file_or_buf)
    if Path(name).suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(file_or_buf, sheet_name=0)
    else:
        df = pd.read_csv(file_or_buf)
    df.columns = [str(c).strip() for c in df.columns]
    return df


def column_series(df: pd.DataFrame, x: str, y: str) -> Series:
    if x not in df.columns or y not in df.columns:
        raise ValueError("Invalid column selection.")
    labels = [str(v) for v in df[x].tolist()]
    return Series(labels=labels, datasets=[to_numbers(df[y].tolist())])


def usage_per_day_frame(usage_per_day: dict | None) -> pd.DataFrame:
    """{day: {waterUsage, electricityUsage, gasUsage}} -> one row per day."""
    rows = []
    for day, usage in (usage_per_day or {}).items():
        usage = usage or {}
        rows.append({
            "day": day,
            "water": usage.get("waterUsage"),
            "electricity": usage.get("electricityUsage"),
            "gas": usage.get("gasUsage"),
        })
    df = pd.DataFrame(rows, columns=["day", "water", "electricity", "gas"])
    for col in ["water", "electricity", "gas"]:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)
    return df
