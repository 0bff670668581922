"""Read-only shapes returned by the backend: series, analysis bundles, datasets."""

from dataclasses import dataclass, field

import pandas as pd

CHART_DATA = "chartData"


def to_numbers(values) -> list[float]:
    """Backend values may be strings or null; anything non-numeric counts as 0."""
    coerced = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce")
    return [float(v) for v in coerced.fillna(0.0)]


@dataclass
class Series:
    """One chart series: labels[i] pairs with datasets[0][i]."""
    labels: list[str] = field(default_factory=list)
    datasets: list[list[float]] = field(default_factory=list)

    @classmethod
    def from_json(cls, raw: dict | None) -> "Series | None":
        if not raw or not isinstance(raw, dict):
            return None
        labels = [str(x) for x in (raw.get("labels") or [])]
        datasets = []
        for ds in raw.get("datasets") or []:
            data = (ds or {}).get("data") or []
            datasets.append(to_numbers(data))
        return cls(labels=labels, datasets=datasets)

    @property
    def values(self) -> list[float]:
        return list(self.datasets[0]) if self.datasets else []

    @property
    def is_empty(self) -> bool:
        return not self.values

    def pairs(self) -> list[tuple[str, float]]:
        return list(zip(self.labels, self.values))

    def frame(self) -> pd.DataFrame:
        """label/value frame in label order (pairs stop at the shorter array)."""
        rows = self.pairs()
        df = pd.DataFrame(rows, columns=["label", "value"])
        df["value"] = pd.to_numeric(df["value"], errors="coerce").fillna(0.0)
        return df


@dataclass
class AnalysisBundle:
    series: dict[str, Series] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: dict | None) -> "AnalysisBundle":
        out = {}
        for name, value in (raw or {}).items():
            s = Series.from_json(value)
            if s is not None:
                out[name] = s
        return cls(series=out)

    def get(self, name: str) -> Series | None:
        return self.series.get(name)

    @property
    def chart_data(self) -> Series | None:
        return self.series.get(CHART_DATA)


@dataclass
class Dataset:
    id: str
    utility: str
    analysis: AnalysisBundle

    @classmethod
    def from_json(cls, raw: dict) -> "Dataset":
        return cls(
            id=str(raw.get("_id", "")),
            utility=str(raw.get("type", "")),
            analysis=AnalysisBundle.from_json(raw.get("analysis")),
        )
