# backend/services/stats_engine.py

import math
from typing import List, Optional

import pandas as pd

from models.plot_models import DataPoint
from models.stats_models import AxisSummary, DatasetStats


def _clean(value) -> Optional[float]:
    # pandas reports undefined results (std of one value, flat correlation) as NaN
    if value is None or pd.isna(value):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _summarize_axis(series: pd.Series) -> AxisSummary:
    return AxisSummary(
        min=float(series.min()),
        max=float(series.max()),
        mean=_clean(series.mean()),
        std=_clean(series.std()),
    )


def compute_dataset_stats(file_name: str, points: List[DataPoint]) -> DatasetStats:
    """
    Summary statistics for a parsed dataset: per-axis min/max/mean/std
    and the Pearson correlation between x and y.
    """
    if not points:
        return DatasetStats(file_name=file_name, count=0)

    df = pd.DataFrame(
        {"x": [p.x for p in points], "y": [p.y for p in points]},
        dtype="float64",
    )

    correlation = None
    if len(df) >= 2:
        correlation = _clean(df["x"].corr(df["y"]))

    return DatasetStats(
        file_name=file_name,
        count=len(df),
        x=_summarize_axis(df["x"]),
        y=_summarize_axis(df["y"]),
        correlation=correlation,
    )
