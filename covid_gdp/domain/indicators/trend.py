import math
from typing import List, Optional, Sequence

import pandas as pd

from covid_gdp.domain.models import Trend

FLAT_CHANGE_EPSILON = 1e-6
FLAT_PCT_THRESHOLD = 2.0


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def rolling_average(values: Optional[Sequence[Optional[float]]], window: int = 7) -> List[Optional[float]]:
    """
    Trailing moving average.

    Args:
        values: series oldest → newest; missing entries count as 0
        window: number of samples per average (e.g. 7 for a weekly view)

    Returns:
        list aligned with `values`, None until the window is full
    """
    if window < 1:
        raise ValueError("Window must be at least 1")
    if not values:
        return []

    series = pd.Series(list(values), dtype="float64").fillna(0.0)
    averaged = series.rolling(window=window, min_periods=window).mean()
    return [None if pd.isna(v) else float(v) for v in averaged]


def compute_trend(series: Optional[Sequence[Optional[float]]], window: int = 7) -> Optional[Trend]:
    """
    Short-term direction of a series over its last `window` samples.

    Compares the first and last non-missing values in the window. Changes
    under 2% (or effectively zero) are reported as flat.
    """
    if not series or len(series) < 2:
        return None

    tail = list(series)[-window:]
    present = [v for v in tail if not _is_missing(v)]
    if not present:
        return None

    first = float(present[0])
    last = float(present[-1])
    change = last - first
    pct = (change / abs(first)) * 100 if first != 0 else None

    if abs(change) < FLAT_CHANGE_EPSILON or (pct is not None and abs(pct) < FLAT_PCT_THRESHOLD):
        direction = "flat"
    elif change > 0:
        direction = "up"
    else:
        direction = "down"

    return Trend(direction=direction, change=change, pct=pct)
