"""
Primitive statistics over short wellness series.

Policy: every function degrades to 0.0 on empty or degenerate input
instead of returning NaN or raising. Partial data is the normal case for a
personal dashboard, so callers never need to guard these calls.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np
from scipy import stats as sp_stats

# Below this a series is treated as constant.
_STD_EPS = 1e-10

# Minimum paired points before a p-value is meaningful.
MIN_SIGNIFICANCE_POINTS = 3


def _arr(xs: Sequence[float]) -> np.ndarray:
    return np.asarray(list(xs), dtype=np.float64)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves toward positive infinity, as the dashboard displays them.

    Python's built-in ``round`` uses banker's rounding (``round(12.5) == 12``),
    which would disagree with the figures users already see.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def mean(xs: Sequence[float]) -> float:
    a = _arr(xs)
    if a.size == 0:
        return 0.0
    return float(a.mean())


def standard_deviation(xs: Sequence[float]) -> float:
    """Population standard deviation (divides by n)."""
    a = _arr(xs)
    if a.size == 0:
        return 0.0
    return float(a.std(ddof=0))


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson r; 0.0 for fewer than two points or a constant series.

    Raises ValueError when the series lengths differ, since that is a
    caller bug rather than missing data.
    """
    x = _arr(xs)
    y = _arr(ys)
    if x.size != y.size:
        raise ValueError(f"series length mismatch: {x.size} != {y.size}")
    if x.size < 2:
        return 0.0
    dx = x - x.mean()
    dy = y - y.mean()
    den_x = float(np.sum(dx * dx))
    den_y = float(np.sum(dy * dy))
    if den_x == 0 or den_y == 0:
        return 0.0
    r = float(np.sum(dx * dy)) / (math.sqrt(den_x) * math.sqrt(den_y))
    return max(-1.0, min(1.0, r))


def correlation_significance(xs: Sequence[float], ys: Sequence[float]) -> Tuple[float, float]:
    """Return ``(r, p_value)``; ``(0.0, 1.0)`` when the test is not meaningful."""
    x = _arr(xs)
    y = _arr(ys)
    if x.size != y.size:
        raise ValueError(f"series length mismatch: {x.size} != {y.size}")
    if x.size < MIN_SIGNIFICANCE_POINTS:
        return 0.0, 1.0
    if np.std(x) < _STD_EPS or np.std(y) < _STD_EPS:
        return 0.0, 1.0
    r, p = sp_stats.pearsonr(x, y)
    return float(r), float(p)


def linear_trend(series: Sequence[float]) -> float:
    """Second-half average minus first-half average (floor split)."""
    a = _arr(series)
    if a.size < 2:
        return 0.0
    split = a.size // 2
    return float(a[split:].mean() - a[:split].mean())


def volatility(series: Sequence[float]) -> float:
    """Mean absolute day-over-day change."""
    a = _arr(series)
    if a.size < 2:
        return 0.0
    return float(np.mean(np.abs(np.diff(a))))


def consistency_score(xs: Sequence[float]) -> float:
    """``max(0, 1 - sd/mean)``; 0.0 for fewer than two points or a zero mean."""
    xs = list(xs)
    if len(xs) < 2:
        return 0.0
    m = mean(xs)
    if m == 0:
        return 0.0
    return max(0.0, 1.0 - standard_deviation(xs) / m)


def confidence_for(data_points: int) -> float:
    """Tiered confidence from sample size; 0 when there is no data at all."""
    if data_points <= 0:
        return 0.0
    if data_points < 3:
        return 0.3
    if data_points < 7:
        return 0.6
    if data_points < 14:
        return 0.8
    return 0.95
