"""
Statistical primitives shared by the factor analyzers.

All functions accept any numeric sequence, never raise on short or
degenerate input, and never return NaN.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

EPSILON: float = 1e-10  # Prevent division by zero


def _as_array(values: Sequence[float]) -> NDArray[np.float64]:
    return np.asarray(values, dtype=np.float64)


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp value into [lower, upper]."""
    return float(min(upper, max(lower, value)))


def moving_average(values: Sequence[float], period: int) -> NDArray[np.float64]:
    """
    Simple moving average.

    Returns len(values) - period + 1 means, one per full window, or an
    empty array when there are fewer values than the period.
    """
    arr = _as_array(values)
    if period <= 0 or len(arr) < period:
        return np.empty(0, dtype=np.float64)
    kernel = np.ones(period, dtype=np.float64) / period
    return np.convolve(arr, kernel, mode="valid")


def trend(values: Sequence[float]) -> float:
    """
    Least-squares slope of values against their 0-based index.

    Only the sign and magnitude matter to callers, so no intercept is
    returned. Flat series give exactly 0.
    """
    y = _as_array(values)
    n = len(y)
    if n < 2:
        return 0.0

    x = np.arange(n, dtype=np.float64)
    dx = x - x.mean()
    dy = y - y.mean()
    slope = float(np.dot(dx, dy) / np.dot(dx, dx))

    if not np.isfinite(slope) or abs(slope) < EPSILON:
        return 0.0
    return slope


def volatility(prices: Sequence[float]) -> float:
    """
    Population standard deviation of period-over-period returns, in
    percentage points.
    """
    arr = _as_array(prices)
    if len(arr) < 2:
        return 0.0

    previous = arr[:-1]
    valid = previous > 0
    if not valid.any():
        return 0.0

    returns = (arr[1:][valid] - previous[valid]) / previous[valid] * 100
    return float(np.std(returns))


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient.

    Returns 0 for mismatched lengths, fewer than two points, or a constant
    series on either side.
    """
    xa = _as_array(x)
    ya = _as_array(y)
    if len(xa) != len(ya) or len(xa) < 2:
        return 0.0

    dx = xa - xa.mean()
    dy = ya - ya.mean()
    denominator = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if denominator < EPSILON:
        return 0.0

    r = float(np.dot(dx, dy) / denominator)
    if not np.isfinite(r):
        return 0.0
    return clamp(r, -1.0, 1.0)
