"""
Closed-form statistics helpers used by the forecasting and anomaly components.
"""

import numpy as np

__all__ = ["linear_regression", "mean", "population_std", "z_score"]


def linear_regression(x, y) -> tuple[float, float]:
    """
    Ordinary least squares fit of ``y = slope * x + intercept``.

    Uses the closed-form sums (Σx, Σy, Σxy, Σx²). Returns ``(0.0, 0.0)``
    when the denominator ``n·Σx² − (Σx)²`` is zero (fewer than two distinct
    x values).
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    if xs.shape != ys.shape:
        raise ValueError(f"x and y must have the same length, got {xs.size} and {ys.size}")

    n = xs.size
    if n == 0:
        return 0.0, 0.0

    sum_x = xs.sum()
    sum_y = ys.sum()
    sum_xy = (xs * ys).sum()
    sum_xx = (xs * xs).sum()

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return 0.0, 0.0

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def mean(values) -> float:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def population_std(values) -> float:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.std())


def z_score(value: float, mu: float, sigma: float) -> float:
    if sigma == 0:
        return 0.0
    return (value - mu) / sigma
