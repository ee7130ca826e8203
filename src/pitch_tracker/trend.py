# src/pitch_tracker/trend.py
from __future__ import annotations

from typing import Sequence

import numpy as np

from .models import TrendLine


def linear_regression(xs: Sequence[float], ys: Sequence[float]) -> TrendLine:
    """
    Ordinary least squares fit of ``ys`` on ``xs``.

    Degenerate input never produces NaN: no points give a flat line at 0, and
    a single point or identical x values give a flat line through mean(ys).
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys differ in length ({len(xs)} != {len(ys)})")

    n = len(xs)
    if n == 0:
        return TrendLine(slope=0.0, intercept=0.0)

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    denominator = n * sum_x2 - sum_x * sum_x
    if n < 2 or denominator == 0:
        return TrendLine(slope=0.0, intercept=float(sum_y / n))

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return TrendLine(slope=float(slope), intercept=float(intercept))


def predict(line: TrendLine, x: float) -> float:
    return line.slope * x + line.intercept
