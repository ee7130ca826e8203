# src/pitch_tracker/series.py
"""
Individual-analysis chart data: speed/spin bars over time and the
spin-vs-speed scatter with its trend line.
"""
from __future__ import annotations

from typing import List, Sequence

from .dates import format_short_date
from .filters import parse_record_date, sort_by_date
from .models import AxisBounds, PitchRecord, ScatterPoint, SeriesPoint, TrendSegment
from .trend import linear_regression, predict

SPEED_FALLBACK_PADDING = 5.0    # kph
SPIN_FALLBACK_PADDING = 100.0   # rpm
PADDING_RATIO = 0.1


def axis_bounds(values: Sequence[float], fallback_padding: float) -> AxisBounds:
    """Min/max widened by 10% of the range, or by ``fallback_padding`` when flat."""
    if values:
        low, high = min(values), max(values)
    else:
        low = high = 0.0
    padding = (high - low) * PADDING_RATIO or fallback_padding
    return AxisBounds(low=low - padding, high=high + padding)


def _point_alpha(index: int, total: int) -> float:
    # older pitches fade, newest is opaque
    if total <= 1:
        return 1.0
    return 0.3 + (index / (total - 1)) * 0.7


def scatter_points(records: Sequence[PitchRecord]) -> List[ScatterPoint]:
    ordered = sort_by_date(records)
    return [
        ScatterPoint(
            spin=float(record.spin),
            speed=record.speed,
            date=record.date,
            strike=record.strike,
            alpha=_point_alpha(index, len(ordered)),
        )
        for index, record in enumerate(ordered)
    ]


def trend_segment(records: Sequence[PitchRecord]) -> TrendSegment:
    """Speed-on-spin regression drawn across the padded spin axis."""
    spins = [float(record.spin) for record in records]
    speeds = [record.speed for record in records]
    line = linear_regression(spins, speeds)
    bounds = axis_bounds(spins, SPIN_FALLBACK_PADDING)
    return TrendSegment(
        x1=bounds.low,
        y1=predict(line, bounds.low),
        x2=bounds.high,
        y2=predict(line, bounds.high),
    )


def date_series(records: Sequence[PitchRecord], field: str, language: str = "ja") -> List[SeriesPoint]:
    """
    One bar per record, oldest first. The month label is only shown where the
    month changes so the x axis reads 4, , , 5, , 6 ...
    Tooltips use the short date for ``language`` ("5/3" or "May 3").
    """
    points = []
    previous_month = None
    for record in sort_by_date(records):
        record_date = parse_record_date(record.date)
        if record_date is None:
            name, display = "", record.date
            month = None
        else:
            month = record_date.month
            name = "" if month == previous_month else str(month)
            display = format_short_date(record_date, language)
        points.append(SeriesPoint(name=name, display_date=display, value=float(getattr(record, field))))
        previous_month = month
    return points
