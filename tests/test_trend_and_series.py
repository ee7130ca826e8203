import math

import pytest

from pitch_tracker.series import axis_bounds, date_series, scatter_points, trend_segment
from pitch_tracker.trend import linear_regression, predict

from conftest import make_record


def test_regression_on_collinear_points():
    line = linear_regression([1, 2, 3], [2, 4, 6])

    assert line.slope == pytest.approx(2.0, abs=1e-9)
    assert line.intercept == pytest.approx(0.0, abs=1e-9)
    assert predict(line, 10) == pytest.approx(20.0)


def test_regression_with_noise():
    line = linear_regression([0, 1, 2, 3], [1, 3, 2, 4])

    assert line.slope == pytest.approx(0.8)
    assert line.intercept == pytest.approx(1.3)


@pytest.mark.parametrize("xs, ys, intercept", [
    ([], [], 0.0),
    ([2200], [140], 140.0),
    ([2200, 2200, 2200], [130, 140, 150], 140.0),
])
def test_regression_degenerate_inputs_stay_finite(xs, ys, intercept):
    line = linear_regression(xs, ys)

    assert line.slope == 0.0
    assert line.intercept == pytest.approx(intercept)
    assert math.isfinite(line.slope) and math.isfinite(line.intercept)


def test_regression_length_mismatch():
    with pytest.raises(ValueError):
        linear_regression([1, 2], [1])


def test_axis_bounds_pad_ten_percent():
    bounds = axis_bounds([120.0, 140.0], fallback_padding=5.0)
    assert bounds.low == pytest.approx(118.0)
    assert bounds.high == pytest.approx(142.0)


def test_axis_bounds_flat_range_uses_fallback():
    bounds = axis_bounds([2200.0, 2200.0], fallback_padding=100.0)
    assert (bounds.low, bounds.high) == (2100.0, 2300.0)
    assert axis_bounds([], fallback_padding=5.0).high == 5.0


def test_scatter_points_fade_with_age():
    records = [
        make_record(date="2024/05/10", speed=140.0, spin=2300, strike=True),
        make_record(date="2024/05/01", speed=130.0, spin=2200),
        make_record(date="2024/05/05", speed=135.0, spin=2250),
    ]

    points = scatter_points(records)

    assert [p.date for p in points] == ["2024/05/01", "2024/05/05", "2024/05/10"]
    assert [p.alpha for p in points] == pytest.approx([0.3, 0.65, 1.0])
    assert points[-1].strike is True
    assert scatter_points(records[:1])[0].alpha == 1.0


def test_trend_segment_spans_padded_spin_axis():
    records = [
        make_record(speed=130.0, spin=2000),
        make_record(speed=140.0, spin=2200),
        make_record(speed=150.0, spin=2400),
    ]

    segment = trend_segment(records)

    assert segment.x1 == pytest.approx(1960.0)
    assert segment.x2 == pytest.approx(2440.0)
    assert segment.y1 == pytest.approx(128.0)
    assert segment.y2 == pytest.approx(152.0)


def test_date_series_month_labels():
    records = [
        make_record(date="2024/05/02", speed=141.0),
        make_record(date="2024/04/28", speed=140.0),
        make_record(date="2024/05/10", speed=145.0),
        make_record(date="2024/06/01", speed=147.0),
    ]

    series = date_series(records, "speed")

    assert [p.name for p in series] == ["4", "5", "", "6"]
    assert [p.display_date for p in series] == ["4/28", "5/2", "5/10", "6/1"]
    assert [p.value for p in series] == [140.0, 141.0, 145.0, 147.0]


def test_date_series_english_labels():
    records = [make_record(date="2024/05/02", speed=141.0), make_record(date="2024/06/01", speed=147.0)]

    series = date_series(records, "speed", language="en")

    assert [p.display_date for p in series] == ["May 2", "Jun 1"]
    assert [p.name for p in series] == ["5", "6"]
