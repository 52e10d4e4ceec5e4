"""趋势图数据测试。"""
from datetime import datetime

import pytest

from pet_weight.tracker.chart import ChartPoint, chart_points, weight_range
from pet_weight.tracker.models import WeightEntry
from pet_weight.tracker.units import WeightUnit


def test_chart_points_sorted_and_converted() -> None:
    entries = [
        WeightEntry(pet_id="p1", date=datetime(2026, 2, 1), weight=10, unit=WeightUnit.KILOGRAMS),
        WeightEntry(pet_id="p1", date=datetime(2026, 1, 1), weight=20, unit=WeightUnit.POUNDS),
    ]
    points = chart_points(entries, WeightUnit.POUNDS)
    assert [p.date for p in points] == [datetime(2026, 1, 1), datetime(2026, 2, 1)]
    assert points[0].weight == 20
    assert points[1].weight == pytest.approx(22.0462262)


def test_weight_range() -> None:
    assert weight_range([]) == (0.0, 100.0)
    points = [ChartPoint(datetime(2026, 1, d), w) for d, w in ((1, 40.0), (2, 50.0))]
    assert weight_range(points) == pytest.approx((39.0, 51.0))
    single = [ChartPoint(datetime(2026, 1, 1), 12.5)]
    assert weight_range(single) == (12.5, 12.5)


def test_weight_range_lower_bound_not_negative() -> None:
    points = [ChartPoint(datetime(2026, 1, 1), 0.5), ChartPoint(datetime(2026, 1, 2), 30.0)]
    lo, hi = weight_range(points)
    assert lo == 0.0
    assert hi == pytest.approx(32.95)
