"""趋势图数据：按日期排序，统一换算到宠物的默认单位。"""
from datetime import datetime
from typing import Iterable, List, NamedTuple, Tuple

from pet_weight.config import CHART_DEFAULT_RANGE, CHART_PADDING_RATIO
from pet_weight.tracker.models import WeightEntry, sorted_entries
from pet_weight.tracker.units import WeightUnit, convert


class ChartPoint(NamedTuple):
    date: datetime
    weight: float


def chart_points(entries: Iterable[WeightEntry], unit: WeightUnit) -> List[ChartPoint]:
    return [ChartPoint(e.date, convert(e.weight, e.unit, unit)) for e in sorted_entries(entries)]


def weight_range(points: List[ChartPoint]) -> Tuple[float, float]:
    """纵轴范围：上下各留 10% 余量，下限不低于 0；没有数据时为 (0, 100)。"""
    if not points:
        return CHART_DEFAULT_RANGE
    weights = [p.weight for p in points]
    lo, hi = min(weights), max(weights)
    padding = (hi - lo) * CHART_PADDING_RATIO
    return max(0.0, lo - padding), hi + padding
