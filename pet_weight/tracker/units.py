"""体重单位与换算：磅 / 千克，以及前后两次记录的变化比较。"""
from enum import Enum

from pydantic import BaseModel, Field

# 1 磅 = 0.45359237 千克（国际磅，精确值）
KG_PER_POUND = 0.45359237


class WeightUnit(str, Enum):
    """体重单位。取值即显示符号。"""
    POUNDS = "lbs"
    KILOGRAMS = "kg"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return "Pounds" if self is WeightUnit.POUNDS else "Kilograms"

    @property
    def kg_factor(self) -> float:
        """1 个该单位等于多少千克。"""
        return KG_PER_POUND if self is WeightUnit.POUNDS else 1.0


def to_kg(weight: float, unit: WeightUnit) -> float:
    """换算为千克，用于跨单位比较。"""
    return weight * WeightUnit(unit).kg_factor


def convert(weight: float, from_unit: WeightUnit, to_unit: WeightUnit) -> float:
    """单位换算；同单位原样返回。"""
    from_unit, to_unit = WeightUnit(from_unit), WeightUnit(to_unit)
    if from_unit == to_unit:
        return weight
    return weight * from_unit.kg_factor / to_unit.kg_factor


def format_weight(weight: float, unit: WeightUnit) -> str:
    """保留一位小数并带单位，如 45.0 lbs。"""
    return f"{weight:.1f} {WeightUnit(unit).symbol}"


class WeightChange(BaseModel):
    """与上一条记录的差值（千克）与百分比变化。"""
    difference_kg: float = Field(..., description="当前 - 上一次，千克")
    percent_change: float = Field(..., description="相对上一次的百分比；上一次为 0 时为 0")

    @property
    def direction(self) -> str:
        if self.difference_kg > 0:
            return "increase"
        if self.difference_kg < 0:
            return "decrease"
        return "none"

    def difference_in(self, unit: WeightUnit) -> float:
        return convert(self.difference_kg, WeightUnit.KILOGRAMS, unit)

    def describe(self, unit: WeightUnit) -> str:
        """界面展示文本，差值以 unit 显示，如 +0.9 kg (4.4% increase)。"""
        if self.direction == "none":
            return "No change"
        sign = "+" if self.direction == "increase" else ""
        amount = format_weight(abs(self.difference_in(unit)), unit)
        return f"{sign}{amount} ({abs(self.percent_change):.1f}% {self.direction})"


def compare(
    current_weight: float,
    current_unit: WeightUnit,
    previous_weight: float,
    previous_unit: WeightUnit,
) -> WeightChange:
    """比较两次体重：先统一换算为千克再相减。"""
    current = to_kg(current_weight, current_unit)
    previous = to_kg(previous_weight, previous_unit)
    difference = current - previous
    # 上一次为 0（或异常负值）时不计算百分比
    percent = difference / previous * 100 if previous > 0 else 0.0
    return WeightChange(difference_kg=difference, percent_change=percent)
