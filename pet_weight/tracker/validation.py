"""表单字段校验：体重必须是正数，名字/物种不能为空。"""
import math
from typing import Union

from pet_weight.tracker.errors import WEIGHT_FORM_MESSAGE, InvalidInputError


def parse_weight(value: Union[str, float, int, None], message: str = WEIGHT_FORM_MESSAGE) -> float:
    """把输入框文本或数字解析为体重。空、非数字、非有限值或 <= 0 都拒绝。"""
    if value is None or isinstance(value, bool):
        raise InvalidInputError(message, field="weight")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidInputError(message, field="weight")
    try:
        weight = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(message, field="weight") from None
    if not math.isfinite(weight) or weight <= 0:
        raise InvalidInputError(message, field="weight")
    return weight


def require_text(value: Union[str, None], field: str, message: str) -> str:
    """去掉首尾空白后不能为空。"""
    text = (value or "").strip()
    if not text:
        raise InvalidInputError(message, field=field)
    return text
