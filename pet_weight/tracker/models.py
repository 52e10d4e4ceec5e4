"""宠物与体重记录数据模型。"""
import uuid
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from pet_weight.tracker.units import WeightUnit, format_weight, to_kg

INITIAL_ENTRY_NOTES = "Initial weight"


def new_id() -> str:
    return uuid.uuid4().hex


class WeightEntry(BaseModel):
    """一次体重测量，属于某一只宠物。"""
    id: str = Field(default_factory=new_id, frozen=True, description="记录唯一 ID")
    pet_id: str = Field(..., description="所属宠物 ID")
    weight: float = Field(..., gt=0, description="体重数值")
    unit: WeightUnit = Field(..., description="记录时使用的单位")
    notes: str = Field("", description="备注")
    date: datetime = Field(..., description="测量时间（本地时间）")

    model_config = ConfigDict(validate_assignment=True)
    # 所属宠物对象，仅在内存中；由 Pet.attach 设置
    _pet: Optional["Pet"] = PrivateAttr(default=None)

    @property
    def pet(self) -> Optional["Pet"]:
        return self._pet

    @property
    def display_weight(self) -> str:
        return format_weight(self.weight, self.unit)

    @property
    def weight_in_kg(self) -> float:
        return to_kg(self.weight, self.unit)


class Pet(BaseModel):
    """宠物档案；weight_entries 由仓库加载，不写入宠物自身的 JSON。"""
    id: str = Field(default_factory=new_id, frozen=True, description="宠物唯一 ID")
    name: str = Field(..., min_length=1, description="名字")
    birthday: date = Field(..., description="生日")
    species: str = Field(..., min_length=1, description="物种，自由填写")
    preferred_unit: WeightUnit = Field(WeightUnit.POUNDS, description="默认显示单位")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")
    weight_entries: List[WeightEntry] = Field(default_factory=list, exclude=True)

    model_config = ConfigDict(validate_assignment=True)

    def attach(self, entry: WeightEntry) -> WeightEntry:
        """把记录挂到本宠物的列表上，并设置记录的反向引用。"""
        if entry.pet_id != self.id:
            raise ValueError(f"entry {entry.id} belongs to pet {entry.pet_id}, not {self.id}")
        entry._pet = self
        if all(e.id != entry.id for e in self.weight_entries):
            self.weight_entries.append(entry)
        return entry

    def detach(self, entry_id: str) -> bool:
        """从列表中移除记录；不在列表中返回 False。"""
        for i, e in enumerate(self.weight_entries):
            if e.id == entry_id:
                del self.weight_entries[i]
                e._pet = None
                return True
        return False

    @property
    def sorted_entries(self) -> List[WeightEntry]:
        return sorted_entries(self.weight_entries)

    @property
    def latest_entry(self) -> Optional[WeightEntry]:
        return latest_entry(self.weight_entries)

    @property
    def age_string(self) -> str:
        return age_string(self.birthday)


def sorted_entries(entries: Iterable[WeightEntry]) -> List[WeightEntry]:
    """按日期升序；同一时间保持原有顺序。"""
    return sorted(entries, key=lambda e: e.date)


def latest_entry(entries: Iterable[WeightEntry]) -> Optional[WeightEntry]:
    """日期最新的一条；没有记录返回 None。"""
    ordered = sorted_entries(entries)
    return ordered[-1] if ordered else None


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def _full_months(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def age_string(birthday: Union[date, datetime], now: Union[date, datetime, None] = None) -> str:
    """年龄文本：满一年按年，满一个月按月，否则 Just born。"""
    today = _as_date(now) if now is not None else date.today()
    months = _full_months(_as_date(birthday), today)
    years = months // 12
    if years > 0:
        return f"{years} year{'' if years == 1 else 's'} old"
    if months > 0:
        return f"{months} month{'' if months == 1 else 's'} old"
    return "Just born"
