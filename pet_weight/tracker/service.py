"""体重记录服务：新增/编辑/删除宠物与记录，变更后通知界面刷新。"""
import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from pet_weight.tracker.errors import PET_FORM_MESSAGE, WEIGHT_FORM_MESSAGE, InvalidInputError
from pet_weight.tracker.models import INITIAL_ENTRY_NOTES, Pet, WeightEntry
from pet_weight.tracker.store import PetRepository
from pet_weight.tracker.units import WeightUnit
from pet_weight.tracker.validation import parse_weight, require_text

logger = logging.getLogger(__name__)

Listener = Callable[[], None]
WeightInput = Union[str, float, int]


class PetTracker:
    """所有修改都经过这里：先校验，校验通过才改模型并落盘，然后通知监听者。"""

    def __init__(self, repository: Optional[PetRepository] = None):
        self.repository = repository or PetRepository()
        self._listeners: List[Listener] = []

    # ---- 变更通知 ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """注册刷新回调，返回取消订阅函数。"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # 数据已落盘；某个回调出错不影响其他窗口刷新
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("change listener %r failed", listener)

    # ---- 查询 ----

    def pets(self, sort_by: str = "name") -> List[Pet]:
        return self.repository.list_pets(sort_by=sort_by)

    def get_pet(self, pet_id: str) -> Optional[Pet]:
        return self.repository.get_pet(pet_id)

    # ---- 宠物 ----

    def create_pet(
        self,
        name: str,
        birthday: date,
        species: str,
        initial_weight: WeightInput,
        unit: WeightUnit,
    ) -> Pet:
        """新建宠物，同时以当前时间写入第一条体重记录（Initial weight）。"""
        try:
            name = require_text(name, "name", PET_FORM_MESSAGE)
            species = require_text(species, "species", PET_FORM_MESSAGE)
            weight = parse_weight(initial_weight, PET_FORM_MESSAGE)
        except InvalidInputError as e:
            logger.warning("rejected new pet: invalid %s", e.field)
            raise
        unit = WeightUnit(unit)

        pet = Pet(name=name, birthday=birthday, species=species, preferred_unit=unit)
        seed = WeightEntry(
            pet_id=pet.id,
            date=datetime.now(),
            weight=weight,
            unit=unit,
            notes=INITIAL_ENTRY_NOTES,
        )
        pet.attach(seed)
        self.repository.save_pet(pet)
        logger.info("created pet %s (%s) with %s", pet.id, pet.name, seed.display_weight)
        self._notify()
        return pet

    def delete_pet(self, pet: Pet) -> int:
        """删除宠物及其全部记录，返回删除的记录条数。"""
        removed = self.repository.delete_pet(pet.id)
        for entry in list(pet.weight_entries):
            pet.detach(entry.id)
        logger.info("deleted pet %s and %d entries", pet.id, removed)
        self._notify()
        return removed

    def set_preferred_unit(self, pet: Pet, unit: WeightUnit) -> None:
        pet.preferred_unit = WeightUnit(unit)
        self.repository.update_pet(pet)
        logger.info("pet %s preferred unit -> %s", pet.id, pet.preferred_unit.symbol)
        self._notify()

    # ---- 体重记录 ----

    def add_weight_entry(
        self,
        pet: Pet,
        date: datetime,
        weight: WeightInput,
        unit: WeightUnit,
        notes: str = "",
    ) -> WeightEntry:
        """新增一条记录；日期可以早于已有记录。"""
        value = self._parse_entry_weight(weight)
        entry = WeightEntry(
            pet_id=pet.id,
            date=date,
            weight=value,
            unit=WeightUnit(unit),
            notes=(notes or "").strip(),
        )
        pet.attach(entry)
        self.repository.save_entry(entry)
        logger.info("pet %s: added %s on %s", pet.id, entry.display_weight, entry.date.date())
        self._notify()
        return entry

    def edit_weight_entry(
        self,
        entry: WeightEntry,
        date: datetime,
        weight: WeightInput,
        unit: WeightUnit,
        notes: str = "",
    ) -> WeightEntry:
        """原地修改记录；校验失败时记录保持不变。"""
        value = self._parse_entry_weight(weight)
        # 先整体校验一份，再逐字段写回
        updated = WeightEntry(
            pet_id=entry.pet_id,
            date=date,
            weight=value,
            unit=WeightUnit(unit),
            notes=(notes or "").strip(),
        )
        entry.weight = updated.weight
        entry.date = updated.date
        entry.unit = updated.unit
        entry.notes = updated.notes
        self.repository.save_entry(entry)
        logger.info("entry %s updated to %s", entry.id, entry.display_weight)
        self._notify()
        return entry

    def delete_weight_entry(self, entry: WeightEntry, pet: Optional[Pet] = None) -> bool:
        """删除记录，并从所属宠物的列表中移除；记录不存在时返回 False 且不通知。"""
        if pet is not None and pet.id != entry.pet_id:
            raise ValueError(f"entry {entry.id} does not belong to pet {pet.id}")
        owners = [p for p in (pet, entry.pet) if p is not None]
        detached = False
        for owner in owners:
            detached = owner.detach(entry.id) or detached
        removed = self.repository.delete_entry(entry.id) or detached
        if not removed:
            return False
        logger.info("entry %s deleted", entry.id)
        self._notify()
        return True

    def _parse_entry_weight(self, weight: WeightInput) -> float:
        try:
            return parse_weight(weight, WEIGHT_FORM_MESSAGE)
        except InvalidInputError:
            logger.warning("rejected weight entry: %r", weight)
            raise
