"""宠物与体重记录本地存储（JSON 文件）。"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pet_weight.config import ENTRIES_DIR, PETS_DIR
from pet_weight.tracker.models import Pet, WeightEntry

logger = logging.getLogger(__name__)

PET_SORT_KEYS = ("name", "species", "birthday", "created_at")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class PetStore:
    """宠物档案存储：每只宠物一个 <pet_id>.json，目录即清单，不另存索引。"""
    _suffix = ".json"

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or PETS_DIR
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _pet_path(self, pet_id: str) -> Path:
        return self.base_dir / f"{pet_id}{self._suffix}"

    def list_ids(self) -> List[str]:
        """目录下所有宠物 ID（按文件名排序）。"""
        return sorted(p.stem for p in self.base_dir.glob(f"*{self._suffix}"))

    def load(self, pet_id: str) -> Optional[Pet]:
        """加载一只宠物（不含体重记录）。"""
        path = self._pet_path(pet_id)
        if not path.is_file():
            return None
        return Pet.model_validate_json(path.read_text(encoding="utf-8"))

    def write(self, pet: Pet) -> None:
        path = self._pet_path(pet.id)
        path.write_text(pet.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("wrote %s", path)

    def remove(self, pet_id: str) -> bool:
        """删除档案文件；不存在返回 False。"""
        path = self._pet_path(pet_id)
        if not path.is_file():
            return False
        path.unlink()
        return True

    def list_all(self) -> List[Pet]:
        return [p for p in map(self.load, self.list_ids()) if p is not None]


class WeightEntryStore:
    """体重记录存储：所有宠物的记录放在同一个 entries.json，按 pet_id 区分。"""
    _filename = "entries.json"

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = data_dir or ENTRIES_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self) -> Path:
        return self.data_dir / self._filename

    def _load_all(self) -> List[WeightEntry]:
        if not self._path().exists():
            return []
        with open(self._path(), "r", encoding="utf-8") as f:
            data = json.load(f)
        return [WeightEntry.model_validate(item) for item in data.get("entries", [])]

    def _save_all(self, entries: List[WeightEntry]) -> None:
        data = {"entries": [e.model_dump(mode="json") for e in entries]}
        with open(self._path(), "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.debug("wrote %d entries to %s", len(entries), self._path())

    def list_for_pet(self, pet_id: str) -> List[WeightEntry]:
        """某宠物的全部记录（按写入顺序）。"""
        return [e for e in self._load_all() if e.pet_id == pet_id]

    def get(self, entry_id: str) -> Optional[WeightEntry]:
        return next((e for e in self._load_all() if e.id == entry_id), None)

    def save(self, entry: WeightEntry) -> None:
        """新增或覆盖一条记录（按 id），保持原位置。"""
        self.save_many([entry])

    def save_many(self, new_entries: List[WeightEntry]) -> None:
        entries = self._load_all()
        positions = {e.id: i for i, e in enumerate(entries)}
        for entry in new_entries:
            if entry.id in positions:
                entries[positions[entry.id]] = entry
            else:
                positions[entry.id] = len(entries)
                entries.append(entry)
        self._save_all(entries)

    def delete(self, entry_id: str) -> bool:
        entries = self._load_all()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._save_all(remaining)
        return True

    def delete_for_pet(self, pet_id: str) -> int:
        """删除某宠物的全部记录，返回删除条数。"""
        entries = self._load_all()
        remaining = [e for e in entries if e.pet_id != pet_id]
        removed = len(entries) - len(remaining)
        if removed:
            self._save_all(remaining)
        return removed


class PetRepository:
    """宠物 + 体重记录的统一读写入口；删除宠物时级联删除其记录。"""

    def __init__(
        self,
        pet_store: Optional[PetStore] = None,
        entry_store: Optional[WeightEntryStore] = None,
    ):
        self.pets = pet_store or PetStore()
        self.entries = entry_store or WeightEntryStore()

    @classmethod
    def at(cls, base_dir: Path) -> "PetRepository":
        """在指定目录下建库（pets/ 与 entries/ 两个子目录）。"""
        return cls(PetStore(base_dir / "pets"), WeightEntryStore(base_dir / "entries"))

    def _attach_entries(self, pet: Pet) -> Pet:
        pet.weight_entries = []
        for entry in self.entries.list_for_pet(pet.id):
            pet.attach(entry)
        return pet

    def _write_pet(self, pet: Pet) -> None:
        """写档案前更新时间戳：首次保存记 created_at，每次保存记 updated_at。"""
        now = _now_iso()
        pet.created_at = pet.created_at or now
        pet.updated_at = now
        self.pets.write(pet)

    def get_pet(self, pet_id: str) -> Optional[Pet]:
        """按 ID 加载宠物并挂上其体重记录。"""
        pet = self.pets.load(pet_id)
        return self._attach_entries(pet) if pet else None

    def list_pets(self, sort_by: str = "name") -> List[Pet]:
        """列出所有宠物（含记录），按 sort_by 升序。"""
        if sort_by not in PET_SORT_KEYS:
            raise ValueError(f"unsupported sort key: {sort_by}")
        pets = [self._attach_entries(p) for p in self.pets.list_all()]
        if sort_by == "name":
            return sorted(pets, key=lambda p: p.name.lower())
        return sorted(pets, key=lambda p: getattr(p, sort_by) or "")

    def save_pet(self, pet: Pet) -> None:
        """保存档案及其当前的全部记录。"""
        self._write_pet(pet)
        self.entries.save_many(pet.weight_entries)

    def update_pet(self, pet: Pet) -> None:
        """只保存档案字段（如默认单位），不动记录。"""
        self._write_pet(pet)

    def save_entry(self, entry: WeightEntry) -> None:
        self.entries.save(entry)

    def delete_entry(self, entry_id: str) -> bool:
        return self.entries.delete(entry_id)

    def delete_pet(self, pet_id: str) -> int:
        """删除宠物并级联删除其全部体重记录，返回删除的记录条数。"""
        removed = self.entries.delete_for_pet(pet_id)
        self.pets.remove(pet_id)
        return removed
