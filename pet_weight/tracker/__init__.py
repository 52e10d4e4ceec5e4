"""宠物与体重记录：模型、单位换算、存储与服务。"""
from pet_weight.tracker.errors import InvalidInputError
from pet_weight.tracker.models import Pet, WeightEntry, age_string, latest_entry, sorted_entries
from pet_weight.tracker.service import PetTracker
from pet_weight.tracker.store import PetRepository, PetStore, WeightEntryStore
from pet_weight.tracker.units import WeightChange, WeightUnit, compare, convert, to_kg

__all__ = [
    "InvalidInputError",
    "Pet",
    "WeightEntry",
    "age_string",
    "latest_entry",
    "sorted_entries",
    "PetTracker",
    "PetRepository",
    "PetStore",
    "WeightEntryStore",
    "WeightChange",
    "WeightUnit",
    "compare",
    "convert",
    "to_kg",
]
