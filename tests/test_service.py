"""PetTracker 操作测试：新建、增改删记录、级联删除、输入校验、变更通知。"""
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from pet_weight.tracker.errors import InvalidInputError
from pet_weight.tracker.models import INITIAL_ENTRY_NOTES
from pet_weight.tracker.service import PetTracker
from pet_weight.tracker.store import PetRepository
from pet_weight.tracker.units import WeightUnit, compare


def _tracker(tmp: str) -> PetTracker:
    return PetTracker(PetRepository.at(Path(tmp)))


def test_create_pet_adds_seed_entry_and_compare_scenario() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        birthday = date.today() - timedelta(days=400)
        pet = tracker.create_pet("  Max ", birthday, "Dog", "45", WeightUnit.POUNDS)

        assert pet.name == "Max"
        assert pet.preferred_unit == WeightUnit.POUNDS
        assert pet.age_string == "1 year old"
        assert len(pet.weight_entries) == 1
        seed = pet.weight_entries[0]
        assert seed.notes == INITIAL_ENTRY_NOTES
        assert seed.weight == 45
        assert seed.unit == WeightUnit.POUNDS
        assert seed.pet_id == pet.id

        later = tracker.add_weight_entry(pet, seed.date + timedelta(weeks=1), 47, WeightUnit.POUNDS)
        assert pet.latest_entry is later

        change = compare(later.weight, later.unit, seed.weight, seed.unit)
        assert change.difference_kg == pytest.approx(0.907, abs=1e-3)
        assert change.percent_change == pytest.approx(4.44, abs=1e-2)

        stored = tracker.get_pet(pet.id)
        assert [e.weight for e in stored.sorted_entries] == [45, 47]


@pytest.mark.parametrize(
    "name,species,weight",
    [("", "Dog", "10"), ("   ", "Dog", "10"), ("Max", "", "10"), ("Max", "Dog", ""),
     ("Max", "Dog", "abc"), ("Max", "Dog", "-5"), ("Max", "Dog", "0"), ("Max", "Dog", "nan")],
)
def test_create_pet_rejects_invalid_input(name: str, species: str, weight: str) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        with pytest.raises(InvalidInputError) as exc:
            tracker.create_pet(name, date(2025, 1, 1), species, weight, WeightUnit.KILOGRAMS)
        assert str(exc.value) == "Please fill in all fields correctly."
        assert tracker.pets() == []


@pytest.mark.parametrize("weight", ["-5", "abc", "", "  ", 0, -1.5, "inf"])
def test_add_entry_rejects_invalid_weight(weight) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        with pytest.raises(InvalidInputError) as exc:
            tracker.add_weight_entry(pet, datetime(2026, 1, 1), weight, WeightUnit.KILOGRAMS)
        assert str(exc.value) == "Please enter a valid weight."
        assert len(pet.weight_entries) == 1
        assert len(tracker.get_pet(pet.id).weight_entries) == 1


def test_entries_may_be_added_out_of_order() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2020, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        old = tracker.add_weight_entry(pet, datetime(2021, 6, 1), " 18.5 ", WeightUnit.KILOGRAMS, "  vet visit ")
        assert old.notes == "vet visit"
        assert old.weight == 18.5
        assert pet.sorted_entries[0] is old
        assert pet.latest_entry is not old


def test_edit_entry_in_place_and_rejects_invalid() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 45, WeightUnit.POUNDS)
        entry = pet.weight_entries[0]
        new_day = datetime(2026, 2, 1, 9, 0)
        tracker.edit_weight_entry(entry, new_day, "20.2", WeightUnit.KILOGRAMS, "after walk")
        assert (entry.weight, entry.unit, entry.date, entry.notes) == (20.2, WeightUnit.KILOGRAMS, new_day, "after walk")
        assert tracker.get_pet(pet.id).weight_entries[0].weight == 20.2

        with pytest.raises(InvalidInputError):
            tracker.edit_weight_entry(entry, datetime(2026, 3, 1), "abc", WeightUnit.POUNDS, "x")
        assert (entry.weight, entry.unit, entry.date, entry.notes) == (20.2, WeightUnit.KILOGRAMS, new_day, "after walk")


def test_delete_entry_and_pet_cascade() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        extra = [tracker.add_weight_entry(pet, datetime(2026, 1, d), 20 + d, WeightUnit.KILOGRAMS) for d in (1, 2, 3)]

        assert tracker.delete_weight_entry(extra[0], pet) is True
        assert extra[0] not in pet.weight_entries
        assert len(tracker.get_pet(pet.id).weight_entries) == 3

        assert tracker.delete_pet(pet) == 3
        assert tracker.get_pet(pet.id) is None
        assert tracker.repository.entries.list_for_pet(pet.id) == []


def test_delete_entry_from_wrong_pet() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        max_ = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        bella = tracker.create_pet("Bella", date(2025, 1, 1), "Cat", 4, WeightUnit.KILOGRAMS)
        with pytest.raises(ValueError):
            tracker.delete_weight_entry(max_.weight_entries[0], bella)


def test_set_preferred_unit_persists() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 45, WeightUnit.POUNDS)
        tracker.set_preferred_unit(pet, WeightUnit.KILOGRAMS)
        stored = tracker.get_pet(pet.id)
        assert stored.preferred_unit == WeightUnit.KILOGRAMS
        # 只改显示单位，不改已存的数值
        assert stored.weight_entries[0].weight == 45
        assert stored.weight_entries[0].unit == WeightUnit.POUNDS


def test_listeners_fire_on_success_only() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        calls = []
        unsubscribe = tracker.subscribe(lambda: calls.append(1))
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        assert len(calls) == 1
        with pytest.raises(InvalidInputError):
            tracker.add_weight_entry(pet, datetime(2026, 1, 1), "abc", WeightUnit.KILOGRAMS)
        assert len(calls) == 1
        tracker.add_weight_entry(pet, datetime(2026, 1, 1), 21, WeightUnit.KILOGRAMS)
        assert len(calls) == 2
        unsubscribe()
        tracker.set_preferred_unit(pet, WeightUnit.POUNDS)
        assert len(calls) == 2


def test_delete_entry_without_pet_prunes_owner_list() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        entry = tracker.add_weight_entry(pet, datetime(2026, 1, 1), 21, WeightUnit.KILOGRAMS)
        assert entry.pet is pet

        assert tracker.delete_weight_entry(entry) is True
        assert entry not in pet.weight_entries
        assert [e.id for e in pet.weight_entries] == [e.id for e in tracker.get_pet(pet.id).weight_entries]
        assert entry.pet is None


def test_delete_reloaded_entry_without_pet() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        created = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        pet = tracker.get_pet(created.id)
        entry = pet.weight_entries[0]
        assert entry.pet is pet

        assert tracker.delete_weight_entry(entry) is True
        assert pet.weight_entries == []
        assert tracker.get_pet(pet.id).weight_entries == []


def test_delete_missing_entry_is_silent() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        entry = tracker.add_weight_entry(pet, datetime(2026, 1, 1), 21, WeightUnit.KILOGRAMS)
        assert tracker.delete_weight_entry(entry, pet) is True

        calls = []
        tracker.subscribe(lambda: calls.append(1))
        assert tracker.delete_weight_entry(entry, pet) is False
        assert tracker.delete_weight_entry(entry) is False
        assert calls == []


def test_failing_listener_does_not_block_others(caplog) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tracker = _tracker(tmp)
        calls = []

        def broken() -> None:
            raise RuntimeError("window gone")

        tracker.subscribe(broken)
        tracker.subscribe(lambda: calls.append(1))
        with caplog.at_level("ERROR", logger="pet_weight.tracker.service"):
            pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        assert calls == [1]
        assert tracker.get_pet(pet.id) is not None
        assert any("listener" in r.getMessage() for r in caplog.records)
