"""列表与详情页用到的展示文本。"""
from datetime import date, datetime
from typing import Union

from pet_weight.tracker.models import Pet

_SPECIES_ICONS = {
    "dog": "🐶",
    "cat": "🐱",
    "rabbit": "🐰",
    "bird": "🐦",
    "fish": "🐟",
    "tortoise": "🐢",
    "turtle": "🐢",
    "reptile": "🐢",
}
DEFAULT_ICON = "🐾"


def species_icon(species: str) -> str:
    return _SPECIES_ICONS.get(species.strip().lower(), DEFAULT_ICON)


def format_day(value: Union[date, datetime]) -> str:
    """简写日期，如 Oct 18, 2026。"""
    return f"{value:%b} {value.day}, {value.year}"


def format_long_day(value: Union[date, datetime]) -> str:
    """完整日期，如 October 18, 2026。"""
    return f"{value:%B} {value.day}, {value.year}"


def pet_summary(pet: Pet) -> str:
    """宠物列表一行：名字、物种、年龄、最新体重。"""
    latest = pet.latest_entry
    weight = f"{latest.display_weight} · {format_day(latest.date)}" if latest else "No entries"
    return f"{pet.name}\n{pet.species} · {pet.age_string}\n{weight}"
