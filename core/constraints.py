"""
core/constraints.py
────────────────────────────────────────────────────────────────────────
Maps the enumerated generation options onto the fixed requirement
sentences that go into the kitchen rules of the instruction.

The lookup tables are read-only (`MappingProxyType`) and injected through
`ConstraintTables`, so `map_constraints()` stays a pure function.  Any
value missing from a table raises `ConstraintConfigError`: a dropped
constraint would make the rules disagree with what the user asked for.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from core.models.menu import GenerationParams

EQUIPMENT_SEPARATOR = "；"


class ConstraintConfigError(ValueError):
    """An option value has no entry in the constraint tables."""


@dataclass(frozen=True)
class ConstraintTables:
    equipment: Mapping[str, str]
    no_equipment_shortage: str
    work_ratio: Mapping[str, str]
    staff: Mapping[str, str]
    spicy: Mapping[str, str]
    flavor_diversity: Mapping[bool, str]
    ingredient_diversity: Mapping[str, str]


DEFAULT_TABLES = ConstraintTables(
    equipment=MappingProxyType({
        "steamer": "蒸屉紧缺，不要出现蒸菜",
        "oven": "烤箱紧缺，不要出现烤菜",
        "wok": "炒锅紧缺，出现炒菜不超过(<=)2道",
        "stewpot": "炖锅紧缺，不要出现炖菜",
        "grill": "烧炉紧缺，不要出现烧菜",
    }),
    no_equipment_shortage="所有烹饪设备均充足，蒸屉、烤箱、砂锅、炖锅、烧炉的使用注重均衡协调",
    work_ratio=MappingProxyType({
        "1:1:1": "现炒、一锅出、半成品的比例为1:1:1",
        "1:0.5:0.5": "现炒、一锅出、半成品的比例为1:0.5:0.5",
        "0.5:1:0.5": "现炒、一锅出、半成品的比例为0.5:1:0.5",
        "0.5:0.5:1": "现炒、一锅出、半成品的比例为0.5:0.5:1",
        "none": "无要求",
    }),
    staff=MappingProxyType({
        "scarce": "厨师人手紧缺，需要减少整体刀工复杂度，复杂刀工菜不超过20%",
        "abundant": "厨师人手宽裕，可以出20-33%复杂刀工菜品以体现技术",
    }),
    spicy=MappingProxyType({
        "none": "不要出现辣菜",
        "mild": "微辣，辣菜在总数量占比10-20%",
        "medium": "中辣，辣菜在总数量占比20-30%",
    }),
    flavor_diversity=MappingProxyType({
        True: "在酸、甜、苦、辣、咸、鲜、麻、香、清淡9种风味之中，每餐出现风味不少于5种",
        False: "无要求",
    }),
    ingredient_diversity=MappingProxyType({
        "4": "一餐出品的原材料不少于4种",
        "5": "一餐出品的原材料不少于5种",
        "6": "一餐出品的原材料不少于6种",
        "none": "无要求",
    }),
)


@dataclass(frozen=True)
class ConstraintFragments:
    equipment: str
    work_ratio: str
    staff: str
    spicy: str
    flavor: str
    ingredient: str


def _key(value):
    return value.value if isinstance(value, Enum) else value


def _lookup(table: Mapping, value, category: str) -> str:
    try:
        return table[_key(value)]
    except (KeyError, TypeError):
        raise ConstraintConfigError(f"unknown {category} option: {value!r}") from None


def map_equipment(shortage: Iterable, tables: ConstraintTables = DEFAULT_TABLES) -> str:
    items = list(shortage or [])
    if not items:
        return tables.no_equipment_shortage
    return EQUIPMENT_SEPARATOR.join(
        _lookup(tables.equipment, item, "equipment") for item in items
    )


def map_staff(value, tables: ConstraintTables = DEFAULT_TABLES) -> str:
    return _lookup(tables.staff, value, "staff situation")


def map_spicy(value, tables: ConstraintTables = DEFAULT_TABLES) -> str:
    return _lookup(tables.spicy, value, "spicy level")


def map_flavor(value, tables: ConstraintTables = DEFAULT_TABLES) -> str:
    if not isinstance(value, bool):
        raise ConstraintConfigError(f"unknown flavor diversity option: {value!r}")
    return tables.flavor_diversity[value]


def map_work_ratio(value, tables: ConstraintTables = DEFAULT_TABLES) -> str:
    return _lookup(tables.work_ratio, value, "work ratio")


def map_ingredient(value, tables: ConstraintTables = DEFAULT_TABLES) -> str:
    return _lookup(tables.ingredient_diversity, value, "ingredient diversity")


def map_constraints(
    params: GenerationParams,
    tables: ConstraintTables = DEFAULT_TABLES,
) -> ConstraintFragments:
    return ConstraintFragments(
        equipment=map_equipment(params.equipment_shortage, tables),
        work_ratio=map_work_ratio(params.work_ratio, tables),
        staff=map_staff(params.staff_situation, tables),
        spicy=map_spicy(params.spicy_level, tables),
        flavor=map_flavor(params.flavor_diversity, tables),
        ingredient=map_ingredient(params.ingredient_diversity, tables),
    )
