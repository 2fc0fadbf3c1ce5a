# tests/test_constraints.py
from __future__ import annotations

from itertools import combinations

import pytest

from core.constraints import (
    DEFAULT_TABLES,
    EQUIPMENT_SEPARATOR,
    ConstraintConfigError,
    map_constraints,
    map_equipment,
    map_flavor,
    map_ingredient,
    map_spicy,
    map_staff,
    map_work_ratio,
)
from core.models.menu import (
    Equipment,
    GenerationParams,
    IngredientDiversity,
    SpicyLevel,
    StaffSituation,
    WorkRatio,
)

PARAMS = GenerationParams(
    main_meat_count=3,
    half_meat_count=3,
    vegetarian_count=2,
    staff_situation=StaffSituation.scarce,
    historical_ratio=30,
    equipment_shortage=[Equipment.oven, Equipment.wok],
    spicy_level=SpicyLevel.mild,
    flavor_diversity=True,
    work_ratio=WorkRatio.balanced,
    ingredient_diversity=IngredientDiversity.at_least_5,
)


# ── every enum member has a fragment ────────────────────────────────
@pytest.mark.parametrize("item", list(Equipment))
def test_each_equipment_maps_to_fragment(item):
    assert map_equipment([item])


@pytest.mark.parametrize(
    "mapper,enum",
    [
        (map_staff, StaffSituation),
        (map_spicy, SpicyLevel),
        (map_work_ratio, WorkRatio),
        (map_ingredient, IngredientDiversity),
    ],
)
def test_each_enum_member_maps_to_fragment(mapper, enum):
    for member in enum:
        assert mapper(member)
        assert mapper(member.value) == mapper(member)


def test_flavor_both_values():
    assert map_flavor(True)
    assert map_flavor(False)
    assert map_flavor(True) != map_flavor(False)


# ── equipment combinations ──────────────────────────────────────────
def test_no_shortage_uses_default_fragment():
    assert map_equipment([]) == DEFAULT_TABLES.no_equipment_shortage


@pytest.mark.parametrize("pair", list(combinations(Equipment, 2)))
def test_multi_select_joins_every_fragment(pair):
    joined = map_equipment(pair)
    assert EQUIPMENT_SEPARATOR in joined
    for item in pair:
        assert DEFAULT_TABLES.equipment[item.value] in joined


def test_all_five_shortages_joined():
    joined = map_equipment(list(Equipment))
    assert joined.count(EQUIPMENT_SEPARATOR) == 4


# ── unknown values fail fast ────────────────────────────────────────
@pytest.mark.parametrize(
    "mapper,bad",
    [
        (map_staff, "plenty"),
        (map_spicy, "extreme"),
        (map_work_ratio, "2:1:1"),
        (map_ingredient, "7"),
        (map_flavor, "yes"),
    ],
)
def test_unknown_value_raises(mapper, bad):
    with pytest.raises(ConstraintConfigError):
        mapper(bad)


def test_unknown_equipment_in_selection_raises():
    with pytest.raises(ConstraintConfigError):
        map_equipment(["oven", "microwave"])


def test_unknown_value_via_params_raises():
    bad = PARAMS.model_copy(update={"spicy_level": "extreme"})
    with pytest.raises(ConstraintConfigError):
        map_constraints(bad)


# ── tables are read-only ────────────────────────────────────────────
def test_tables_are_immutable():
    with pytest.raises(TypeError):
        DEFAULT_TABLES.spicy["hot"] = "很辣"


def test_map_constraints_fills_every_field():
    frags = map_constraints(PARAMS)
    assert frags.staff == DEFAULT_TABLES.staff["scarce"]
    assert frags.spicy == DEFAULT_TABLES.spicy["mild"]
    assert DEFAULT_TABLES.equipment["oven"] in frags.equipment
    assert DEFAULT_TABLES.equipment["wok"] in frags.equipment
    assert frags.work_ratio and frags.flavor and frags.ingredient
