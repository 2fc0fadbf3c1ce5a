from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, Field

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


class StaffSituation(str, Enum):
    scarce = "scarce"
    abundant = "abundant"


class SpicyLevel(str, Enum):
    none = "none"
    mild = "mild"
    medium = "medium"


class Equipment(str, Enum):
    steamer = "steamer"
    oven = "oven"
    wok = "wok"
    stewpot = "stewpot"
    grill = "grill"


class WorkRatio(str, Enum):
    """Fresh-fried : one-pot : semi-prepared."""
    balanced = "1:1:1"
    fresh_heavy = "1:0.5:0.5"
    one_pot_heavy = "0.5:1:0.5"
    prepared_heavy = "0.5:0.5:1"
    no_requirement = "none"


class IngredientDiversity(str, Enum):
    at_least_4 = "4"
    at_least_5 = "5"
    at_least_6 = "6"
    no_requirement = "none"


class GenerationParams(BaseModel):
    main_meat_count: int = Field(..., ge=1)
    half_meat_count: int = Field(..., ge=1)
    vegetarian_count: int = Field(..., ge=1)
    staff_situation: StaffSituation
    historical_ratio: int = Field(30, ge=0, le=100, examples=[0, 30, 50, 70])
    equipment_shortage: list[Equipment] = []
    spicy_level: SpicyLevel = SpicyLevel.none
    flavor_diversity: bool = False
    work_ratio: WorkRatio = WorkRatio.no_requirement
    ingredient_diversity: IngredientDiversity = IngredientDiversity.no_requirement


class WeekMenu(BaseModel):
    monday: list[str]
    tuesday: list[str]
    wednesday: list[str]
    thursday: list[str]
    friday: list[str]

    def days(self) -> list[tuple[str, list[str]]]:
        return [(day, getattr(self, day)) for day in WEEKDAYS]
