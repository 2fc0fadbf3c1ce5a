from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.canteen import HISTORICAL_POOL_COUNT, clean_dishes


class CanteenCreate(BaseModel):
    canteen_name: str = Field(..., min_length=1)
    hot_dish_count: int = Field(8, ge=1)
    cold_dish_count: int = Field(3, ge=1)
    meal_type: str = "定价餐"
    historical_menus: list[list[str]] = Field(
        ..., min_length=HISTORICAL_POOL_COUNT, max_length=HISTORICAL_POOL_COUNT
    )

    @field_validator("historical_menus")
    @classmethod
    def _non_empty_pools(cls, pools: list[list[str]]) -> list[list[str]]:
        cleaned = [clean_dishes(p) for p in pools]
        if any(not p for p in cleaned):
            raise ValueError("each historical menu needs at least one dish")
        return cleaned


class CanteenOut(BaseModel):
    id: int
    canteen_name: str
    hot_dish_count: int
    cold_dish_count: int
    meal_type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CanteenCreated(BaseModel):
    canteen: CanteenOut
    token: str


class HistoricalMenuUpdate(BaseModel):
    dishes: list[str]


class HistoricalMenuUpdated(BaseModel):
    menu_index: int
    new_dishes: list[str]
    dish_count: int
