from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from core.models.menu import GenerationParams, WeekMenu


class GenerateRequest(BaseModel):
    canteen_id: int
    params: GenerationParams


class QuotaOut(BaseModel):
    total_dishes: int
    historical_dishes: int
    original_dishes: int
    suggested_daily_historical: int


class GenerateResponse(BaseModel):
    success: bool = True
    menu: WeekMenu
    menu_id: int
    quota: QuotaOut
    audit: dict


class GeneratedMenuOut(BaseModel):
    id: int
    canteen_id: int
    week_menu: WeekMenu
    generation_params: dict
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MenuHistory(BaseModel):
    canteen_name: str
    uploaded_menus: list[list[str]]
    generated_menus: list[GeneratedMenuOut]
