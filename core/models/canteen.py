from pydantic import BaseModel, Field, field_validator

HISTORICAL_POOL_COUNT = 4


class CanteenProfile(BaseModel):
    id: int
    canteen_name: str
    hot_dish_count: int = Field(..., ge=1)
    cold_dish_count: int = Field(..., ge=1)
    meal_type: str = "定价餐"
    historical_menus: list[list[str]]

    @field_validator("historical_menus")
    @classmethod
    def _clean_pools(cls, pools: list[list[str]]) -> list[list[str]]:
        if len(pools) != HISTORICAL_POOL_COUNT:
            raise ValueError(f"expected {HISTORICAL_POOL_COUNT} historical menus")
        cleaned = [clean_dishes(pool) for pool in pools]
        if any(not pool for pool in cleaned):
            raise ValueError("historical menus must not be empty")
        return cleaned


def clean_dishes(dishes: list[str]) -> list[str]:
    """Strip whitespace and drop blank dish names, keeping order."""
    return [d.strip() for d in dishes if d and d.strip()]
