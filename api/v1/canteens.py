from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.canteen import HISTORICAL_POOL_COUNT, clean_dishes
from services.auth import create_token, current_canteen_id
from services.db import Canteen, get_session
from api.v1.schemas import (
    CanteenCreate,
    CanteenCreated,
    CanteenOut,
    HistoricalMenuUpdate,
    HistoricalMenuUpdated,
)

router = APIRouter()


# ───────────────────────── create ──────────────────────────
@router.post(
    "",
    response_model=CanteenCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_canteen(
    body: CanteenCreate,
    db: AsyncSession = Depends(get_session),
) -> CanteenCreated:
    existing = (
        await db.execute(
            select(Canteen).where(Canteen.canteen_name == body.canteen_name)
        )
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=409, detail="Canteen already exists")

    canteen = Canteen(**body.model_dump())
    db.add(canteen)
    await db.commit()
    await db.refresh(canteen)
    return CanteenCreated(
        canteen=CanteenOut.model_validate(canteen, from_attributes=True),
        token=create_token(canteen.id),
    )


# ───────────────────────── fetch own ────────────────────────
@router.get("/me", response_model=CanteenOut)
async def fetch_canteen(
    canteen_id: int = Depends(current_canteen_id),
    db: AsyncSession = Depends(get_session),
) -> CanteenOut:
    canteen = await db.get(Canteen, canteen_id)
    if canteen is None:
        raise HTTPException(status_code=404, detail="Canteen not found")
    return CanteenOut.model_validate(canteen, from_attributes=True)


# ──────────────────── replace one historical menu ───────────
@router.put(
    "/me/historical-menus/{menu_index}",
    response_model=HistoricalMenuUpdated,
)
async def update_historical_menu(
    body: HistoricalMenuUpdate,
    menu_index: int = Path(..., ge=0, le=HISTORICAL_POOL_COUNT - 1),
    canteen_id: int = Depends(current_canteen_id),
    db: AsyncSession = Depends(get_session),
) -> HistoricalMenuUpdated:
    dishes = clean_dishes(body.dishes)
    if not dishes:
        raise HTTPException(status_code=400, detail="dish list must not be empty")

    canteen = await db.get(Canteen, canteen_id)
    if canteen is None:
        raise HTTPException(status_code=404, detail="Canteen not found")

    pools = list(canteen.historical_menus or [])
    if len(pools) != HISTORICAL_POOL_COUNT:
        raise HTTPException(500, "historical menu data is malformed")

    pools[menu_index] = dishes
    canteen.historical_menus = pools      # reassign so the JSON column is flagged dirty
    await db.commit()

    return HistoricalMenuUpdated(
        menu_index=menu_index, new_dishes=dishes, dish_count=len(dishes)
    )
