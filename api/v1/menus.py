# api/v1/menus.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.constraints import ConstraintConfigError
from core.menu_audit import audit_week_menu
from core.menu_generator import MAX_ATTEMPTS, GenerationOutcome, MenuGenerator
from core.models.canteen import CanteenProfile
from core.prompt import HISTORICAL_SAMPLE_SLACK, compose_instruction
from core.quota import DishSplitError, check_hot_split
from core.retention import RETENTION_WINDOW, list_recent_menus, save_generated_menu
from services import gemini
from services.auth import current_canteen_id
from services.db import Canteen, GeneratedMenu, get_session
from api.v1.schemas import GenerateRequest, GenerateResponse, MenuHistory, QuotaOut

_LOG = logging.getLogger(__name__)

router = APIRouter()

GENERATION_FAILED = "menu generation failed, please retry later"


def get_menu_generator() -> MenuGenerator:
    return MenuGenerator(
        gemini.generate,
        max_attempts=MAX_ATTEMPTS,
        backoff_s=settings.generation_backoff_s,
    )


async def _load_profile(db: AsyncSession, canteen_id: int) -> CanteenProfile:
    row = await db.get(Canteen, canteen_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Canteen not found")
    try:
        return CanteenProfile.model_validate(row, from_attributes=True)
    except ValidationError as e:
        _LOG.error("canteen %d has malformed profile data: %s", canteen_id, e)
        raise HTTPException(500, "historical menu data is malformed")


async def _record_failures(
    db: AsyncSession, canteen_id: int, prompt: str, outcome: GenerationOutcome
) -> None:
    try:
        for f in outcome.failures:
            await gemini.log_failure_to_db(
                db, canteen_id, f.attempt, f.stage, f.error,
                raw_input=prompt, raw_output=f.raw_output,
            )
    except SQLAlchemyError as e:
        await db.rollback()
        _LOG.error("could not record generation failures: %s", e)


# ───────────────────────── generate ─────────────────────────
@router.post(
    "/generate",
    response_model=GenerateResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate, store and return a five-day lunch menu",
)
async def generate_menu(
    body: GenerateRequest,
    canteen_id: int = Depends(current_canteen_id),
    db: AsyncSession = Depends(get_session),
    generator: MenuGenerator = Depends(get_menu_generator),
) -> GenerateResponse:
    if body.canteen_id != canteen_id:
        raise HTTPException(status_code=403, detail="Not allowed for this canteen")

    profile = await _load_profile(db, canteen_id)
    params = body.params

    # 1) reject bad input before any generator call
    try:
        check_hot_split(
            profile.hot_dish_count,
            params.main_meat_count,
            params.half_meat_count,
            params.vegetarian_count,
        )
        prompt, plan = compose_instruction(
            profile, params, slack=HISTORICAL_SAMPLE_SLACK
        )
    except (DishSplitError, ConstraintConfigError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    # 2) retry loop
    outcome = await generator.run(prompt)
    if outcome.failures:
        await _record_failures(db, canteen_id, prompt, outcome)
    if not outcome.succeeded:
        raise HTTPException(status_code=502, detail=GENERATION_FAILED)

    # 3) advisory quota audit
    audit = audit_week_menu(
        outcome.menu, plan,
        params.main_meat_count, params.half_meat_count, params.vegetarian_count,
    )
    if not audit.ok:
        _LOG.warning("canteen %d: quota drift %s", canteen_id, audit.to_dict())

    # 4) persist + keep the newest few
    record = await save_generated_menu(
        db, canteen_id, outcome.menu, params, keep=RETENTION_WINDOW
    )

    return GenerateResponse(
        menu=outcome.menu,
        menu_id=record.id,
        quota=QuotaOut(
            total_dishes=plan.total_dishes,
            historical_dishes=plan.historical_dishes,
            original_dishes=plan.original_dishes,
            suggested_daily_historical=plan.suggested_daily_historical,
        ),
        audit=audit.to_dict(),
    )


# ───────────────────────── history ──────────────────────────
@router.get(
    "/history",
    response_model=MenuHistory,
    summary="Uploaded historical menus plus the newest generated menus",
)
async def menu_history(
    canteen_id: int = Depends(current_canteen_id),
    db: AsyncSession = Depends(get_session),
) -> MenuHistory:
    canteen = await db.get(Canteen, canteen_id)
    if canteen is None:
        raise HTTPException(status_code=404, detail="Canteen not found")

    menus = await list_recent_menus(db, canteen_id, limit=RETENTION_WINDOW)
    return MenuHistory.model_validate({
        "canteen_name": canteen.canteen_name,
        "uploaded_menus": canteen.historical_menus or [],
        "generated_menus": [
            {
                "id": m.id,
                "canteen_id": m.canteen_id,
                "week_menu": m.week_menu,
                "generation_params": m.generation_params,
                "created_at": m.created_at,
            }
            for m in menus
        ],
    })


@router.delete(
    "/{menu_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one generated menu",
)
async def delete_menu(
    menu_id: int,
    canteen_id: int = Depends(current_canteen_id),
    db: AsyncSession = Depends(get_session),
) -> Response:
    menu = await db.get(GeneratedMenu, menu_id)
    if menu is None or menu.canteen_id != canteen_id:
        raise HTTPException(status_code=404, detail="Menu not found")
    await db.delete(menu)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
