"""
core/retention.py
────────────────────────────────────────────────────────────────────────
Keeps only the newest `RETENTION_WINDOW` generated menus per canteen.

Saving and trimming are two separate commits.  If the trim fails the
saved menu stays; a canteen briefly holding more than four menus is
harmless and the next successful generation (or
`scripts/prune_history.py`) trims it again.  Trimming is idempotent.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.models.menu import GenerationParams, WeekMenu
from services.db import GeneratedMenu

_LOG = logging.getLogger(__name__)

RETENTION_WINDOW = settings.menu_retention


def _newest_first(canteen_id: int):
    return (
        select(GeneratedMenu)
        .where(GeneratedMenu.canteen_id == canteen_id)
        # id breaks created_at ties in insertion order
        .order_by(GeneratedMenu.created_at.desc(), GeneratedMenu.id.desc())
    )


async def list_recent_menus(
    db: AsyncSession, canteen_id: int, limit: int | None = RETENTION_WINDOW
) -> list[GeneratedMenu]:
    stmt = _newest_first(canteen_id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list((await db.execute(stmt)).scalars().all())


async def delete_menus(db: AsyncSession, ids: Sequence[int]) -> None:
    if not ids:
        return
    await db.execute(delete(GeneratedMenu).where(GeneratedMenu.id.in_(list(ids))))
    await db.commit()


async def trim_history(
    db: AsyncSession, canteen_id: int, keep: int = RETENTION_WINDOW
) -> list[int]:
    """Delete every menu past the `keep` newest; return the deleted ids."""
    menus = await list_recent_menus(db, canteen_id, limit=None)
    stale = [m.id for m in menus[keep:]]
    if stale:
        await delete_menus(db, stale)
        _LOG.info("canteen %d: trimmed menus %s", canteen_id, stale)
    return stale


async def save_generated_menu(
    db: AsyncSession,
    canteen_id: int,
    menu: WeekMenu,
    params: GenerationParams,
    keep: int = RETENTION_WINDOW,
) -> GeneratedMenu:
    record = GeneratedMenu(
        canteen_id=canteen_id,
        week_menu=menu.model_dump(),
        generation_params=params.model_dump(mode="json"),
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    # detached, so a rollback below cannot expire it
    db.expunge(record)

    try:
        await trim_history(db, canteen_id, keep)
    except SQLAlchemyError as e:
        await db.rollback()
        _LOG.error("canteen %d: history trim failed, kept menu %d: %s",
                   canteen_id, record.id, e)
    return record
