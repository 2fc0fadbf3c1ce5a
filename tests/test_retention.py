# tests/test_retention.py
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from config import settings
from core import retention
from core.models.menu import GenerationParams, StaffSituation, WEEKDAYS, WeekMenu
from core.retention import list_recent_menus, save_generated_menu, trim_history
from services.db import GeneratedMenu

MENU = WeekMenu(**{day: ["红烧肉(主荤)", "拍黄瓜(凉菜)"] for day in WEEKDAYS})
PARAMS = GenerationParams(
    main_meat_count=3, half_meat_count=3, vegetarian_count=2,
    staff_situation=StaffSituation.scarce,
)
BASE = datetime(2024, 1, 1, 12, 0, 0)


async def _seed(db, canteen_id: int, n: int) -> list[int]:
    rows = [
        GeneratedMenu(
            canteen_id=canteen_id,
            week_menu=MENU.model_dump(),
            generation_params={},
            created_at=BASE + timedelta(hours=i),
        )
        for i in range(n)
    ]
    db.add_all(rows)
    await db.commit()
    return [r.id for r in rows]


async def _ids(db, canteen_id: int) -> list[int]:
    res = await db.execute(
        select(GeneratedMenu.id)
        .where(GeneratedMenu.canteen_id == canteen_id)
        .order_by(GeneratedMenu.id)
    )
    return list(res.scalars().all())


# ── save + trim ─────────────────────────────────────────────────────
def test_six_existing_plus_new_keeps_four_newest(sessions):
    async def go():
        async with sessions() as db:
            old = await _seed(db, 1, 6)
            new = await save_generated_menu(db, 1, MENU, PARAMS)
            kept = await _ids(db, 1)
            return old, new, kept

    old, new, kept = asyncio.run(go())
    assert kept == old[3:] + [new.id]


def test_trim_twice_is_idempotent(sessions):
    async def go():
        async with sessions() as db:
            await _seed(db, 1, 7)
            first = await trim_history(db, 1)
            second = await trim_history(db, 1)
            return first, second, await _ids(db, 1)

    first, second, kept = asyncio.run(go())
    assert len(first) == 3
    assert second == []
    assert len(kept) == 4


def test_other_canteens_untouched(sessions):
    async def go():
        async with sessions() as db:
            await _seed(db, 1, 6)
            await _seed(db, 2, 6)
            await trim_history(db, 1)
            return await _ids(db, 1), await _ids(db, 2)

    one, two = asyncio.run(go())
    assert len(one) == 4
    assert len(two) == 6


def test_same_timestamp_ties_use_insertion_order(sessions):
    async def go():
        async with sessions() as db:
            rows = [
                GeneratedMenu(canteen_id=1, week_menu={}, generation_params={}, created_at=BASE)
                for _ in range(5)
            ]
            db.add_all(rows)
            await db.commit()
            ids = [r.id for r in rows]
            deleted = await trim_history(db, 1)
            return ids, deleted

    ids, deleted = asyncio.run(go())
    assert deleted == [ids[0]]


def test_saved_record_contents(sessions):
    async def go():
        async with sessions() as db:
            rec = await save_generated_menu(db, 9, MENU, PARAMS)
            recent = await list_recent_menus(db, 9)
            return rec, recent

    rec, recent = asyncio.run(go())
    assert [m.id for m in recent] == [rec.id]
    assert rec.week_menu["monday"] == ["红烧肉(主荤)", "拍黄瓜(凉菜)"]
    assert rec.generation_params["staff_situation"] == "scarce"
    assert rec.created_at is not None


def test_trim_failure_keeps_saved_menu(sessions, monkeypatch):
    async def broken_trim(db, canteen_id, keep=4):
        await db.execute(select(GeneratedMenu.id))
        raise OperationalError("DELETE", {}, Exception("database is locked"))

    monkeypatch.setattr(retention, "trim_history", broken_trim)

    async def go():
        async with sessions() as db:
            await _seed(db, 1, 6)
            rec = await save_generated_menu(db, 1, MENU, PARAMS)
            # attributes stay readable inside the session after the rollback
            loaded = (rec.id, rec.canteen_id, rec.week_menu["friday"])
            return loaded, await _ids(db, 1)

    (rec_id, canteen_id, friday), kept = asyncio.run(go())
    assert rec_id in kept
    assert canteen_id == 1
    assert friday == ["红烧肉(主荤)", "拍黄瓜(凉菜)"]
    assert len(kept) == 7


def test_default_window_comes_from_settings():
    assert retention.RETENTION_WINDOW == settings.menu_retention
