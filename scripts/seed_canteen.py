"""
Create the tables (if needed) and seed one canteen with its four
historical menus.

Usage
-----

    # built-in demo pools
    python -m scripts.seed_canteen "一号食堂"

    # pools from a JSON file: [[dish, ...], [dish, ...], [...], [...]]
    python -m scripts.seed_canteen "一号食堂" --file pools.json --hot 8 --cold 3
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from sqlalchemy import select

from core.models.canteen import CanteenProfile
from services.auth import create_token
from services.db import Canteen, init_models, session_factory

# ────────────────────────────────────────────────────────────────────
_DEMO_POOLS: list[list[str]] = [
    ["可乐鸡翅", "青椒肉丝", "清炒时蔬", "凉拌木耳", "红烧肉", "蒜蓉西兰花"],
    ["宫保鸡丁", "麻婆豆腐", "番茄炒蛋", "拍黄瓜", "土豆炖牛肉", "醋溜白菜"],
    ["孜然羊排", "鱼香肉丝", "干煸四季豆", "凉拌海带丝", "糖醋里脊", "蚝油生菜"],
    ["红烧鲷鱼", "青笋炒肉片", "地三鲜", "夫妻肺片", "黄焖鸡", "手撕包菜"],
]


async def _seed(name: str, hot: int, cold: int, pools: list[list[str]]) -> None:
    await init_models()
    async with session_factory()() as db:
        exists = (
            await db.execute(select(Canteen).where(Canteen.canteen_name == name))
        ).scalar_one_or_none()
        if exists:
            print(f"canteen {name!r} already exists (id={exists.id})")
            return

        # run the same checks the generator relies on
        profile = CanteenProfile(
            id=0, canteen_name=name, hot_dish_count=hot,
            cold_dish_count=cold, historical_menus=pools,
        )
        canteen = Canteen(
            canteen_name=name,
            hot_dish_count=hot,
            cold_dish_count=cold,
            historical_menus=profile.historical_menus,
        )
        db.add(canteen)
        await db.commit()
        await db.refresh(canteen)
    print(f"✓ created canteen {name!r} id={canteen.id}")
    print(f"  token: {create_token(canteen.id)}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed a canteen profile")
    ap.add_argument("name")
    ap.add_argument("--file", type=Path, help="JSON file with 4 dish lists")
    ap.add_argument("--hot", type=int, default=8)
    ap.add_argument("--cold", type=int, default=3)
    args = ap.parse_args()

    pools = json.loads(args.file.read_text("utf-8")) if args.file else _DEMO_POOLS
    asyncio.run(_seed(args.name, args.hot, args.cold, pools))


if __name__ == "__main__":
    main()
