#!/usr/bin/env python3
"""
Trim a canteen's generated menus down to the retention window.
Safe to run repeatedly.
Usage:
    python -m scripts.prune_history <canteen_id> [--keep 4]
"""
import argparse
import asyncio

from core.retention import RETENTION_WINDOW, trim_history
from services.db import session_factory


async def prune(canteen_id: int, keep: int) -> None:
    async with session_factory()() as db:
        deleted = await trim_history(db, canteen_id, keep)
    print(f"✓ canteen {canteen_id}: removed {len(deleted)} menus {deleted}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("canteen_id", type=int)
    ap.add_argument("--keep", type=int, default=RETENTION_WINDOW)
    args = ap.parse_args()
    asyncio.run(prune(args.canteen_id, args.keep))


if __name__ == "__main__":
    main()
