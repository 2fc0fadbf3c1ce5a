"""Shared fixtures: a throw-away SQLite database per test."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from services.db import init_models


@pytest.fixture
def sessions(tmp_path):
    """async_sessionmaker bound to a fresh file database.

    NullPool so every session opens its connection on the running loop;
    tests drive coroutines with separate `asyncio.run` calls.
    """
    eng = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )
    asyncio.run(init_models(eng))
    yield async_sessionmaker(eng, expire_on_commit=False)
    asyncio.run(eng.dispose())
