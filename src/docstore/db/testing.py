from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from .engine import DBEngine
from .settings import DBSettings

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def make_sqlite_memory_settings(**overrides) -> DBSettings:
    return DBSettings(database_url=MEMORY_URL, echo=False, **overrides)


@asynccontextmanager
async def ephemeral_db() -> AsyncIterator[DBEngine]:
    """In-memory engine with the schema created, disposed on exit."""
    engine = DBEngine(make_sqlite_memory_settings())
    await engine.create_all()
    try:
        yield engine
    finally:
        await engine.dispose()
