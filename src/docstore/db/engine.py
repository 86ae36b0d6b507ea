from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .base import Base
from .settings import DBSettings


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def _install_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII; icontains compiles to lower() LIKE lower()
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class DBEngine:
    """Holds the process-wide async engine and its session factory."""

    def __init__(self, settings: DBSettings):
        self.settings = settings
        url = settings.resolved_database_url
        engine_kwargs: dict[str, Any] = {
            "echo": settings.echo,
            "pool_pre_ping": True,
        }
        is_sqlite = url.startswith("sqlite+aiosqlite://")
        if is_sqlite:
            if ":memory:" in url:
                # one shared connection, otherwise each session sees an empty db
                engine_kwargs["poolclass"] = StaticPool
                engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_size"] = settings.pool_size
            engine_kwargs["max_overflow"] = settings.max_overflow
            engine_kwargs["pool_recycle"] = settings.pool_recycle or 1800
            engine_kwargs["pool_timeout"] = settings.pool_timeout

        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _install_sqlite_functions)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self._engine, expire_on_commit=False
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        sess = self._session_factory()
        try:
            yield sess
        finally:
            await sess.close()

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("select 1"))

    async def create_all(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()
