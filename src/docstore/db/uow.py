from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from .engine import DBEngine


class UnitOfWork:
    """One session and one transaction.

    Commits when the block exits cleanly (unless read-only), rolls back otherwise.
    """

    def __init__(self, engine: DBEngine, *, commit_on_success: bool = True):
        self._engine = engine
        self._commit_on_success = commit_on_success
        self.session: AsyncSession | None = None
        self._session_cm = None

    async def __aenter__(self) -> "UnitOfWork":
        self._session_cm = self._engine.session()
        self.session = await self._session_cm.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        assert self.session is not None and self._session_cm is not None
        try:
            if exc_type is None and self._commit_on_success:
                await self.session.commit()
            else:
                await self.session.rollback()
        finally:
            await self._session_cm.__aexit__(exc_type, exc, tb)
        return False
