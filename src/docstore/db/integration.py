from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from .engine import DBEngine
from .settings import DBSettings, get_db_settings

logger = logging.getLogger(__name__)


def attach_db(app: FastAPI, settings: DBSettings | None = None) -> DBEngine:
    """Own one engine for the life of the app.

    Startup pings the database and, when DB_CREATE_TABLES is on, creates the
    schema. A database that cannot be reached at startup is fatal: the process
    exits instead of serving requests that could only fail.
    """
    settings = settings or get_db_settings()
    engine = DBEngine(settings)

    existing = getattr(app.router, "lifespan_context", None)

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        url = engine.engine.url
        sanitized = url.render_as_string(hide_password=True)
        try:
            await engine.ping()
            if settings.create_tables:
                await engine.create_all()
        except (SQLAlchemyError, OSError) as exc:
            logger.critical("Database connection error (%s): %s", sanitized, exc, exc_info=True)
            await engine.dispose()
            raise SystemExit(1) from exc

        _app.state.db_engine = engine  # type: ignore[attr-defined]
        logger.info(
            "DB connected: url=%s driver=%s pool_size=%s max_overflow=%s",
            sanitized,
            url.get_backend_name(),
            settings.pool_size,
            settings.max_overflow,
        )
        try:
            if existing:
                async with existing(_app):  # type: ignore[misc]
                    yield
            else:
                yield
        finally:
            await engine.dispose()
            logger.info("DB engine disposed")

    app.router.lifespan_context = composed_lifespan  # type: ignore[attr-defined]
    return engine
