"""
Tests for the DB lifespan: one engine per app, fatal when unreachable at startup.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI

from docstore.db.integration import attach_db
from docstore.db.settings import DBSettings
from docstore.db.testing import make_sqlite_memory_settings
from docstore.documents.service import DocumentService
from docstore.exceptions import StoreError


@pytest.mark.asyncio
async def test_lifespan_attaches_engine_and_creates_schema():
    app = FastAPI()
    engine = attach_db(app, make_sqlite_memory_settings())

    async with app.router.lifespan_context(app):
        assert app.state.db_engine is engine
        assert await DocumentService(engine).list_all() == []


@pytest.mark.asyncio
async def test_lifespan_can_skip_table_creation():
    app = FastAPI()
    engine = attach_db(app, make_sqlite_memory_settings(create_tables=False))

    async with app.router.lifespan_context(app):
        with pytest.raises(StoreError):
            await DocumentService(engine).list_all()


@pytest.mark.asyncio
async def test_unreachable_database_terminates_startup(tmp_path, caplog):
    app = FastAPI()
    url = f"sqlite+aiosqlite:///{tmp_path}/no/such/dir/files.db"
    attach_db(app, DBSettings(database_url=url))

    with pytest.raises(SystemExit) as excinfo:
        async with app.router.lifespan_context(app):
            pytest.fail("startup should not complete")

    assert excinfo.value.code == 1
    assert "Database connection error" in caplog.text
    assert not hasattr(app.state, "db_engine")


@pytest.mark.asyncio
async def test_existing_lifespan_still_runs():
    from contextlib import asynccontextmanager

    seen = []

    @asynccontextmanager
    async def lifespan(_app):
        seen.append("start")
        yield
        seen.append("stop")

    app = FastAPI(lifespan=lifespan)
    attach_db(app, make_sqlite_memory_settings())

    async with app.router.lifespan_context(app):
        assert seen == ["start"]
    assert seen == ["start", "stop"]
