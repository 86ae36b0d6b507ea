"""
Root conftest.py for docstore tests.

Fixtures are organized by category:
- Database fixtures (in-memory SQLite engine, store bound to a session)
- Service fixtures
- API fixtures (FastAPI app, TestClient with the lifespan running)
"""

from __future__ import annotations

from typing import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from starlette.testclient import TestClient

from docstore.api.fastapi import create_app
from docstore.app.settings import AppSettings
from docstore.db.engine import DBEngine
from docstore.db.testing import ephemeral_db, make_sqlite_memory_settings
from docstore.db.uow import UnitOfWork
from docstore.documents.schemas import DocumentInput
from docstore.documents.service import DocumentService
from docstore.documents.store import DocumentStore


def pytest_collection_modifyitems(config, items):
    """Tests under tests/acceptance/ get the `acceptance` marker."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "/tests/acceptance/" in norm:
            item.add_marker(pytest.mark.acceptance)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[DBEngine]:
    """Fresh in-memory database with the schema created."""
    async with ephemeral_db() as eng:
        yield eng


@pytest_asyncio.fixture
async def store(engine: DBEngine) -> AsyncIterator[DocumentStore]:
    """A store bound to one unit of work that commits when the test ends."""
    async with UnitOfWork(engine) as uow:
        yield DocumentStore(uow.session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def service(engine: DBEngine) -> DocumentService:
    return DocumentService(engine)


@pytest.fixture
def make_input():
    """Factory for DocumentInput with sensible defaults."""

    def _make(**overrides) -> DocumentInput:
        data = {"name": "notes.txt", "file_type": "text/plain", "content": "some text"}
        data.update(overrides)
        return DocumentInput(**data)

    return _make


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(max_payload_bytes=64 * 1024, cors_origins=["http://localhost:5173"])


@pytest.fixture
def app(app_settings: AppSettings):
    return create_app(app_settings=app_settings, db_settings=make_sqlite_memory_settings())


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """TestClient with startup/shutdown executed, so the DB engine is attached."""
    with TestClient(app) as c:
        yield c
