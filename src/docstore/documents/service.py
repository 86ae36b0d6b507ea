from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from docstore.db.engine import DBEngine
from docstore.db.uow import UnitOfWork
from docstore.exceptions import EmptyBatchError, NotFoundError, StoreError, ValidationError

from .schemas import DocumentInput, DocumentMetadata, DocumentOut
from .store import DocumentId, DocumentStore

logger = logging.getLogger(__name__)


class DocumentService:
    """Request-shaped operations over the document store.

    Each call runs in its own unit of work. Reads never commit; an upload batch
    commits once, after every item is inserted, so a failing item leaves nothing
    behind.
    """

    def __init__(self, engine: DBEngine):
        self._engine = engine

    @asynccontextmanager
    async def _store(self, *, read_only: bool = False) -> AsyncIterator[DocumentStore]:
        try:
            async with UnitOfWork(self._engine, commit_on_success=not read_only) as uow:
                yield DocumentStore(uow.session)
        except SQLAlchemyError as exc:
            # commit/rollback failures happen outside the store's own calls
            raise StoreError(f"transaction failed: {exc}") from exc

    @staticmethod
    def _validate(items: Sequence[DocumentInput]) -> None:
        problems = []
        for index, item in enumerate(items):
            missing = item.missing_fields()
            if missing:
                problems.append(f"files[{index}]: missing {', '.join(missing)}")
        if problems:
            raise ValidationError(
                "Invalid file payload: " + "; ".join(problems),
                extra={"errors": problems},
            )

    async def upload_batch(self, items: Optional[Sequence[DocumentInput]]) -> list[DocumentMetadata]:
        if not items:
            raise EmptyBatchError()
        self._validate(items)

        created: list[DocumentMetadata] = []
        async with self._store() as store:
            for item in items:
                doc = await store.insert(item)
                created.append(doc.metadata())
        logger.info("Saved %d document(s)", len(created))
        return created

    async def list_all(self) -> list[DocumentMetadata]:
        async with self._store(read_only=True) as store:
            return await store.list_all()

    async def search(self, term: Optional[str]) -> list[DocumentMetadata]:
        async with self._store(read_only=True) as store:
            return await store.find_by_content_substring(term)

    async def get_content(self, id: DocumentId) -> DocumentOut:
        async with self._store(read_only=True) as store:
            doc = await store.find_by_id(id)
        if doc is None:
            raise NotFoundError()
        return doc

    async def remove(self, id: DocumentId) -> DocumentMetadata:
        async with self._store() as store:
            doc = await store.delete_by_id(id)
        if doc is None:
            raise NotFoundError()
        logger.info("Deleted document %s", doc.id, extra={"document_id": doc.id})
        return doc.metadata()
