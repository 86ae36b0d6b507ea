from __future__ import annotations

import functools
import logging
import uuid
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docstore.db.base import as_utc
from docstore.exceptions import StoreError, ValidationError

from .models import METADATA_COLUMNS, Document, utcnow
from .schemas import DocumentInput, DocumentMetadata, DocumentOut
from .search import content_matches, normalize_term

logger = logging.getLogger(__name__)

T = TypeVar("T")

DocumentId = Union[str, uuid.UUID]


def _translate_errors(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await fn(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StoreError(f"{fn.__name__} failed: {exc}") from exc

    return wrapper


def parse_id(raw: DocumentId) -> Optional[uuid.UUID]:
    """UUID for a well-formed id, None for anything else."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (ValueError, TypeError, AttributeError):
        return None


class DocumentStore:
    """CRUD primitives over the ``documents`` table for one session.

    - ``insert`` assigns the id and, when missing, the upload date.
    - ``list_all`` and ``find_by_content_substring`` never load ``content``.
    - Lookups by a malformed id behave exactly like lookups by an unknown one.
    - Driver failures surface as :class:`StoreError`.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @_translate_errors
    async def insert(self, record: DocumentInput) -> DocumentOut:
        missing = record.missing_fields()
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

        obj = Document(
            id=uuid.uuid4(),
            name=record.name,
            file_type=record.file_type,
            content=record.content,
            upload_date=as_utc(record.upload_date) if record.upload_date else utcnow(),
        )
        self.session.add(obj)
        await self.session.flush()
        logger.debug("Inserted document %s (%s)", obj.id, obj.name)
        return DocumentOut.model_validate(obj)

    @_translate_errors
    async def list_all(self) -> list[DocumentMetadata]:
        stmt = select(*METADATA_COLUMNS).order_by(Document.upload_date, Document.id)
        rows = (await self.session.execute(stmt)).mappings().all()
        return [DocumentMetadata.model_validate(dict(row)) for row in rows]

    @_translate_errors
    async def find_by_id(self, id: DocumentId) -> Optional[DocumentOut]:
        doc_id = parse_id(id)
        if doc_id is None:
            logger.debug("Malformed document id %r treated as not found", id)
            return None
        obj = await self.session.get(Document, doc_id)
        return DocumentOut.model_validate(obj) if obj is not None else None

    @_translate_errors
    async def find_by_content_substring(self, term: Optional[str]) -> list[DocumentMetadata]:
        normalized = normalize_term(term)
        if normalized is None:
            return await self.list_all()
        stmt = (
            select(*METADATA_COLUMNS)
            .where(content_matches(normalized))
            .order_by(Document.upload_date, Document.id)
        )
        rows = (await self.session.execute(stmt)).mappings().all()
        return [DocumentMetadata.model_validate(dict(row)) for row in rows]

    @_translate_errors
    async def delete_by_id(self, id: DocumentId) -> Optional[DocumentOut]:
        doc_id = parse_id(id)
        if doc_id is None:
            return None
        obj = await self.session.get(Document, doc_id)
        if obj is None:
            return None
        deleted = DocumentOut.model_validate(obj)
        await self.session.delete(obj)
        await self.session.flush()
        logger.debug("Deleted document %s", doc_id)
        return deleted
