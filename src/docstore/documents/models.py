from __future__ import annotations

import datetime as dt

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docstore.db.base import Base, UTCDateTime, UUIDMixin


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Document(UUIDMixin, Base):
    """A stored text payload and its metadata. Rows are never updated."""

    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    upload_date: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False, index=True
    )


# Everything except `content`; list and search select only these.
METADATA_COLUMNS = (
    Document.id,
    Document.name,
    Document.file_type,
    Document.upload_date,
)
