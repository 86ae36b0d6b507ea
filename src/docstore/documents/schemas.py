"""Wire models for documents.

Python attributes are snake_case; JSON uses the camelCase names the front-end
already speaks (``fileType``, ``uploadDate``, ``deletedFileId``).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DocumentInput(CamelModel):
    """One file in an upload request.

    Fields are optional so that the service, not the parser, reports missing
    fields: one 400 naming the item index and every absent field.
    """

    content: Optional[str] = Field(None, description="Full text payload")
    file_type: Optional[str] = Field(None, description="MIME type, e.g. text/plain")
    name: Optional[str] = Field(None, description="Original filename")
    upload_date: Optional[datetime] = Field(None, description="Defaults to creation time")

    def missing_fields(self) -> list[str]:
        return [
            alias
            for alias, value in (
                ("content", self.content),
                ("fileType", self.file_type),
                ("name", self.name),
            )
            if not value
        ]


class DocumentMetadata(CamelModel):
    id: uuid.UUID = Field(..., description="Document ID")
    name: str = Field(..., description="Original filename")
    file_type: str = Field(..., description="MIME type")
    upload_date: datetime = Field(..., description="Upload timestamp")


class DocumentOut(DocumentMetadata):
    content: str = Field(..., description="Full text payload")

    def metadata(self) -> DocumentMetadata:
        return DocumentMetadata.model_validate(self.model_dump(exclude={"content"}))


class UploadRequest(CamelModel):
    files: Optional[list[DocumentInput]] = None


class UploadResponse(CamelModel):
    message: str
    files: list[DocumentMetadata]


class DeleteResponse(CamelModel):
    message: str
    deleted_file_id: uuid.UUID
